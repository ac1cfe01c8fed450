"""
Service Organization
====================
Services are organized by their lifecycle and instantiation pattern:

**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: PlantStore, HttpCatalogClient

**ai/**
  Plant Q&A: LLM backends, the ordered fallback resolver and the answer
  service that shapes results into HTTP envelopes.
"""

from .application.catalog_client import CatalogResponse, HttpCatalogClient
from .application.plant_store import PlantStore, PlantStoreState

__all__ = [
    "CatalogResponse",
    "HttpCatalogClient",
    "PlantStore",
    "PlantStoreState",
]
