"""Client helpers for calling the Vatika HTTP API."""

from app.clients.plant_ai import PlantAIClient

__all__ = ["PlantAIClient"]
