"""
Domain Package
==============
Plant records and the application exception hierarchy.
"""

from .exceptions import (
    CatalogError,
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ProcessingError,
    ProviderConfigurationError,
    ProviderError,
    ServiceError,
    ValidationError,
    VatikaError,
)
from .plant import Plant

__all__ = [
    "Plant",
    # Errors
    "VatikaError",
    "ValidationError",
    "NotFoundError",
    "ServiceError",
    "ProcessingError",
    "ExternalServiceError",
    "ProviderError",
    "ProviderConfigurationError",
    "CatalogError",
    "ConfigurationError",
]
