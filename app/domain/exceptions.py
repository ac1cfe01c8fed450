"""Centralized exception hierarchy for Vatika.

All domain and service exceptions inherit from :class:`VatikaError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    VatikaError (base: maps to 500)
    ├── ValidationError                  (400: bad input from caller)
    ├── NotFoundError                    (404: entity does not exist)
    ├── ServiceError                     (500: business-logic failure)
    │   ├── ProcessingError              (500: unexpected answer-pipeline fault)
    │   └── ExternalServiceError         (502: third-party / network)
    │       ├── ProviderError            (single LLM provider failed)
    │       │   └── ProviderConfigurationError (credential missing / placeholder)
    │       └── CatalogError             (plant catalog fetch failed)
    └── ConfigurationError               (500: missing / invalid config)
"""

from __future__ import annotations


class VatikaError(Exception):
    """Base exception for all Vatika application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the exception class opts in).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(VatikaError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class NotFoundError(VatikaError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


# ── Server errors (5xx) ──────────────────────────────────────────────


class ServiceError(VatikaError):
    """Business-logic failure in a service method (HTTP 500)."""

    http_status: int = 500


class ProcessingError(ServiceError):
    """Unexpected internal fault while resolving an answer (HTTP 500)."""

    http_status: int = 500


class ExternalServiceError(ServiceError):
    """Third-party or network dependency failure (HTTP 502)."""

    http_status: int = 502


class ProviderError(ExternalServiceError):
    """A single LLM provider could not produce an answer.

    Recovered locally by the fallback resolver; never surfaced to HTTP
    clients directly.
    """

    def __init__(self, message: str = "", *, provider: str = "", detail: dict | None = None) -> None:
        super().__init__(message, detail=detail)
        self.provider = provider


class ProviderConfigurationError(ProviderError):
    """Provider credential is absent or still set to a placeholder value."""


class CatalogError(ExternalServiceError):
    """Remote plant catalog fetch failed or returned empty / malformed data."""


class ConfigurationError(VatikaError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
