from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import AppConfig
from app.domain.exceptions import CatalogError, ConfigurationError
from app.services.ai.answer_service import PlantAnswerService
from app.services.ai.fallback_resolver import FallbackResolver
from app.services.ai.llm_backends import LLMBackend, create_backend
from app.services.application.catalog_client import HttpCatalogClient
from app.services.application.plant_store import STORAGE_NAME, PlantStore
from app.utils.persistent_store import JsonStateStore

logger = logging.getLogger(__name__)


def build_backends(config: AppConfig) -> list[LLMBackend]:
    """Primary (OpenAI) first, then the configured secondary provider."""
    secondary_keys = {
        "gemini": (config.gemini_api_key, config.gemini_model),
        "anthropic": (config.anthropic_api_key, config.anthropic_model),
    }
    if config.secondary_provider not in secondary_keys:
        raise ConfigurationError(f"Unknown secondary provider '{config.secondary_provider}'")

    api_key, model = secondary_keys[config.secondary_provider]
    return [
        create_backend(
            "openai",
            api_key=config.openai_api_key,
            model=config.openai_model,
            timeout=config.llm_timeout,
        ),
        create_backend(
            config.secondary_provider,
            api_key=api_key,
            model=model,
            timeout=config.llm_timeout,
        ),
    ]


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    answer_service: PlantAnswerService
    catalog_client: HttpCatalogClient
    plant_store: PlantStore

    @classmethod
    def build(cls, config: AppConfig, *, initialize_store: bool = False) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            initialize_store: Fetch the plant catalog before returning
        """
        logger.info("Building ServiceContainer...")

        resolver = FallbackResolver(build_backends(config))
        answer_service = PlantAnswerService(resolver, development=config.is_development)
        logger.info(
            "✓ Answer service ready (providers=%s, development=%s)",
            " → ".join(resolver.provider_names),
            config.is_development,
        )

        catalog_client = HttpCatalogClient(config.catalog_url, timeout=config.catalog_timeout)
        plant_store = PlantStore(
            catalog_client,
            JsonStateStore(STORAGE_NAME, directory=config.state_dir),
        )

        container = cls(
            config=config,
            answer_service=answer_service,
            catalog_client=catalog_client,
            plant_store=plant_store,
        )

        if initialize_store:
            try:
                container.plant_store.initialize()
            except CatalogError as exc:
                # Q&A does not need the catalog; POST /api/plants/initialize retries
                logger.error("Plant catalog unavailable at startup: %s", exc)

        logger.info("ServiceContainer built successfully.")
        return container
