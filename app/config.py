"""
Configuration for Vatika
========================
Main application runtime settings loaded from environment variables:
LLM provider credentials, catalog endpoint, state directory and the
development/production switch. Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any, Iterable

DEVELOPMENT = "development"
PRODUCTION = "production"
SUPPORTED_SECONDARY_PROVIDERS = ("gemini", "anthropic")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def is_placeholder_credential(value: str | None, placeholders: Iterable[str] = ()) -> bool:
    """``True`` when *value* is blank or one of the known placeholder strings."""
    if value is None or not value.strip():
        return True
    return value.strip() in set(placeholders)


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("VATIKA_ENV", PRODUCTION))
    DEBUG: bool = field(default_factory=lambda: _env_bool("VATIKA_DEBUG", False))
    log_file: str = field(default_factory=lambda: os.getenv("VATIKA_LOG_FILE", "logs/vatika.log"))

    # LLM providers: primary is always OpenAI, secondary is selectable
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    openai_model: str = field(default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-4o-mini"))
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"))
    anthropic_api_key: str = field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""))
    anthropic_model: str = field(
        default_factory=lambda: os.getenv("ANTHROPIC_MODEL", "claude-3-5-haiku-latest")
    )
    secondary_provider: str = field(default_factory=lambda: os.getenv("VATIKA_SECONDARY_PROVIDER", "gemini"))
    llm_timeout: int = field(default_factory=lambda: _env_int("LLM_TIMEOUT", 30))

    # Plant catalog
    catalog_url: str = field(
        default_factory=lambda: os.getenv("VATIKA_CATALOG_URL", "http://localhost:3000/api/plants")
    )
    catalog_timeout: int = field(default_factory=lambda: _env_int("VATIKA_CATALOG_TIMEOUT", 10))

    # Persisted store subset (bookmarks, daily plant) lives here
    state_dir: str = field(default_factory=lambda: os.getenv("VATIKA_STATE_DIR", "var"))

    def __post_init__(self) -> None:
        self.environment = (self.environment or PRODUCTION).strip().lower()
        self.secondary_provider = (self.secondary_provider or "gemini").strip().lower()

    @property
    def is_development(self) -> bool:
        """Degraded sample answers are only served in development."""
        return self.environment == DEVELOPMENT

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "DEBUG": self.DEBUG,
            "CATALOG_URL": self.catalog_url,
            "STATE_DIR": self.state_dir,
        }


# ==================== CONFIGURATION VALIDATION ====================


def validate_ai_config(config: AppConfig) -> list[str]:
    """
    Validate AI provider configuration and return list of warnings.

    Args:
        config: AppConfig instance

    Returns:
        List of warning messages (empty if all valid)
    """
    from app.services.ai.llm_backends import (
        AnthropicBackend,
        GeminiBackend,
        OpenAIBackend,
    )

    warnings = []

    if is_placeholder_credential(config.openai_api_key, OpenAIBackend.PLACEHOLDER_KEYS):
        warnings.append("OPENAI_API_KEY is missing or still set to a placeholder value")

    if config.secondary_provider not in SUPPORTED_SECONDARY_PROVIDERS:
        warnings.append(
            f"Unknown secondary provider '{config.secondary_provider}'. "
            f"Supported: {', '.join(SUPPORTED_SECONDARY_PROVIDERS)}"
        )
    elif config.secondary_provider == "gemini":
        if is_placeholder_credential(config.gemini_api_key, GeminiBackend.PLACEHOLDER_KEYS):
            warnings.append("GEMINI_API_KEY is missing or still set to a placeholder value")
    elif is_placeholder_credential(config.anthropic_api_key, AnthropicBackend.PLACEHOLDER_KEYS):
        warnings.append("ANTHROPIC_API_KEY is missing or still set to a placeholder value")

    if config.llm_timeout <= 0:
        warnings.append(f"LLM timeout ({config.llm_timeout}s) must be positive")

    return warnings


def setup_logging(debug: bool = False, log_file: str | None = "logs/vatika.log") -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    log_level = logging.DEBUG if debug else logging.INFO

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "vatika_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "vatika_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 to avoid UnicodeEncodeError on Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "vatika_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    # File handler
    if log_file and not has_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "vatika_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"vatika_console", "vatika_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info(f"Logging initialized at level: {logging.getLevelName(log_level)}")

    if _env_bool("VATIKA_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)

    # SDK request logs repeat every provider call at INFO
    for noisy in ("httpx", "openai", "anthropic", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    import logging

    logger = logging.getLogger("config_loader")
    config = AppConfig()

    for warning in validate_ai_config(config):
        logger.warning(warning)

    return config
