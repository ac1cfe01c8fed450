"""
LLM Backend Abstraction Layer
==============================
Pluggable answer-generating providers for the plant Q&A pipeline.

Supported backends
------------------
* **OpenAIBackend**: primary provider, ChatGPT via the ``openai`` SDK.
* **GeminiBackend**: default secondary provider, Google Gemini via its
  REST ``generateContent`` endpoint.
* **AnthropicBackend**: alternative secondary provider, Claude via the
  ``anthropic`` SDK.

Every backend exposes the same single capability,
:meth:`LLMBackend.generate`, so the fallback resolver never needs to know
which concrete provider it is talking to.  Sampling parameters are fixed
per backend and are not exposed to callers.

SDKs are imported lazily inside :meth:`initialize` so the module never
breaks at import time when a particular SDK is missing.

Quick-start
-----------
::

    from app.services.ai.llm_backends import OpenAIBackend

    backend = OpenAIBackend(api_key="sk-...")
    text = backend.generate("Tell me about Neem (Azadirachta indica).")
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import requests

from app.config import is_placeholder_credential
from app.domain.exceptions import ProviderConfigurationError, ProviderError

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 1000


# ---------------------------------------------------------------------------
# Abstract backend
# ---------------------------------------------------------------------------


class LLMBackend(ABC):
    """
    Abstract base for every LLM backend.

    Subclasses must implement :meth:`_connect`, :meth:`_complete`,
    :attr:`name` and declare :attr:`PLACEHOLDER_KEYS`.
    """

    #: Credential values shipped in sample ``.env`` files; treated as absent.
    PLACEHOLDER_KEYS: tuple[str, ...] = ()

    def __init__(self, api_key: str, model: str, timeout: int = 30):
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._client: Any = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for this backend (e.g. ``"openai"``)."""

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_configured(self) -> bool:
        """``True`` when a real (non-placeholder) credential is present."""
        return not is_placeholder_credential(self._api_key, self.PLACEHOLDER_KEYS)

    @property
    def is_available(self) -> bool:
        """``True`` when the backend has been initialised and is ready."""
        return self._client is not None

    def initialize(self) -> None:
        """
        Validate the credential and build the SDK client.

        Raises:
            ProviderConfigurationError: credential absent or a placeholder.
                Raised before any network traffic.
            ProviderError: the SDK is not installed or refused the settings.
        """
        if self.is_available:
            return
        if not self.is_configured:
            raise ProviderConfigurationError(
                f"Invalid {self.name} API key configuration",
                provider=self.name,
            )
        try:
            self._client = self._connect()
        except ImportError as exc:
            raise ProviderError(f"{self.name} SDK not installed: {exc}", provider=self.name) from exc
        except Exception as exc:
            raise ProviderError(f"{self.name} backend init failed: {exc}", provider=self.name) from exc
        logger.info("%s backend initialised (model=%s)", self.name, self._model)

    def generate(self, prompt: str) -> str:
        """
        Generate a text answer for *prompt*.

        Returns:
            Non-empty answer text.

        Raises:
            ProviderConfigurationError: credential absent or a placeholder.
            ProviderError: transport, authentication, refusal, or empty content.
        """
        self.initialize()
        try:
            text, latency = self._timed(self._complete, prompt)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(f"{self.name} request failed: {exc}", provider=self.name) from exc

        if not text or not text.strip():
            raise ProviderError(f"No content from {self.name}", provider=self.name)

        logger.debug("%s answered in %.0f ms (%d chars)", self.name, latency, len(text))
        return text

    @abstractmethod
    def _connect(self) -> Any:
        """Build and return the provider client."""

    @abstractmethod
    def _complete(self, prompt: str) -> str:
        """Run one completion against the provider and return its text."""

    # -- helpers available to all backends ----------------------------------

    def _timed(self, fn, *args, **kwargs):
        """Call *fn* and return ``(result, elapsed_ms)``."""
        t0 = time.perf_counter()
        result = fn(*args, **kwargs)
        return result, (time.perf_counter() - t0) * 1000

    def _refused(self, reason: str) -> ProviderError:
        return ProviderError(f"{self.name} declined to answer: {reason}", provider=self.name)


# ---------------------------------------------------------------------------
# OpenAI backend  (primary)
# ---------------------------------------------------------------------------


class OpenAIBackend(LLMBackend):
    """
    Backend for OpenAI's Chat Completions API.

    Requires the ``openai`` package (``pip install openai``).

    Parameters
    ----------
    api_key:
        OpenAI API key.
    model:
        Model identifier (default ``gpt-4o-mini``).
    base_url:
        Optional custom endpoint (e.g. Azure OpenAI or compatible proxy).
    timeout:
        Request timeout in seconds.
    """

    PLACEHOLDER_KEYS = ("sk-REAL_OPENAI_API_KEY_HERE",)

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout: int = 30,
    ):
        super().__init__(api_key, model, timeout)
        self._base_url = base_url

    @property
    def name(self) -> str:
        return "openai"

    def _connect(self) -> Any:
        import openai

        kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "timeout": self._timeout,
            # Retry-by-substitution belongs to the fallback resolver
            "max_retries": 0,
        }
        if self._base_url:
            kwargs["base_url"] = self._base_url
        return openai.OpenAI(**kwargs)

    def _complete(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=TEMPERATURE,
            max_tokens=MAX_OUTPUT_TOKENS,
        )
        if not response.choices:
            return ""

        message = response.choices[0].message
        refusal = getattr(message, "refusal", None)
        if refusal:
            raise self._refused(refusal)
        return message.content or ""


# ---------------------------------------------------------------------------
# Gemini backend  (secondary, REST)
# ---------------------------------------------------------------------------


class GeminiBackend(LLMBackend):
    """
    Backend for Google's Gemini ``generateContent`` REST endpoint.

    Uses a plain ``requests.Session``; no Google SDK is required.

    Parameters
    ----------
    api_key:
        Google AI Studio API key.
    model:
        Model identifier (default ``gemini-2.0-flash``).
    timeout:
        Request timeout in seconds.
    session:
        Optional pre-built session (tests inject a mock here).
    """

    PLACEHOLDER_KEYS = ("REAL_GOOGLE_API_KEY_HERE",)
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        super().__init__(api_key, model, timeout)
        self._session = session

    @property
    def name(self) -> str:
        return "gemini"

    def _connect(self) -> Any:
        session = self._session or requests.Session()
        session.headers.update({"Content-Type": "application/json", "X-goog-api-key": self._api_key})
        return session

    def _complete(self, prompt: str) -> str:
        url = f"{self.BASE_URL}/{self._model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
            },
        }
        resp = self._client.post(url, json=payload, timeout=self._timeout)
        resp.raise_for_status()
        result = resp.json()

        block_reason = (result.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise self._refused(block_reason)

        candidates = result.get("candidates") or []
        if not candidates:
            return ""
        candidate = candidates[0]
        if candidate.get("finishReason") == "SAFETY":
            raise self._refused("SAFETY")

        parts = (candidate.get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


# ---------------------------------------------------------------------------
# Anthropic backend  (alternative secondary)
# ---------------------------------------------------------------------------


class AnthropicBackend(LLMBackend):
    """
    Backend for Anthropic's Messages API.

    Requires the ``anthropic`` package (``pip install anthropic``).

    Parameters
    ----------
    api_key:
        Anthropic API key.
    model:
        Model identifier (default ``claude-3-5-haiku-latest``).
    timeout:
        Request timeout in seconds.
    """

    PLACEHOLDER_KEYS = ("REAL_ANTHROPIC_API_KEY_HERE",)

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-haiku-latest",
        timeout: int = 30,
    ):
        super().__init__(api_key, model, timeout)

    @property
    def name(self) -> str:
        return "anthropic"

    def _connect(self) -> Any:
        import anthropic

        return anthropic.Anthropic(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=0,
        )

    def _complete(self, prompt: str) -> str:
        response = self._client.messages.create(
            model=self._model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )
        if getattr(response, "stop_reason", None) == "refusal":
            raise self._refused("refusal")

        return "".join(getattr(block, "text", "") for block in response.content or [])


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_backend(
    provider: str,
    *,
    api_key: str = "",
    model: str = "",
    base_url: str | None = None,
    timeout: int = 30,
) -> LLMBackend:
    """
    Factory: create the right backend from a provider name.

    The backend is *not* initialised here; credential checks happen on
    first :meth:`LLMBackend.generate` so a misconfigured provider shows up
    as a provider failure instead of breaking application start-up.

    Parameters
    ----------
    provider:
        One of ``"openai"``, ``"gemini"`` or ``"anthropic"``.

    Raises
    ------
    ValueError
        For an unknown provider name.
    """
    provider = provider.strip().lower()

    if provider == "openai":
        return OpenAIBackend(
            api_key=api_key,
            model=model or "gpt-4o-mini",
            base_url=base_url,
            timeout=timeout,
        )
    if provider == "gemini":
        return GeminiBackend(
            api_key=api_key,
            model=model or "gemini-2.0-flash",
            timeout=timeout,
        )
    if provider == "anthropic":
        return AnthropicBackend(
            api_key=api_key,
            model=model or "claude-3-5-haiku-latest",
            timeout=timeout,
        )
    raise ValueError(f"Unknown LLM provider '{provider}'")
