"""
Fallback Resolver
=================
Walks an ordered list of :class:`LLMBackend` instances and returns the first
non-empty answer.

* Backends are tried strictly in order, one at a time; the first success
  short-circuits the rest.
* A failing backend (transport error, bad credential, refusal, empty text)
  is logged and skipped. Nothing is raised to the caller.
* Each :meth:`FallbackResolver.resolve` call is a single pass: no backoff,
  no retry of a backend that already failed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from app.domain.exceptions import ProviderConfigurationError, ProviderError

if TYPE_CHECKING:
    from app.services.ai.llm_backends import LLMBackend

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Outcome of one resolver pass: success with text, or all backends failed."""

    text: str | None = None
    provider: str | None = None
    failures: list[tuple[str, str]] = field(default_factory=list)  # (provider, reason)

    @property
    def succeeded(self) -> bool:
        return self.text is not None

    @classmethod
    def success(cls, text: str, provider: str, failures: list[tuple[str, str]] | None = None) -> "ResolveResult":
        return cls(text=text, provider=provider, failures=list(failures or []))

    @classmethod
    def all_failed(cls, failures: list[tuple[str, str]]) -> "ResolveResult":
        return cls(failures=list(failures))


class FallbackResolver:
    """
    Try each backend in order until one produces text.

    Parameters
    ----------
    backends:
        Ordered, non-empty sequence of backends (primary first).
    """

    def __init__(self, backends: Sequence["LLMBackend"]):
        if not backends:
            raise ValueError("FallbackResolver requires at least one backend")
        self._backends = list(backends)

    @property
    def provider_names(self) -> list[str]:
        return [backend.name for backend in self._backends]

    def resolve(self, prompt: str) -> ResolveResult:
        failures: list[tuple[str, str]] = []

        for backend in self._backends:
            try:
                text = backend.generate(prompt)
            except ProviderConfigurationError as exc:
                logger.warning("Provider '%s' not configured: %s", backend.name, exc)
                failures.append((backend.name, str(exc)))
                continue
            except ProviderError as exc:
                logger.warning("Provider '%s' failed: %s", backend.name, exc)
                failures.append((backend.name, str(exc)))
                continue
            except Exception as exc:
                logger.error("Provider '%s' raised unexpectedly: %s", backend.name, exc, exc_info=True)
                failures.append((backend.name, str(exc)))
                continue

            if not text or not text.strip():
                logger.warning("Provider '%s' returned empty text", backend.name)
                failures.append((backend.name, "empty response"))
                continue

            if failures:
                logger.info("Answered by fallback provider '%s' after %d failure(s)", backend.name, len(failures))
            return ResolveResult.success(text, backend.name, failures)

        logger.error("All providers failed: %s", ", ".join(name for name, _ in failures))
        return ResolveResult.all_failed(failures)
