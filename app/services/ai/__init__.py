"""
AI Services
===========
LLM-backed answer pipeline for plant questions.

Services:
- LLMBackend: provider adapters (OpenAI, Gemini, Anthropic)
- FallbackResolver: ordered single-pass provider fallback
- PlantAnswerService: validation, prompt dispatch and response envelopes

All public symbols are importable via ``from app.services.ai import X``.
Imports are **lazy**: each submodule is loaded only when one of its
symbols is first accessed, so provider SDKs stay out of the import path
until a backend is actually used.
"""

from __future__ import annotations

import importlib
from typing import Any

# ── Symbol → submodule mapping ──────────────────────────────────────
# Keys are public symbol names; values are the dotted submodule path.
_LAZY_IMPORTS: dict[str, str] = {
    # answer_service
    "AnswerEnvelope": "app.services.ai.answer_service",
    "AnswerKind": "app.services.ai.answer_service",
    "AnswerRequest": "app.services.ai.answer_service",
    "FailureKind": "app.services.ai.answer_service",
    "PlantAnswerService": "app.services.ai.answer_service",
    "build_prompt": "app.services.ai.answer_service",
    "sample_answer": "app.services.ai.answer_service",
    # fallback_resolver
    "FallbackResolver": "app.services.ai.fallback_resolver",
    "ResolveResult": "app.services.ai.fallback_resolver",
    # llm_backends
    "AnthropicBackend": "app.services.ai.llm_backends",
    "GeminiBackend": "app.services.ai.llm_backends",
    "LLMBackend": "app.services.ai.llm_backends",
    "OpenAIBackend": "app.services.ai.llm_backends",
    "create_backend": "app.services.ai.llm_backends",
}

__all__ = list(_LAZY_IMPORTS.keys())


def __getattr__(name: str) -> Any:
    """Lazy-load symbols on first access."""
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = importlib.import_module(module_path)
    value = getattr(module, name)
    # Cache on the module so subsequent accesses skip __getattr__
    globals()[name] = value
    return value
