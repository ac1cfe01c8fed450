"""
Plant Answer Service
====================
Answers free-form questions about a plant, or produces general insights,
by dispatching a prompt through a :class:`FallbackResolver`.

Per call the service moves through::

    VALIDATING → RESOLVING → SUCCEEDED
                           → DEGRADING → SUCCEEDED   (development only)
                           → FAILING

When every provider fails, development deployments get a deterministic
sample answer so the UI keeps working without credentials; every other
environment gets a ``service-unavailable`` failure envelope.

Usage
-----
::

    service = PlantAnswerService(resolver, development=False)
    envelope = service.answer(
        AnswerRequest(
            plant_name="Neem",
            scientific_name="Azadirachta indica",
            question="Is it safe for children?",
        )
    )
    payload, status = envelope.to_dict(), envelope.http_status
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from app.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from app.services.ai.fallback_resolver import FallbackResolver

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


class AnswerKind(str, Enum):
    QA = "qa"
    INSIGHTS = "insights"


class FailureKind(str, Enum):
    """Classification attached to failure envelopes."""

    VALIDATION = "validation"
    SERVICE_UNAVAILABLE = "service-unavailable"
    PROCESSING_ERROR = "processing-error"


class AnswerState(str, Enum):
    VALIDATING = "validating"
    RESOLVING = "resolving"
    DEGRADING = "degrading"
    SUCCEEDED = "succeeded"
    FAILING = "failing"


_FAILURE_STATUS = {
    FailureKind.VALIDATION: 400,
    FailureKind.SERVICE_UNAVAILABLE: 503,
    FailureKind.PROCESSING_ERROR: 500,
}


@dataclass
class AnswerRequest:
    """Everything needed to answer one question about one plant."""

    plant_name: str | None
    scientific_name: str | None
    question: str | None = None
    kind: AnswerKind = AnswerKind.QA


@dataclass
class AnswerEnvelope:
    """Either answer text or a structured failure, never both."""

    data: str | None = None
    error: str | None = None
    details: str | None = None
    failure: FailureKind | None = None
    source: str | None = None  # provider name, "sample", or None on failure

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def http_status(self) -> int:
        if self.failure is None:
            return 200
        return _FAILURE_STATUS[self.failure]

    @classmethod
    def success(cls, text: str, source: str) -> "AnswerEnvelope":
        return cls(data=text, source=source)

    @classmethod
    def failed(cls, failure: FailureKind, error: str, details: str | None = None) -> "AnswerEnvelope":
        return cls(error=error, details=details, failure=failure)

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"data": self.data}
        body: dict[str, Any] = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


# ---------------------------------------------------------------------------
# Prompt & sample text
# ---------------------------------------------------------------------------


def build_prompt(request: AnswerRequest) -> str:
    """Deterministic provider prompt for *request*."""
    subject = f"{request.plant_name.strip()} ({request.scientific_name.strip()})"

    if request.kind == AnswerKind.INSIGHTS:
        return (
            f"Provide detailed insights about {subject}.\n"
            "Cover its medicinal properties, traditional uses, cultivation "
            "conditions, and any safety precautions. Keep the answer factual "
            "and organised under short headings."
        )

    return (
        f"You are a knowledgeable botanist and herbalist. Answer the question "
        f"below about {subject}.\n"
        "Be accurate and concise, and mention safety precautions where relevant.\n\n"
        f"Question: {request.question.strip()}"
    )


def sample_answer(plant_name: str, scientific_name: str, question: str | None = None) -> str:
    """Placeholder answer served when no provider is reachable in development."""
    lines = [
        f"Here is some information about {plant_name} ({scientific_name}):",
        "",
        "Medicinal Properties:",
        "- Anti-inflammatory",
        "- Antioxidant properties",
        "- Digestive aid",
        "",
        "Traditional Uses:",
        "- Used in traditional medicine for digestive issues",
        "- Applied topically for skin conditions",
        "- Consumed as a tea for relaxation",
        "",
    ]
    if question:
        lines += [
            f'Regarding your question: "{question}"',
            "This is a sample response as the AI service is currently unavailable.",
            "Please ensure you have valid API keys configured.",
            "",
        ]
    lines.append(
        "Note: This is a sample response. Please configure valid API keys for actual AI-generated responses."
    )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PlantAnswerService:
    """
    Validate, resolve and normalise plant questions.

    Parameters
    ----------
    resolver:
        Provider chain to dispatch prompts through.
    development:
        Serve :func:`sample_answer` instead of a failure when every provider
        fails.
    """

    def __init__(self, resolver: "FallbackResolver", *, development: bool = False):
        self._resolver = resolver
        self._development = development

    @property
    def development(self) -> bool:
        return self._development

    @property
    def provider_names(self) -> list[str]:
        return self._resolver.provider_names

    def answer(self, request: AnswerRequest) -> AnswerEnvelope:
        """
        Answer *request*.

        Raises:
            ValidationError: plant identity missing, an unknown ``kind``,
                or a ``qa`` request without a question.

        Returns:
            AnswerEnvelope: every non-validation problem is reported
            through the envelope, never raised.
        """
        request = self.normalize(request)
        self._transition(AnswerState.VALIDATING, request)
        self.validate(request)

        try:
            prompt = build_prompt(request)

            self._transition(AnswerState.RESOLVING, request)
            result = self._resolver.resolve(prompt)

            if result.succeeded and result.text:
                self._transition(AnswerState.SUCCEEDED, request)
                return AnswerEnvelope.success(result.text, result.provider)

            if self._development:
                self._transition(AnswerState.DEGRADING, request)
                logger.warning(
                    "All AI providers failed for %s; serving sample answer",
                    request.scientific_name,
                )
                text = sample_answer(
                    request.plant_name,
                    request.scientific_name,
                    request.question if request.kind is AnswerKind.QA else None,
                )
                self._transition(AnswerState.SUCCEEDED, request)
                return AnswerEnvelope.success(text, "sample")

            self._transition(AnswerState.FAILING, request)
            return AnswerEnvelope.failed(
                FailureKind.SERVICE_UNAVAILABLE,
                "AI service unavailable",
                "Failed to generate response from AI providers",
            )
        except Exception as exc:
            logger.error("Failed to process plant question: %s", exc, exc_info=True)
            self._transition(AnswerState.FAILING, request)
            return AnswerEnvelope.failed(FailureKind.PROCESSING_ERROR, "Failed to process request", str(exc))

    @staticmethod
    def normalize(request: AnswerRequest) -> AnswerRequest:
        """Return *request* with ``kind`` coerced to :class:`AnswerKind` (``"qa"`` is accepted)."""
        try:
            kind = AnswerKind(request.kind)
        except ValueError:
            raise ValidationError(f"unknown answer type '{request.kind}'") from None
        return replace(request, kind=kind)

    @staticmethod
    def validate(request: AnswerRequest) -> None:
        if not _present(request.plant_name) or not _present(request.scientific_name):
            raise ValidationError("plant identity required")
        if request.kind == AnswerKind.QA and not _present(request.question):
            raise ValidationError("question required")

    # -- internal -----------------------------------------------------------

    def _transition(self, state: AnswerState, request: AnswerRequest) -> None:
        logger.debug("answer[%s/%s] -> %s", request.scientific_name, request.kind.value, state.value)


def _present(value: str | None) -> bool:
    return isinstance(value, str) and bool(value.strip())
