"""The structured response returned for every query."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .intent import Intent


class GuardrailStatus(Enum):
    """Whether a response is grounded (ok), empty (not_found) or failed (error)."""

    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"


class OptionAction:
    """Action tags attached to follow-up options."""

    EXTERNAL = "external"
    CONTACT = "contact"
    INFO = "info"
    DOCUMENT = "document"
    LOCATION = "location"


@dataclass(frozen=True)
class SourceRef:
    """A citation shown under the answer."""

    title: str
    url: str
    category: str | None = None


@dataclass(frozen=True)
class ResponseOption:
    """A suggested follow-up.

    ``payload`` is a URL to open for ``external`` actions, otherwise a canned
    query to resubmit.
    """

    label: str
    action: str
    payload: str


@dataclass(frozen=True)
class Response:
    """Answer to a query. Optional fields default to empty rather than absent."""

    summary: str
    guardrail_status: GuardrailStatus
    sources: tuple[SourceRef, ...] = ()
    options: tuple[ResponseOption, ...] = ()
    intent: Intent | None = None
    confidence: float | None = None

    def with_intent(self, intent: Intent, confidence: float) -> "Response":
        """Return a copy tagged with the handler's intent and confidence."""
        return Response(
            summary=self.summary,
            guardrail_status=self.guardrail_status,
            sources=self.sources,
            options=self.options,
            intent=intent,
            confidence=confidence,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "sources": [
                {"title": s.title, "url": s.url, "category": s.category} for s in self.sources
            ],
            "guardrail_status": self.guardrail_status.value,
            "options": [
                {"label": o.label, "action": o.action, "payload": o.payload} for o in self.options
            ],
            "intent": self.intent.value if self.intent else None,
            "confidence": self.confidence,
        }
