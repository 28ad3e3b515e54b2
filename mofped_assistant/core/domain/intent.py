"""Intent classification models."""

from dataclasses import dataclass, field
from enum import Enum


class Intent(Enum):
    """Coarse category of user need used to pick a handler.

    Declaration order is also the score tie-break order.
    """

    LOCATION = "location"
    DOCUMENT = "document"
    CONTACT = "contact"
    SERVICE = "service"


@dataclass(frozen=True)
class IntentClassification:
    """Result of classifying a single query."""

    intent: Intent
    confidence: float
    keywords: list[str] = field(default_factory=list)
