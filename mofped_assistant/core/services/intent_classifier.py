"""Pure keyword-based intent classification."""

from __future__ import annotations

from ..domain import Intent, IntentClassification
from ..domain.utils import tokenize

LOCATION_KEYWORDS = [
    "where",
    "address",
    "location",
    "directions",
    "map",
    "office",
    "premises",
    "plot",
    "headquarters",
    "visit",
    "physical",
    "building",
    "street",
    "road",
    "how do i get there",
    "located",
    "situated",
    "find",
    "place",
]

DOCUMENT_KEYWORDS = [
    "show",
    "download",
    "form",
    "circular",
    "policy",
    "document",
    "paper",
    "budget framework",
    "nbfp",
    "pfma",
    "section",
    "regulation",
    "guideline",
    "manual",
    "procedure",
    "template",
    "application form",
    "report",
]

CONTACT_KEYWORDS = [
    "phone",
    "number",
    "email",
    "contact",
    "help desk",
    "support",
    "hotline",
    "call",
    "reach",
    "speak to",
    "talk to",
    "assistance",
    "help",
    "inquiry",
]

SERVICE_KEYWORDS = [
    "how to",
    "apply",
    "requirements",
    "process",
    "procedure",
    "steps",
    "application",
    "registration",
    "submit",
    "apply for",
    "get",
    "obtain",
    "processing time",
    "duration",
    "timeline",
    "deadline",
    "when",
    "schedule",
]

# Order matters: it is the tie-break order for equal scores.
KEYWORDS_BY_INTENT: dict[Intent, list[str]] = {
    Intent.LOCATION: LOCATION_KEYWORDS,
    Intent.DOCUMENT: DOCUMENT_KEYWORDS,
    Intent.CONTACT: CONTACT_KEYWORDS,
    Intent.SERVICE: SERVICE_KEYWORDS,
}

ALL_KEYWORDS = [kw for keywords in KEYWORDS_BY_INTENT.values() for kw in keywords]


def _matches_any(word: str, keywords: list[str]) -> bool:
    # Either side may contain the other; short tokens like "a" or "to" match
    # many keywords.
    return any(word in keyword or keyword in word for keyword in keywords)


class IntentClassifier:
    """Map a free-text query to one of four intents."""

    def matching_words(self, words: list[str], keywords: list[str]) -> list[str]:
        return [word for word in words if _matches_any(word, keywords)]

    def score(self, words: list[str]) -> dict[Intent, int]:
        """Number of query tokens matching each intent's keyword set."""
        return {
            intent: len(self.matching_words(words, keywords))
            for intent, keywords in KEYWORDS_BY_INTENT.items()
        }

    def _override(self, query_lower: str) -> tuple[Intent, float] | None:
        """Phrase rules checked before scoring; first match wins."""
        if "where is" in query_lower or (
            "address" in query_lower and "email" not in query_lower
        ):
            return Intent.LOCATION, 0.95

        if any(term in query_lower for term in ("phone", "email", "contact")):
            return Intent.CONTACT, 0.9

        if "find" in query_lower and any(
            term in query_lower for term in ("document", "policy", "form")
        ):
            return Intent.DOCUMENT, 0.9

        if any(term in query_lower for term in ("how to", "apply for", "requirements")):
            return Intent.SERVICE, 0.85

        if any(term in query_lower for term in ("download", "form", "circular")):
            return Intent.DOCUMENT, 0.9

        return None

    def classify(self, query: str) -> IntentClassification:
        """Classify a query. Never raises; ambiguous queries lean to ``document``."""
        query_lower = (query or "").lower()
        words = tokenize(query_lower)

        override = self._override(query_lower)
        if override:
            intent, confidence = override
            return IntentClassification(
                intent=intent,
                confidence=confidence,
                keywords=self.matching_words(words, KEYWORDS_BY_INTENT[intent]),
            )

        scores = self.score(words)
        max_score = max(scores.values())
        if max_score == 0:
            return IntentClassification(intent=Intent.DOCUMENT, confidence=0.3, keywords=[])

        # dicts keep insertion order, so the first intent with the max wins ties
        best = next(intent for intent, value in scores.items() if value == max_score)
        return IntentClassification(
            intent=best,
            confidence=min(0.9, 0.3 + max_score * 0.2),
            keywords=self.matching_words(words, ALL_KEYWORDS),
        )
