"""Deterministic answer synthesis from ranked search results.

The synthesizer never adds facts of its own. Apart from the static
external-system cards (configuration data), everything in a summary is copied
from the results it was given.
"""

import logging

from ..domain import (
    DocumentCategory,
    DocumentResult,
    ExternalSystem,
    ExternalSystemCatalog,
    GuardrailStatus,
    Response,
    ResponseOption,
    SourceRef,
)
from ..domain.utils import truncate

logger = logging.getLogger(__name__)

CONTACT_INTENT_WORDS = ("contact", "phone", "email", "number", "support")

# Number of results listed by title in a generic summary.
KEY_DOCUMENT_COUNT = 3
DESCRIPTION_PREVIEW_CHARS = 100


def has_contact_intent(query: str) -> bool:
    query_lower = query.lower()
    return any(word in query_lower for word in CONTACT_INTENT_WORDS)


class ResponseSynthesizer:
    """Builds a :class:`Response` from a query and its search results.

    Decision order:

    1. No results: ``not_found`` with a suggestion to browse categories.
    2. A known external system plus a contact word: the system's contact card.
    3. A known external system otherwise: its information card and options.
    4. Anything else: a generic summary of the results.
    """

    def __init__(self, catalog: ExternalSystemCatalog, site_name: str = "finance.go.ug") -> None:
        """Initialize the synthesizer.

        Args:
            catalog: Static external-system facts.
            site_name: Site named in summaries.
        """
        self.catalog = catalog
        self.site_name = site_name

    def not_found(self) -> Response:
        return Response(
            summary=(
                f"I couldn't find any relevant documents on {self.site_name} for your query. "
                "Try searching for different terms or browse our document categories."
            ),
            guardrail_status=GuardrailStatus.NOT_FOUND,
        )

    @staticmethod
    def _portal_source(system: ExternalSystem) -> SourceRef:
        return SourceRef(
            title=system.name,
            url=system.portal_url,
            category=DocumentCategory.EXTERNAL_SYSTEMS,
        )

    @staticmethod
    def _find_source(
        system: ExternalSystem, results: list[DocumentResult], category: str
    ) -> SourceRef | None:
        for result in results:
            if result.category == category and system.mentioned_in(result.title):
                return SourceRef(title=result.title, url=result.url, category=result.category)
        return None

    def contact_card(self, system: ExternalSystem, results: list[DocumentResult]) -> Response:
        contact = system.contact
        lines = [f"Here's the {contact.title} information:", "", f"**{contact.title}**"]
        if contact.phone:
            lines.append(f"Phone: {contact.phone}")
        if contact.email:
            lines.append(f"Email: {contact.email}")
        if contact.note:
            lines.extend(["", contact.note])

        source = self._find_source(system, results, DocumentCategory.CONTACT_INFORMATION)
        return Response(
            summary="\n".join(lines),
            guardrail_status=GuardrailStatus.OK,
            sources=(source or self._portal_source(system),),
        )

    def info_card(self, system: ExternalSystem, results: list[DocumentResult]) -> Response:
        summary = f"I found information about the **{system.name}**. What would you like to know?"
        if system.info_points:
            summary += "\n\n" + "\n".join(f"• {point}" for point in system.info_points)

        source = self._find_source(system, results, DocumentCategory.EXTERNAL_SYSTEMS)
        return Response(
            summary=summary,
            guardrail_status=GuardrailStatus.OK,
            sources=(source or self._portal_source(system),),
            options=tuple(
                ResponseOption(label=o.label, action=o.action, payload=o.payload)
                for o in system.options
            ),
        )

    def summarize(self, results: list[DocumentResult]) -> Response:
        """Generic summary listing result count, categories and top titles."""
        count = len(results)
        plural = "s" if count > 1 else ""
        parts = [f"I found {count} relevant document{plural} on {self.site_name}:"]

        # dict keeps first-seen order
        categories = list(dict.fromkeys(r.category or DocumentCategory.OTHER for r in results))
        if len(categories) == 1:
            parts.append(f'All documents are in the "{categories[0]}" category.')
        else:
            parts.append(f"Documents are categorized as: {', '.join(categories)}.")

        bullets = ["Key documents include:"]
        for result in results[:KEY_DOCUMENT_COUNT]:
            line = f"• {result.title}"
            if result.description:
                line += f" - {truncate(result.description, DESCRIPTION_PREVIEW_CHARS)}"
            bullets.append(line)
        parts.append("\n".join(bullets))

        parts.append("Click on the links below to view the full documents.")

        return Response(
            summary="\n\n".join(parts),
            guardrail_status=GuardrailStatus.OK,
            sources=tuple(
                SourceRef(title=r.title, url=r.url, category=r.category) for r in results
            ),
        )

    def generate(self, query: str, results: list[DocumentResult]) -> Response:
        """Synthesize the response for ``query`` from ranked ``results``."""
        if not results:
            return self.not_found()

        system = self.catalog.find_mentioned(query)
        if system is not None:
            if has_contact_intent(query) and system.contact is not None:
                logger.debug("Contact card for %s", system.key)
                return self.contact_card(system, results)
            if not has_contact_intent(query):
                logger.debug("Info card for %s", system.key)
                return self.info_card(system, results)

        return self.summarize(results)
