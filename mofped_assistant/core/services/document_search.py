"""Hybrid document search: curated excerpt matches merged with keyword matches."""

import asyncio
import logging

from ..domain import DocumentResult
from ..domain.exceptions import ContentStoreError
from ..ports.content_store_port import ContentStorePort

logger = logging.getLogger(__name__)

# Prior given to documents found only through title/description/category.
KEYWORD_MATCH_RELEVANCE = 0.5

# Query words this short are ignored when splitting the query into terms.
MIN_TERM_LENGTH = 3


class DocumentSearchService:
    """Combines excerpt and keyword matches into a deduplicated, ranked list.

    Excerpt matches carry their stored relevance and matched text; keyword
    matches are added afterwards for documents not already present, at
    :data:`KEYWORD_MATCH_RELEVANCE`. Store failures are logged and turned
    into empty results.
    """

    def __init__(self, store: ContentStorePort) -> None:
        """Initialize the search service.

        Args:
            store: Content store to query.
        """
        self.store = store

    @staticmethod
    def query_terms(query: str) -> list[str]:
        """Lowercased words longer than two characters."""
        return [word for word in query.lower().split() if len(word) >= MIN_TERM_LENGTH]

    def _keyword_matches(self, query: str, limit: int) -> list[DocumentResult]:
        terms = self.query_terms(query)
        # Multi-word queries match on any word; otherwise on the raw query.
        search_terms = terms if len(terms) > 1 else [query.strip()]

        documents = self.store.search_documents(search_terms, limit)
        logger.debug("Keyword search matched %d documents", len(documents))
        return [DocumentResult.from_document(doc, KEYWORD_MATCH_RELEVANCE) for doc in documents]

    def _excerpt_matches(self, query: str, limit: int) -> list[DocumentResult]:
        matches = self.store.search_excerpts(query.strip(), limit)
        logger.debug("Excerpt search matched %d excerpts", len(matches))
        return [
            DocumentResult.from_document(
                match.document, match.excerpt.relevance, match.excerpt.excerpt
            )
            for match in matches
        ]

    @staticmethod
    def merge(
        excerpt_results: list[DocumentResult],
        keyword_results: list[DocumentResult],
        limit: int,
    ) -> list[DocumentResult]:
        """Deduplicate by document, excerpt results first, then rank.

        Args:
            excerpt_results: Excerpt-derived results, highest relevance first.
            keyword_results: Keyword-derived results.
            limit: Maximum number of results to return.

        Returns:
            Results sorted by relevance (stable), at most ``limit`` long.
        """
        merged: dict[str, DocumentResult] = {}

        for result in excerpt_results:
            # The first excerpt seen for a document is its most relevant one.
            merged.setdefault(result.document_id, result)

        for result in keyword_results:
            merged.setdefault(result.document_id, result)

        ranked = sorted(merged.values(), key=lambda r: r.relevance, reverse=True)
        return ranked[:limit]

    def search_sync(self, query: str, limit: int = 5) -> list[DocumentResult]:
        """Blocking search. Never raises for store errors."""
        if not query or not query.strip() or limit <= 0:
            return []

        try:
            keyword_results = self._keyword_matches(query, limit)
        except ContentStoreError as e:
            logger.error(f"Keyword search error: {e}")
            return []

        try:
            excerpt_results = self._excerpt_matches(query, limit)
        except ContentStoreError as e:
            logger.error(f"Excerpt search error: {e}")
            excerpt_results = []

        results = self.merge(excerpt_results, keyword_results, limit)
        logger.info(
            "Search %r: %d excerpt hits, %d keyword hits, %d results",
            query,
            len(excerpt_results),
            len(keyword_results),
            len(results),
        )
        return results

    async def search(self, query: str, limit: int = 5) -> list[DocumentResult]:
        """Search without blocking the event loop.

        Args:
            query: Raw user query.
            limit: Maximum number of results.

        Returns:
            Ranked results; empty on blank query or store failure.
        """
        return await asyncio.to_thread(self.search_sync, query, limit)
