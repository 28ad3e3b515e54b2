"""Content Store Port Interface."""

from abc import ABC, abstractmethod
from typing import Any

from ..domain import Document, ExcerptMatch


class ContentStorePort(ABC):
    """Abstract interface for the document/excerpt store.

    Implementations only ever return active documents from search methods.
    Failures are raised as ``ContentStoreError`` subclasses.
    """

    @abstractmethod
    def search_documents(self, terms: list[str], limit: int) -> list[Document]:
        """Active documents whose title, description or category contains any term.

        Matching is case-insensitive substring. Newest ``publish_date`` first.
        """
        ...

    @abstractmethod
    def search_excerpts(self, query: str, limit: int) -> list[ExcerptMatch]:
        """Excerpts whose text contains ``query`` or whose keywords include it.

        Joined to their (active) owning document, highest relevance first.
        """
        ...

    @abstractmethod
    def get_document(self, document_id: str) -> Document | None:
        """Fetch a document by id (active or not)."""
        ...

    @abstractmethod
    def get_stats(self) -> dict[str, Any]:
        """Counts of documents and excerpts."""
        ...
