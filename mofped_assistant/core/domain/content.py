"""Content store records and the search-time projection built from them."""

from dataclasses import dataclass, field


class DocumentCategory:
    """Known values of ``Document.category``.

    Categories are free text in the store; these are the ones the
    synthesizer and seed data rely on.
    """

    BUDGET = "Budget"
    POLICIES = "Policies"
    REPORTS = "Reports"
    NEWS = "News"
    EXTERNAL_SYSTEMS = "External Systems"
    CONTACT_INFORMATION = "Contact Information"
    OTHER = "Other"


@dataclass
class Document:
    """A discoverable resource published by the ministry.

    Attributes:
        id: Unique identifier.
        title: Display title.
        url: Canonical URL (unique natural key).
        description: Short description shown in summaries.
        category: One of :class:`DocumentCategory` (free text).
        content_type: ``pdf``, ``html``, ``link``...
        source: Hostname the document was found on.
        publish_date: ISO date string.
        is_active: Visibility flag; inactive documents are never searched.
        content_hash: Hash used by ingestion to detect changes.
    """

    id: str
    title: str
    url: str
    description: str | None = None
    category: str | None = None
    content_type: str = "html"
    source: str | None = None
    publish_date: str | None = None
    is_active: bool = True
    content_hash: str | None = None


@dataclass
class Excerpt:
    """A short curated passage belonging to one document.

    ``relevance`` is a static prior assigned by the author, not a live score.
    """

    id: str
    document_id: str
    excerpt: str
    keywords: list[str] = field(default_factory=list)
    embedding: list[float] | None = None
    relevance: float = 1.0


@dataclass
class DocumentResult:
    """A document as returned by search, optionally with the excerpt that matched."""

    document_id: str
    title: str
    url: str
    description: str | None
    category: str | None
    content_type: str
    publish_date: str | None
    relevance: float
    matched_excerpt: str | None = None

    @classmethod
    def from_document(
        cls, document: Document, relevance: float, matched_excerpt: str | None = None
    ) -> "DocumentResult":
        return cls(
            document_id=document.id,
            title=document.title,
            url=document.url,
            description=document.description,
            category=document.category,
            content_type=document.content_type,
            publish_date=document.publish_date,
            relevance=relevance,
            matched_excerpt=matched_excerpt,
        )


@dataclass
class ExcerptMatch:
    """An excerpt hit joined to its owning document, as returned by the store."""

    excerpt: Excerpt
    document: Document
