"""Domain models for the MoFPED Help Assistant.

- content: Document, Excerpt and the DocumentResult search projection
- intent: Intent and IntentClassification
- response: Response, SourceRef, ResponseOption, GuardrailStatus
- site: values scraped from the official website
- external_system: static external-system facts

All models are re-exported here:

    from mofped_assistant.core.domain import Document, Response, Intent
"""

from .content import Document, DocumentCategory, DocumentResult, Excerpt, ExcerptMatch
from .external_system import ExternalSystem, ExternalSystemCatalog, SystemContact, SystemOption
from .intent import Intent, IntentClassification
from .response import GuardrailStatus, OptionAction, Response, ResponseOption, SourceRef
from .site import ContactInfo, LocationInfo, PartialLocationInfo, ScrapedPage

__all__ = [
    # Content models
    "Document",
    "DocumentCategory",
    "DocumentResult",
    "Excerpt",
    "ExcerptMatch",
    # External systems
    "ExternalSystem",
    "ExternalSystemCatalog",
    "SystemContact",
    "SystemOption",
    # Intent
    "Intent",
    "IntentClassification",
    # Response
    "GuardrailStatus",
    "OptionAction",
    "Response",
    "ResponseOption",
    "SourceRef",
    # Website values
    "ContactInfo",
    "LocationInfo",
    "PartialLocationInfo",
    "ScrapedPage",
]
