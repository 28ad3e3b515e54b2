"""Core services: classification, search, synthesis, site lookups and routing."""

from .document_search import DocumentSearchService
from .intent_classifier import IntentClassifier
from .official_site_service import OfficialSiteService, create_maps_link
from .page_extractor import PageExtractor, RegexPageExtractor
from .query_router import QueryRouter
from .response_synthesizer import ResponseSynthesizer

__all__ = [
    "DocumentSearchService",
    "IntentClassifier",
    "OfficialSiteService",
    "PageExtractor",
    "QueryRouter",
    "RegexPageExtractor",
    "ResponseSynthesizer",
    "create_maps_link",
]
