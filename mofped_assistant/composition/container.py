"""Composition root wiring adapters to the core services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.memory_rate_limiter import InMemoryRateLimiter
from ..adapters.outbound.sqlite_content_store import SQLiteContentStore
from ..adapters.outbound.web.requests_fetcher import RequestsPageFetcher
from ..config import settings
from ..config.external_systems import load_external_systems
from ..core.domain import ExternalSystemCatalog
from ..core.services import (
    DocumentSearchService,
    IntentClassifier,
    OfficialSiteService,
    QueryRouter,
    RegexPageExtractor,
    ResponseSynthesizer,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_content_store() -> SQLiteContentStore:
    logger.info("Initializing SQLiteContentStore at %s...", settings.database_path)
    settings.ensure_directories()
    return SQLiteContentStore(settings.database_path)


@lru_cache
def get_page_fetcher() -> RequestsPageFetcher:
    return RequestsPageFetcher(user_agent=settings.user_agent, timeout=settings.fetch_timeout)


@lru_cache
def get_external_systems() -> ExternalSystemCatalog:
    return load_external_systems(settings.external_systems_path)


@lru_cache
def get_official_site() -> OfficialSiteService:
    return OfficialSiteService(
        fetcher=get_page_fetcher(),
        extractor=RegexPageExtractor(),
        location_urls=settings.location_urls,
        contact_urls=settings.contact_urls,
        service_urls=settings.service_urls,
    )


@lru_cache
def get_document_search() -> DocumentSearchService:
    return DocumentSearchService(get_content_store())


@lru_cache
def get_query_router() -> QueryRouter:
    logger.info("Initializing QueryRouter...")
    return QueryRouter(
        classifier=IntentClassifier(),
        search=get_document_search(),
        synthesizer=ResponseSynthesizer(get_external_systems(), site_name=settings.site_name),
        site=get_official_site(),
        site_url=settings.site_url,
        contact_page_url=settings.contact_page_url,
        services_page_url=settings.services_page_url,
        timeout=settings.request_timeout,
        document_limit=settings.document_search_limit,
        service_limit=settings.service_search_limit,
    )


@lru_cache
def get_rate_limiter() -> InMemoryRateLimiter:
    return InMemoryRateLimiter(settings.rate_limit_per_minute)
