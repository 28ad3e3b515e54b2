"""Location, contact and service lookups against the official website.

Each lookup walks an ordered list of candidate pages and stops at the first
page that yields something usable. Fetch failures are logged and skipped.
When every candidate fails, location and contacts fall back to the
ministry's published details so callers always have something to show.
"""

import asyncio
import logging
from datetime import date
from urllib.parse import quote

from ..domain import ContactInfo, LocationInfo, ScrapedPage
from ..domain.exceptions import ScrapingError
from ..ports.page_fetcher_port import PageFetcherPort
from .page_extractor import PageExtractor, RegexPageExtractor

logger = logging.getLogger(__name__)

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="

FALLBACK_ADDRESS = (
    "Ministry of Finance, Planning and Economic Development, "
    "Plot 2-12 Apollo Kaggwa Road, P.O. Box 8147, Kampala, Uganda"
)
FALLBACK_HOURS = "Monday - Friday: 8:00 AM - 5:00 PM"
FALLBACK_PHONE = "+256 414 230 000"
FALLBACK_EMAIL = "info@finance.go.ug"

FALLBACK_CONTACTS = (
    ContactInfo(department="General Inquiries", phone="+256 414 230 000", email="info@finance.go.ug"),
    ContactInfo(department="ICT Support", phone="+256 414 230 001", email="ict@finance.go.ug"),
)

# Words that say "this is a service question" rather than which service.
SERVICE_QUERY_STOP_WORDS = frozenset(
    {
        "how",
        "what",
        "the",
        "for",
        "and",
        "can",
        "apply",
        "get",
        "obtain",
        "requirements",
        "process",
        "procedure",
        "steps",
        "application",
        "register",
        "registration",
        "submit",
        "when",
        "where",
        "need",
    }
)


def create_maps_link(address: str) -> str:
    """Google Maps search URL for ``address``."""
    return f"{MAPS_SEARCH_URL}{quote(address, safe='')}"


def significant_word(query: str) -> str | None:
    """First query word that names the subject of a service question."""
    for word in query.lower().split():
        word = word.strip("?.,!:;\"'")
        if len(word) > 2 and word not in SERVICE_QUERY_STOP_WORDS:
            return word
    return None


class OfficialSiteService:
    """Reads ministry details from finance.go.ug with hardcoded fallbacks."""

    def __init__(
        self,
        fetcher: PageFetcherPort,
        extractor: PageExtractor | None = None,
        location_urls: list[str] | None = None,
        contact_urls: list[str] | None = None,
        service_urls: list[str] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            fetcher: Page fetcher used for every lookup.
            extractor: Field extractor; defaults to :class:`RegexPageExtractor`.
            location_urls: Candidate pages for the office address, in order.
            contact_urls: Candidate pages for contact details, in order.
            service_urls: Candidate pages describing citizen services, in order.
        """
        self.fetcher = fetcher
        self.extractor = extractor or RegexPageExtractor()
        self.location_urls = list(location_urls or [])
        self.contact_urls = list(contact_urls or [])
        self.service_urls = list(service_urls or [])

    async def _fetch(self, url: str) -> ScrapedPage | None:
        try:
            return await asyncio.to_thread(self.fetcher.fetch, url)
        except ScrapingError as e:
            logger.warning(f"Could not fetch {url}: {e}")
            return None

    @staticmethod
    def fallback_location() -> LocationInfo:
        return LocationInfo(
            address=FALLBACK_ADDRESS,
            hours=FALLBACK_HOURS,
            phone=FALLBACK_PHONE,
            email=FALLBACK_EMAIL,
            last_checked=date.today().isoformat(),
        )

    async def fetch_location(self) -> LocationInfo | None:
        """Office address and opening details.

        Returns the first candidate page with an extractable address, else the
        published fallback record.
        """
        for url in self.location_urls:
            page = await self._fetch(url)
            if page is None:
                continue

            found = self.extractor.extract(page.content)
            if found.address:
                logger.info("Location found on %s", url)
                return LocationInfo(
                    address=found.address,
                    hours=found.hours,
                    phone=found.phone,
                    email=found.email,
                    last_checked=page.last_checked,
                )

        logger.info("No address found on %d pages, using fallback", len(self.location_urls))
        return self.fallback_location()

    async def fetch_contacts(self) -> list[ContactInfo]:
        """Phone numbers and emails from the first page that lists any."""
        for url in self.contact_urls:
            page = await self._fetch(url)
            if page is None:
                continue

            contacts = self.extractor.extract_contacts(page.content)
            if contacts:
                logger.info("Found %d contacts on %s", len(contacts), url)
                return contacts

        logger.info("No contacts found, using fallback")
        return list(FALLBACK_CONTACTS)

    async def fetch_service_page(self, query: str) -> ScrapedPage | None:
        """First service page whose text mentions the query's subject."""
        word = significant_word(query)
        if word is None:
            return None

        for url in self.service_urls:
            page = await self._fetch(url)
            if page is not None and word in page.content.lower():
                logger.info("Service page %s matches %r", url, word)
                return page

        return None
