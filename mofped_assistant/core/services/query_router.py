"""Query orchestration: classify, dispatch, bound by a timeout, normalize errors."""

import asyncio
import logging

from ...common.exception_handler import log_exception
from ..domain import (
    GuardrailStatus,
    Intent,
    IntentClassification,
    OptionAction,
    Response,
    ResponseOption,
    SourceRef,
)
from ..domain.exceptions import QueryTimeoutError, RoutingError
from ..domain.utils import truncate
from .document_search import DocumentSearchService
from .intent_classifier import IntentClassifier
from .official_site_service import OfficialSiteService, create_maps_link
from .response_synthesizer import ResponseSynthesizer

logger = logging.getLogger(__name__)

ERROR_SUMMARY = (
    "I apologize, but I encountered an error while processing your request. "
    "Please try again or contact our support team."
)

OFFICIAL_WEBSITE = "Official Website"
OFFICIAL_SOURCE = "Official Source"
SERVICE_PAGE_PREVIEW_CHARS = 500


class QueryRouter:
    """Entry point of the core: turns a query into a :class:`Response`.

    The classified intent picks one of four handlers. The whole handler runs
    under ``timeout`` seconds; a timeout or any exception becomes an
    ``error`` response that still carries the classified intent.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        search: DocumentSearchService,
        synthesizer: ResponseSynthesizer,
        site: OfficialSiteService,
        site_url: str = "https://www.finance.go.ug",
        contact_page_url: str = "https://www.finance.go.ug/contact-us",
        services_page_url: str = "https://www.finance.go.ug/services",
        timeout: float = 15.0,
        document_limit: int = 5,
        service_limit: int = 3,
    ) -> None:
        """Initialize the router.

        Args:
            classifier: Intent classifier.
            search: Hybrid document search.
            synthesizer: Response synthesizer for search results.
            site: Official website lookups.
            site_url: Home page cited when nothing is found.
            contact_page_url: Contact page cited for location/contact queries.
            services_page_url: Services page cited for service queries.
            timeout: Ceiling in seconds for handling one query.
            document_limit: Result limit for document queries.
            service_limit: Result limit for the service search fallback.
        """
        self.classifier = classifier
        self.search = search
        self.synthesizer = synthesizer
        self.site = site
        self.site_url = site_url
        self.contact_page_url = contact_page_url
        self.services_page_url = services_page_url
        self.timeout = timeout
        self.document_limit = document_limit
        self.service_limit = service_limit

        self._handlers = {
            Intent.LOCATION: self.handle_location,
            Intent.CONTACT: self.handle_contact,
            Intent.SERVICE: self.handle_service,
            Intent.DOCUMENT: self.handle_document,
        }

    async def handle(self, query: str) -> Response:
        """Answer ``query``. Never raises."""
        classification = self.classifier.classify(query)
        logger.info(
            "Intent classified as: %s (confidence: %.2f)",
            classification.intent.value,
            classification.confidence,
        )

        handler = self._handlers.get(classification.intent, self.handle_document)
        try:
            response = await asyncio.wait_for(handler(query), timeout=self.timeout)
        except TimeoutError as e:
            log_exception(
                QueryTimeoutError(
                    f"Query not answered within {self.timeout}s",
                    cause=e,
                    context={"timeout_seconds": self.timeout},
                ),
                log=logger,
                query=query,
                intent=classification.intent,
            )
            return self.error_response(classification)
        except Exception as e:
            log_exception(
                RoutingError("Handler failed", cause=e),
                log=logger,
                query=query,
                intent=classification.intent,
            )
            return self.error_response(classification)

        logger.info(
            "Answered %s query with status %s",
            classification.intent.value,
            response.guardrail_status.value,
        )
        return response

    @staticmethod
    def error_response(classification: IntentClassification) -> Response:
        return Response(
            summary=ERROR_SUMMARY,
            guardrail_status=GuardrailStatus.ERROR,
            intent=classification.intent,
            confidence=classification.confidence,
        )

    async def handle_location(self, query: str) -> Response:
        location = await self.site.fetch_location()
        if location is None:
            return Response(
                summary=(
                    "I'm unable to access the current location information from the official "
                    f"website at the moment. Please visit {self.contact_page_url} for the most "
                    "up-to-date address and contact details."
                ),
                guardrail_status=GuardrailStatus.NOT_FOUND,
                sources=(
                    SourceRef("Ministry of Finance Contact Page", self.contact_page_url, OFFICIAL_WEBSITE),
                ),
                intent=Intent.LOCATION,
                confidence=0.8,
            )

        lines = [
            "Here's the official physical address for the Ministry of Finance headquarters.",
            "",
            f"Address: {location.address}",
        ]
        if location.hours:
            lines.append(f"Hours: {location.hours}")
        if location.phone or location.email:
            channels = []
            if location.phone:
                channels.append(f"Phone: {location.phone}")
            if location.email:
                channels.append(f"Email: {location.email}")
            lines.append(f"Contact: {' '.join(channels)}")
        lines.append(f"Last checked: {location.last_checked}")

        return Response(
            summary="\n".join(lines),
            guardrail_status=GuardrailStatus.OK,
            sources=(SourceRef("Ministry of Finance Official Website", self.site_url, OFFICIAL_SOURCE),),
            options=(
                ResponseOption("Get Directions", OptionAction.EXTERNAL, create_maps_link(location.address)),
                ResponseOption("Contact Information", OptionAction.CONTACT, "contact phone email"),
            ),
            intent=Intent.LOCATION,
            confidence=0.95,
        )

    async def handle_contact(self, query: str) -> Response:
        contacts = await self.site.fetch_contacts()
        if not contacts:
            return Response(
                summary=(
                    "I'm unable to access the current contact information from the official "
                    f"website at the moment. Please visit {self.contact_page_url} for the most "
                    "up-to-date contact details."
                ),
                guardrail_status=GuardrailStatus.NOT_FOUND,
                sources=(
                    SourceRef("Ministry of Finance Contact Page", self.contact_page_url, OFFICIAL_WEBSITE),
                ),
                intent=Intent.CONTACT,
                confidence=0.8,
            )

        blocks = []
        for contact in contacts:
            lines = []
            if contact.department:
                lines.append(contact.department)
            if contact.phone:
                lines.append(f"Phone: {contact.phone}")
            if contact.email:
                lines.append(f"Email: {contact.email}")
            if contact.hours:
                lines.append(f"Hours: {contact.hours}")
            blocks.append("\n".join(lines))

        summary = "Here are the official contact details for the Ministry of Finance:\n\n"
        summary += "\n\n".join(blocks)

        return Response(
            summary=summary,
            guardrail_status=GuardrailStatus.OK,
            sources=(
                SourceRef("Ministry of Finance Contact Information", self.contact_page_url, OFFICIAL_SOURCE),
            ),
            options=(
                ResponseOption("Visit Contact Page", OptionAction.EXTERNAL, self.contact_page_url),
                ResponseOption(
                    "Office Location", OptionAction.LOCATION, "where is ministry of finance located"
                ),
            ),
            intent=Intent.CONTACT,
            confidence=0.9,
        )

    async def handle_service(self, query: str) -> Response:
        page = await self.site.fetch_service_page(query)
        if page is not None:
            preview = truncate(page.content, SERVICE_PAGE_PREVIEW_CHARS)
            return Response(
                summary=(
                    "I found relevant service information on the official website. "
                    f"Here's what I found:\n\n{preview}\n\n"
                    "For complete details, please visit the official service page."
                ),
                guardrail_status=GuardrailStatus.OK,
                sources=(SourceRef(page.title or page.url, page.url, "Official Service Page"),),
                options=(
                    ResponseOption("View Full Service Page", OptionAction.EXTERNAL, page.url),
                    ResponseOption("Contact Support", OptionAction.CONTACT, "service support contact"),
                ),
                intent=Intent.SERVICE,
                confidence=0.85,
            )

        results = await self.search.search(query, self.service_limit)
        if results:
            return self.synthesizer.generate(query, results).with_intent(Intent.SERVICE, 0.7)

        return Response(
            summary=(
                "I couldn't find specific information about this service on the official "
                f"website. Please visit {self.services_page_url} or contact our support team "
                "for assistance."
            ),
            guardrail_status=GuardrailStatus.NOT_FOUND,
            sources=(SourceRef("Ministry of Finance Services", self.services_page_url, OFFICIAL_WEBSITE),),
            options=(
                ResponseOption("Browse Services", OptionAction.EXTERNAL, self.services_page_url),
                ResponseOption("Contact Support", OptionAction.CONTACT, "service support contact"),
            ),
            intent=Intent.SERVICE,
            confidence=0.6,
        )

    async def handle_document(self, query: str) -> Response:
        results = await self.search.search(query, self.document_limit)
        if not results:
            return Response(
                summary=(
                    "I couldn't find the specific document you're looking for in our database. "
                    f"Please check the official website at {self.site_url} for the most current "
                    "documents and policies."
                ),
                guardrail_status=GuardrailStatus.NOT_FOUND,
                sources=(
                    SourceRef("Ministry of Finance Official Website", self.site_url, OFFICIAL_WEBSITE),
                ),
                intent=Intent.DOCUMENT,
                confidence=0.5,
            )

        return self.synthesizer.generate(query, results).with_intent(Intent.DOCUMENT, 0.8)
