"""Fetches official web pages and reduces them to title and visible text."""

import logging
from datetime import date

import requests
from bs4 import BeautifulSoup

from ....core.domain import ScrapedPage
from ....core.domain.exceptions import PageFetchError
from ....core.domain.utils import collapse_whitespace
from ....core.ports.page_fetcher_port import PageFetcherPort

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def parse_page(html: str, url: str) -> ScrapedPage:
    """Extract the title and whitespace-collapsed body text from HTML.

    Script, style and noscript elements are dropped before reading text.
    """
    soup = BeautifulSoup(html, "lxml")
    for element in soup(["script", "style", "noscript"]):
        element.decompose()

    title = ""
    if soup.title and soup.title.get_text(strip=True):
        title = soup.title.get_text(strip=True)
    else:
        heading = soup.find("h1")
        if heading:
            title = heading.get_text(strip=True)

    body = soup.body or soup
    content = collapse_whitespace(body.get_text(" "))

    return ScrapedPage(
        title=title,
        content=content,
        url=url,
        last_checked=date.today().isoformat(),
    )


class RequestsPageFetcher(PageFetcherPort):
    """Page fetcher built on ``requests`` and BeautifulSoup.

    A fresh session is opened per fetch and closed before returning, so a
    caller that stops waiting (router timeout) does not leave sockets behind.
    """

    def __init__(
        self,
        user_agent: str = "Mozilla/5.0 (compatible; MoFPED-Help-Assistant/1.0)",
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the fetcher.

        Args:
            user_agent: User-Agent header sent with every request.
            timeout: Connect/read timeout in seconds.
        """
        self.timeout = timeout
        self.headers = {**DEFAULT_HEADERS, "User-Agent": user_agent}

    def fetch(self, url: str) -> ScrapedPage:
        """Fetch ``url`` and return its title and visible text.

        Raises:
            PageFetchError: On network failure, timeout or non-2xx status.
        """
        try:
            with requests.Session() as session:
                session.headers.update(self.headers)
                response = session.get(url, timeout=self.timeout)
                response.raise_for_status()
                html = response.text
        except requests.RequestException as e:
            raise PageFetchError(
                f"Failed to fetch {url}",
                cause=e,
                context={"url": url, "timeout": self.timeout},
            ) from e

        page = parse_page(html, url)
        logger.debug("Fetched %s (%d chars)", url, len(page.content))
        return page
