"""Web Page Fetcher Port Interface."""

from abc import ABC, abstractmethod

from ..domain import ScrapedPage


class PageFetcherPort(ABC):
    """Fetches a URL and returns its title and visible text."""

    @abstractmethod
    def fetch(self, url: str) -> ScrapedPage:
        """Fetch and distill a page.

        Raises:
            PageFetchError: On network failure, timeout or non-2xx status.
        """
        ...
