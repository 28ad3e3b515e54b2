"""Rate Limiter Port Interface."""

from abc import ABC, abstractmethod


class RateLimiterPort(ABC):
    """Decides whether a client may make another request.

    Injected into the transport so a shared backend can replace the
    in-process counter when running several workers.
    """

    @abstractmethod
    def allow(self, key: str) -> bool:
        """Record a request for ``key`` and return whether it is allowed."""
        ...

    @property
    @abstractmethod
    def retry_after_seconds(self) -> int:
        """Suggested wait before retrying after a rejection."""
        ...
