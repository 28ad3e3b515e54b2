"""In-process token-bucket rate limiter keyed by client."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass

from ...core.ports.rate_limiter_port import RateLimiterPort

# Seconds between sweeps for buckets that have refilled to capacity
PRUNE_INTERVAL = 60.0


@dataclass
class _Bucket:
    tokens: float
    last_refill: float


class InMemoryRateLimiter(RateLimiterPort):
    """Token-bucket limiter with minute-based capacity per key.

    Each key starts with ``requests_per_minute`` tokens and regains one every
    ``60 / requests_per_minute`` seconds. A ``requests_per_minute`` of ``None``
    or ``<= 0`` disables limiting. Buckets that have refilled to capacity are
    indistinguishable from new ones and are dropped every ``PRUNE_INTERVAL``
    seconds, so memory follows the number of recently active clients. State
    lives in this process only; run a shared implementation of
    :class:`RateLimiterPort` behind multiple workers.
    """

    def __init__(self, requests_per_minute: int | None, clock=time.monotonic) -> None:
        self.capacity = requests_per_minute if requests_per_minute and requests_per_minute > 0 else None
        self.refill_interval = 60.0 / self.capacity if self.capacity else None
        self._clock = clock
        self._buckets: dict[str, _Bucket] = {}
        self._lock = threading.Lock()
        self._last_prune = clock()

    def _refill(self, bucket: _Bucket, now: float) -> None:
        """Refill tokens based on elapsed time."""
        if self.capacity is None or self.refill_interval is None:
            return

        elapsed = now - bucket.last_refill
        tokens_to_add = int(elapsed // self.refill_interval)
        if tokens_to_add > 0:
            bucket.tokens = min(float(self.capacity), bucket.tokens + tokens_to_add)
            bucket.last_refill += tokens_to_add * self.refill_interval

    def _prune(self, now: float) -> None:
        """Drop buckets that would be full again by ``now``. Caller holds the lock."""
        self._last_prune = now
        idle = [
            key
            for key, bucket in self._buckets.items()
            if bucket.tokens + (now - bucket.last_refill) / self.refill_interval >= self.capacity
        ]
        for key in idle:
            del self._buckets[key]

    def allow(self, key: str) -> bool:
        """Take a token for ``key`` if one is available."""
        if self.capacity is None:
            return True

        with self._lock:
            now = self._clock()
            if now - self._last_prune >= PRUNE_INTERVAL:
                self._prune(now)

            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = _Bucket(tokens=float(self.capacity), last_refill=now)
                self._buckets[key] = bucket

            self._refill(bucket, now)
            if bucket.tokens >= 1:
                bucket.tokens -= 1
                return True
            return False

    @property
    def retry_after_seconds(self) -> int:
        if self.refill_interval is None:
            return 0
        return max(1, math.ceil(self.refill_interval))
