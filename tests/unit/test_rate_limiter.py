"""Unit tests for the in-process token-bucket rate limiter."""

import pytest

from mofped_assistant.adapters.outbound.memory_rate_limiter import InMemoryRateLimiter

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_allows_up_to_capacity_then_blocks(clock):
    limiter = InMemoryRateLimiter(3, clock=clock)

    assert [limiter.allow("1.2.3.4") for _ in range(4)] == [True, True, True, False]


def test_keys_are_independent(clock):
    limiter = InMemoryRateLimiter(1, clock=clock)

    assert limiter.allow("a")
    assert not limiter.allow("a")
    assert limiter.allow("b")


def test_tokens_refill_over_time(clock):
    limiter = InMemoryRateLimiter(2, clock=clock)
    limiter.allow("a")
    limiter.allow("a")
    assert not limiter.allow("a")

    # One token every 30 seconds at 2 per minute
    clock.now += 29
    assert not limiter.allow("a")
    clock.now += 1
    assert limiter.allow("a")
    assert not limiter.allow("a")


def test_refill_never_exceeds_capacity(clock):
    limiter = InMemoryRateLimiter(2, clock=clock)
    limiter.allow("a")

    clock.now += 3600
    assert [limiter.allow("a") for _ in range(3)] == [True, True, False]


@pytest.mark.parametrize("limit", [None, 0, -5])
def test_disabled(limit, clock):
    limiter = InMemoryRateLimiter(limit, clock=clock)

    assert all(limiter.allow("a") for _ in range(100))
    assert limiter.retry_after_seconds == 0


def test_retry_after_rounds_up():
    assert InMemoryRateLimiter(60).retry_after_seconds == 1
    assert InMemoryRateLimiter(7).retry_after_seconds == 9


def test_idle_clients_are_forgotten(clock):
    limiter = InMemoryRateLimiter(30, clock=clock)
    for i in range(10_000):
        limiter.allow(f"10.0.{i // 256}.{i % 256}")
    assert len(limiter._buckets) == 10_000

    clock.now += 3600
    assert limiter.allow("192.168.1.1")

    assert list(limiter._buckets) == ["192.168.1.1"]


def test_throttled_client_is_kept_between_sweeps(clock):
    limiter = InMemoryRateLimiter(120, clock=clock)

    clock.now += 59
    assert all(limiter.allow("a") for _ in range(120))
    assert not limiter.allow("a")

    # Sweep runs here; "a" has only regained two of its 120 tokens
    clock.now += 1
    assert limiter.allow("b")

    assert set(limiter._buckets) == {"a", "b"}
    assert [limiter.allow("a") for _ in range(3)] == [True, True, False]
