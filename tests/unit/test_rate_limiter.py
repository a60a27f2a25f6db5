from __future__ import annotations

import pytest

from livescribe.errors import RateLimitError
from livescribe.handlers.limits import SlidingWindowRateLimiter


def test_rate_limiter_allows_within_limit() -> None:
    t = 0.0

    def now() -> float:
        return t

    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=10, now_fn=now)
    limiter.consume()
    limiter.consume()


def test_rate_limiter_rejects_when_saturated() -> None:
    t = 0.0

    def now() -> float:
        return t

    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=10, now_fn=now)
    limiter.consume()
    limiter.consume()

    with pytest.raises(RateLimitError) as exc:
        limiter.consume()
    assert exc.value.limit == 2
    assert exc.value.window_seconds == 10
    assert exc.value.retry_in == pytest.approx(10.0)


def test_rate_limiter_frees_slots_as_window_slides() -> None:
    clock = {"t": 0.0}
    limiter = SlidingWindowRateLimiter(limit=1, window_seconds=10, now_fn=lambda: clock["t"])
    limiter.consume()

    clock["t"] = 4.0
    with pytest.raises(RateLimitError) as exc:
        limiter.consume()
    assert exc.value.retry_in == pytest.approx(6.0)

    clock["t"] = 10.0
    limiter.consume()


def test_rate_limiter_disabled_for_non_positive_limit() -> None:
    limiter = SlidingWindowRateLimiter(limit=0, window_seconds=10)
    assert not limiter.enabled
    for _ in range(100):
        limiter.consume()
