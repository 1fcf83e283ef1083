import pytest

from app.core.exceptions import RateLimitedError
from app.core.rate_limiter import SlidingWindowRateLimiter


class Ticker:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def ticker():
    return Ticker()


def test_admits_up_to_limit_then_rejects(ticker):
    limiter = SlidingWindowRateLimiter(limit=4, window_seconds=3600, clock=ticker)
    for _ in range(4):
        limiter.hit("10.0.0.1")

    with pytest.raises(RateLimitedError) as exc_info:
        limiter.hit("10.0.0.1")
    assert exc_info.value.status_code == 429
    assert exc_info.value.retry_after == 3600


def test_keys_are_independent(ticker):
    limiter = SlidingWindowRateLimiter(limit=1, window_seconds=60, clock=ticker)
    limiter.hit("10.0.0.1")
    limiter.hit("10.0.0.2")

    with pytest.raises(RateLimitedError):
        limiter.hit("10.0.0.1")


def test_window_slides(ticker):
    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=60, clock=ticker)
    limiter.hit("ip")
    ticker.now += 30
    limiter.hit("ip")

    ticker.now += 29
    with pytest.raises(RateLimitedError) as exc_info:
        limiter.hit("ip")
    assert exc_info.value.retry_after == 1

    # First hit leaves the window, second is still inside
    ticker.now += 1
    limiter.hit("ip")
    with pytest.raises(RateLimitedError):
        limiter.hit("ip")


def test_no_burst_across_window_boundary(ticker):
    limiter = SlidingWindowRateLimiter(limit=4, window_seconds=3600, clock=ticker)
    ticker.now += 3590
    for _ in range(4):
        limiter.hit("ip")

    ticker.now += 20
    with pytest.raises(RateLimitedError):
        limiter.hit("ip")


def test_rejected_attempts_are_not_counted(ticker):
    limiter = SlidingWindowRateLimiter(limit=1, window_seconds=60, clock=ticker)
    limiter.hit("ip")
    for _ in range(3):
        with pytest.raises(RateLimitedError):
            limiter.hit("ip")

    ticker.now += 60
    limiter.hit("ip")


def test_remaining_and_reset(ticker):
    limiter = SlidingWindowRateLimiter(limit=3, window_seconds=60, clock=ticker)
    assert limiter.remaining("ip") == 3
    limiter.hit("ip")
    assert limiter.remaining("ip") == 2

    limiter.reset()
    assert limiter.remaining("ip") == 3


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(limit=0, window_seconds=60)


def test_idle_keys_are_evicted_once_their_window_elapses(ticker):
    limiter = SlidingWindowRateLimiter(limit=4, window_seconds=60, clock=ticker)
    for i in range(50):
        limiter.hit(f"10.0.0.{i}")
    assert len(limiter) == 50

    ticker.now += 600
    limiter.hit("10.0.1.1")
    assert len(limiter) == 1


def test_active_keys_survive_the_sweep(ticker):
    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=60, clock=ticker)
    limiter.hit("idle")
    ticker.now += 30
    limiter.hit("busy")
    limiter.hit("busy")

    ticker.now += 40
    with pytest.raises(RateLimitedError):
        limiter.hit("busy")
    assert len(limiter) == 1
