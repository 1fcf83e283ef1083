"""
Sliding-window rate limiter for the register/verify route family.

- One deque of attempt timestamps per client key (IP address)
- A request is admitted while fewer than `limit` attempts fall inside the
  trailing window; otherwise RateLimitedError carries a Retry-After hint
- State is memory-resident and per process; a restart resets all counters

A sliding window never admits more than `limit` requests in any window-long
span, unlike a fixed window which can admit up to 2x `limit` across a
boundary.
"""

import math
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable

from fastapi import Request

from app.core.config import settings
from app.core.exceptions import RateLimitedError
from app.core.logging import get_logger
from utils.constants import RATE_LIMITED_MESSAGE

logger = get_logger(__name__)


class SlidingWindowRateLimiter:
    """
    In-memory sliding-window limiter keyed by client identity.
    """

    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            limit: Maximum admitted requests per key inside the window
            window_seconds: Length of the trailing window
            clock: Monotonic seconds source
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def _prune(self, key: str, now: float) -> Deque[float]:
        hits = self._hits[key]
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()
        return hits

    def _sweep(self, now: float) -> None:
        # At most once per window: drop keys whose newest attempt is out of the window
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        for key in [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= self.window_seconds]:
            del self._hits[key]

    def hit(self, key: str) -> None:
        """
        Record an attempt for `key`.

        Raises:
            RateLimitedError: If the key already used its allowance
        """
        now = self.clock()
        self._sweep(now)
        hits = self._prune(key, now)

        if len(hits) >= self.limit:
            retry_after = max(1, math.ceil(self.window_seconds - (now - hits[0])))
            logger.warning(
                f"Rate limit exceeded for {key}, retry in {retry_after}s",
                extra={"client_ip": key}
            )
            raise RateLimitedError(RATE_LIMITED_MESSAGE, retry_after=retry_after)

        hits.append(now)

    def remaining(self, key: str) -> int:
        """Attempts left for `key` in the current window (for monitoring)"""
        hits = self._prune(key, self.clock())
        remaining = self.limit - len(hits)
        if not hits:
            self._hits.pop(key, None)
        return remaining

    def reset(self) -> None:
        self._hits.clear()


def get_client_ip(request: Request, trusted_proxies: Iterable[str] = ()) -> str:
    """
    Client identity for rate limiting.

    The peer address, unless the peer is a trusted proxy; then the first
    X-Forwarded-For hop. Clients cannot pick their own key by sending the header.
    """
    peer = request.client.host if request.client else "unknown"
    if peer not in set(trusted_proxies):
        return peer

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return peer


async def enforce_auth_rate_limit(request: Request) -> None:
    """
    FastAPI dependency guarding the register/verify routes.
    The limiter instance lives on app.state and is created with the app.
    """
    limiter: SlidingWindowRateLimiter = request.app.state.auth_rate_limiter
    limiter.hit(get_client_ip(request, settings.TRUSTED_PROXIES))
