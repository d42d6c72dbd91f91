# =============================================================================
# app/middleware/rate_limit.py - Per-Route Rate Limiting
# =============================================================================
# Fixed-window counters keyed by (client address, route category), held in
# process memory. Each worker counts independently; a shared store would be
# needed to limit across replicas.
#
# Usage:
#   @router.get("", dependencies=[Depends(rate_limit("experiences"))])
# =============================================================================

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Request

from app.config import settings
from app.constants import RATE_LIMITS, RateLimitRule
from app.exceptions import RateLimitError

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimitStore:
    """
    Thread-safe fixed-window counter table.

    The table is bounded: when it reaches `max_keys`, expired windows are
    swept, and if it is still full the window closest to reset is evicted.
    """

    def __init__(self, max_keys: int = 10000, clock: Callable[[], float] = time.monotonic):
        self._max_keys = max_keys
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()

    def _make_room(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]

        if len(self._windows) >= self._max_keys:
            oldest = min(self._windows, key=lambda k: self._windows[k].reset_at)
            del self._windows[oldest]
            logger.warning("Rate limit table full, evicted the oldest window")

    def hit(self, key: str, rule: RateLimitRule) -> int:
        """
        Count one request against `key`.

        Returns:
            Requests remaining in the current window

        Raises:
            RateLimitError: Once the count exceeds rule.max_requests
        """
        with self._lock:
            now = self._clock()
            window = self._windows.get(key)

            if window is None or now > window.reset_at:
                if window is None and len(self._windows) >= self._max_keys:
                    self._make_room(now)
                self._windows[key] = _Window(count=1, reset_at=now + rule.window_seconds)
                return rule.max_requests - 1

            window.count += 1
            if window.count > rule.max_requests:
                retry_after = max(1, math.ceil(window.reset_at - now))
                raise RateLimitError(limit=rule.max_requests, retry_after=retry_after)

            return rule.max_requests - window.count


def get_client_address(request: Request, trusted_header: str = "CF-Connecting-IP") -> str:
    """
    Best-effort client address.

    Prefers the trusted proxy's header, then the first X-Forwarded-For hop.
    """
    address = request.headers.get(trusted_header)
    if address and address.strip():
        return address.strip()

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    return UNKNOWN_CLIENT


def rate_limit(category: str = "default") -> Callable:
    """
    Build a FastAPI dependency enforcing `category`'s limit.

    Unknown categories use the default rule. The store is read from
    app.state.rate_limits.
    """
    rule = RATE_LIMITS.get(category, RATE_LIMITS["default"])

    async def enforce(request: Request) -> None:
        store: RateLimitStore = request.app.state.rate_limits
        client = get_client_address(request, settings.RATE_LIMIT_IP_HEADER)
        try:
            store.hit(f"{client}:{category}", rule)
        except RateLimitError:
            logger.info(f"Rate limit exceeded for {client} on {category}")
            raise

    return enforce
