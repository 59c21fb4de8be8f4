"""
Sliding-window rate limiting.

The limiter itself holds no counters: it is handed a ``RateLimitStore`` and
asks it to record a hit. ``InMemoryRateLimitStore`` keeps per-key timestamp
lists behind a lock; an external cache can stand in by implementing the same
``hit`` method.
"""

import logging
import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Deque, Dict, Optional, Protocol

from fastapi import Request, Response

from campus_events.core.exceptions import AuthenticationError, RateLimitError
from campus_events.core.security import decode_token


logger = logging.getLogger(__name__)


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float

    @property
    def reset_time(self) -> str:
        return datetime.fromtimestamp(self.reset_at, tz=timezone.utc).isoformat()

    def retry_after(self, now: float) -> int:
        return max(1, int(self.reset_at - now + 0.999))


class RateLimitStore(Protocol):
    def hit(self, key: str, window_seconds: float, max_requests: int) -> RateLimitResult:
        ...


class InMemoryRateLimitStore:
    """Process-local sliding window store"""

    def __init__(self, clock: Callable[[], float] = time.time, sweep_interval: int = 1000):
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()
        self._sweep_interval = sweep_interval
        self._calls = 0

    def now(self) -> float:
        return self._clock()

    def hit(self, key: str, window_seconds: float, max_requests: int) -> RateLimitResult:
        with self._lock:
            now = self._clock()
            window_start = now - window_seconds

            hits = self._hits[key]
            while hits and hits[0] <= window_start:
                hits.popleft()

            self._calls += 1
            if self._calls % self._sweep_interval == 0:
                self._sweep_locked(window_seconds, now)

            if len(hits) >= max_requests:
                return RateLimitResult(False, max_requests, 0, hits[0] + window_seconds)

            hits.append(now)
            return RateLimitResult(True, max_requests, max_requests - len(hits), hits[0] + window_seconds)

    def sweep(self, window_seconds: float) -> int:
        """Drop keys whose hits have all left the window; returns keys dropped"""
        with self._lock:
            return self._sweep_locked(window_seconds, self._clock())

    def _sweep_locked(self, window_seconds: float, now: float) -> int:
        expired = [key for key, hits in self._hits.items() if not hits or hits[-1] <= now - window_seconds]
        for key in expired:
            del self._hits[key]
        return len(expired)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


def _token_subject(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    try:
        return decode_token(token).get("id")
    except AuthenticationError:
        return None


def get_rate_limit_key(request: Request) -> str:
    """
    Rate limit key for a request.

    Priority:
    1. Authenticated admin id (request state, else the bearer token)
    2. Client IP address
    """
    user = getattr(request.state, "user", None)
    user_id = user.get("id") if user else _token_subject(request)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_client_ip(request)}"


class RateLimiter:
    """FastAPI dependency enforcing ``max_requests`` per ``window_seconds``"""

    def __init__(
        self,
        store: RateLimitStore,
        max_requests: int,
        window_seconds: float,
        key_prefix: str = "general",
        message: str = "Too many requests, please try again later",
        key_func: Callable[[Request], str] = get_rate_limit_key,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key_prefix = key_prefix
        self.message = message
        self.key_func = key_func
        self.clock = clock or getattr(store, "now", time.time)

    async def __call__(self, request: Request, response: Response) -> None:
        key = f"{self.key_prefix}:{self.key_func(request)}"
        result = self.store.hit(key, self.window_seconds, self.max_requests)

        if not result.allowed:
            logger.warning("Rate limit exceeded for %s", key)
            raise RateLimitError(
                self.message,
                limit=result.limit,
                reset_time=result.reset_time,
                retry_after=result.retry_after(self.clock()),
            )

        response.headers["RateLimit-Limit"] = str(result.limit)
        response.headers["RateLimit-Remaining"] = str(result.remaining)
        response.headers["RateLimit-Reset"] = result.reset_time
