"""Sliding-window rate limiting by client address.

Two limiters guard the API: a general one counting every ``/api`` request,
and one for login that only counts failed attempts. Counters live in
process memory, so each worker enforces its own window.
"""

import threading
import time
from collections.abc import Callable
from typing import NamedTuple

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.config import get_settings

logger = structlog.get_logger(__name__)


class RateLimitResult(NamedTuple):
    """Result of a rate limit check."""

    allowed: bool
    remaining: int
    retry_after: int  # seconds until the oldest hit leaves the window
    limit: int


class SlidingWindowLimiter:
    """Allow at most ``limit`` hits per key within ``window_seconds``."""

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def _current(self, key: str, now: float) -> list[float]:
        window_start = now - self.window_seconds
        hits = [t for t in self._hits.get(key, []) if t > window_start]
        if hits:
            self._hits[key] = hits
        else:
            self._hits.pop(key, None)
        return hits

    def _result(self, hits: list[float], now: float) -> RateLimitResult:
        allowed = len(hits) < self.limit
        retry_after = 0
        if not allowed:
            retry_after = int(hits[0] + self.window_seconds - now) + 1 if hits else self.window_seconds
        return RateLimitResult(
            allowed=allowed,
            remaining=max(0, self.limit - len(hits)),
            retry_after=retry_after,
            limit=self.limit,
        )

    def check(self, key: str) -> RateLimitResult:
        """Report whether ``key`` may proceed without counting this call."""
        with self._lock:
            now = self._clock()
            return self._result(self._current(key, now), now)

    def hit(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` if it is within the limit."""
        with self._lock:
            now = self._clock()
            hits = self._current(key, now)
            result = self._result(hits, now)
            if result.allowed:
                self._hits[key] = [*hits, now]
                result = result._replace(remaining=result.remaining - 1)
            return result

    def record(self, key: str) -> None:
        """Count one event for ``key`` unconditionally."""
        with self._lock:
            now = self._clock()
            self._hits[key] = [*self._current(key, now), now]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_api_limiter: SlidingWindowLimiter | None = None
_login_limiter: SlidingWindowLimiter | None = None


def get_api_limiter() -> SlidingWindowLimiter:
    global _api_limiter
    if _api_limiter is None:
        settings = get_settings()
        _api_limiter = SlidingWindowLimiter(settings.api_rate_limit, settings.rate_limit_window_seconds)
    return _api_limiter


def get_login_limiter() -> SlidingWindowLimiter:
    global _login_limiter
    if _login_limiter is None:
        settings = get_settings()
        _login_limiter = SlidingWindowLimiter(settings.login_rate_limit, settings.rate_limit_window_seconds)
    return _login_limiter


def reset_rate_limits() -> None:
    """Drop both limiters so the next request rebuilds them from settings (useful for tests)."""
    global _api_limiter, _login_limiter
    _api_limiter = None
    _login_limiter = None


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the general limiter to every request under ``path_prefix``."""

    def __init__(self, app, path_prefix: str = "/api") -> None:
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        result = get_api_limiter().hit(client_address(request))
        if not result.allowed:
            logger.warning(
                "rate_limit_exceeded",
                client=client_address(request),
                path=request.url.path,
                retry_after=result.retry_after,
            )
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests from this IP, please try again later."},
                headers={"Retry-After": str(result.retry_after)},
            )

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(result.limit)
        response.headers["RateLimit-Remaining"] = str(result.remaining)
        return response
