"""Rate Limiting Middleware for FastAPI.

In-memory sliding window per client IP and auth route. Each serverless
instance keeps its own window, which is enough to blunt login/callback
hammering. Expired windows are swept once per window and the number of
tracked keys is capped, least recently used first out.
"""

import time
from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.errors import ERROR_RATE_LIMITED
from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

WINDOW_SECONDS = 60
MAX_TRACKED_KEYS = 10_000

AUTH_PATHS = frozenset(
    {
        "/api/auth/login",
        "/api/auth/callback",
        "/api/auth/logout",
        "/api/auth/session",
    }
)


def client_ip(request: Request) -> str:
    """Address of the caller as seen by the nearest proxy.

    The rightmost X-Forwarded-For hop is the one our proxy appended; hops to
    its left are whatever the client sent.
    """
    if forwarded_for := request.headers.get("X-Forwarded-For"):
        hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
        if hops:
            return hops[-1]
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limits requests per IP address per route in ``paths``."""

    def __init__(
        self,
        app: Any,
        requests_per_minute: int = 30,
        paths: Iterable[str] = AUTH_PATHS,
        max_keys: int = MAX_TRACKED_KEYS,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.paths = frozenset(paths)
        self.max_keys = max_keys
        self._cache: dict[str, list[float]] = {}
        self._last_sweep = 0.0

    async def dispatch(self, request: Request, call_next: Callable[..., Any]) -> Response:
        path = request.url.path.rstrip("/") or "/"
        if path not in self.paths:
            return await call_next(request)  # type: ignore[no-any-return]

        ip = client_ip(request)
        key = f"rate_limit:{ip}:{path}"
        now = time.time()
        self._sweep(now)

        if self._is_rate_limited(key, now):
            logger.warning(f"Rate limit exceeded for {sanitize_string_for_logging(ip)} on {path}")
            # Exceptions raised in middleware skip the app exception handlers
            return JSONResponse(
                {"error": ERROR_RATE_LIMITED},
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(WINDOW_SECONDS)},
            )

        self._record_request(key, now)

        return await call_next(request)  # type: ignore[no-any-return]

    def _recent(self, key: str, now: float) -> list[float]:
        return [t for t in self._cache.get(key, []) if now - t < WINDOW_SECONDS]

    def _is_rate_limited(self, key: str, now: float) -> bool:
        return len(self._recent(key, now)) >= self.requests_per_minute

    def _record_request(self, key: str, now: float) -> None:
        recent = self._recent(key, now)
        # Re-insert so dict order tracks recency
        self._cache.pop(key, None)
        self._cache[key] = [*recent, now]
        while len(self._cache) > self.max_keys:
            del self._cache[next(iter(self._cache))]

    def _sweep(self, now: float) -> None:
        """Drop keys whose whole window has expired, at most once per window."""
        if now - self._last_sweep < WINDOW_SECONDS:
            return
        self._last_sweep = now
        for key in [k for k, stamps in self._cache.items() if not stamps or now - stamps[-1] >= WINDOW_SECONDS]:
            del self._cache[key]
