"""HTTP middleware: per-request domain context and request rate limiting."""

import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.domain import logger
from storefront.utils.logging import bind_request_context, clear_request_context


class DomainContextMiddleware(BaseHTTPMiddleware):
    """Push the Protean domain context for the duration of each request.

    Log events emitted while handling the request carry its method and path.
    """

    def __init__(self, app, domain):
        super().__init__(app)
        self.domain = domain

    async def dispatch(self, request: Request, call_next):
        bind_request_context(method=request.method, path=request.url.path)
        try:
            with self.domain.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limit per client address.

    Counters live in process memory, so each worker enforces its own window.
    Windows that have expired are evicted at most once per window length.
    """

    def __init__(self, app, max_requests: int, window_seconds: int, exempt_paths=("/health",), clock=time.monotonic):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.exempt_paths = tuple(exempt_paths)
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "anonymous"

    def _evict_expired(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return

        self._last_sweep = now
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]

    async def dispatch(self, request: Request, call_next):
        if self.max_requests <= 0 or request.url.path in self.exempt_paths:
            return await call_next(request)

        key = self._client_key(request)
        now = self._clock()
        self._evict_expired(now)

        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        if count >= self.max_requests:
            retry_after = max(int(self.window_seconds - (now - started)), 1)
            logger.warning("Rate limit exceeded", client=key, path=request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests, please try again later."},
                headers={"Retry-After": str(retry_after)},
            )

        self._windows[key] = (started, count + 1)
        return await call_next(request)
