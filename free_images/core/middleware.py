"""
Custom middleware for request logging and rate limiting
"""

import logging
import time
from collections import defaultdict, deque

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

UNLIMITED_PATHS = ("/api/v1/health", "/api/v1/", "/docs", "/openapi.json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding window limit, protecting the upstream provider quota"""

    def __init__(self, app, calls: int = 60, period: int = 60):
        super().__init__(app)
        self.calls = calls
        self.period = period
        self.clients = defaultdict(deque)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNLIMITED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client is not None else "unknown"
        now = time.time()
        window = self.clients[client_ip]
        while window and window[0] <= now - self.period:
            window.popleft()

        if len(window) >= self.calls:
            logger.warning("Rate limit exceeded for IP: %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={
                    "detail": {
                        "error": "Rate limit exceeded",
                        "details": f"Maximum {self.calls} searches per {self.period} seconds",
                    }
                },
            )

        window.append(now)
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every picker request with its latency"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_host = request.client.host if request.client is not None else "unknown"
        logger.info(
            "Request: %s %s?%s from %s",
            request.method,
            request.url.path,
            request.url.query,
            client_host,
        )

        response = await call_next(request)

        logger.info(
            "Response: %d in %.3fs", response.status_code, time.time() - start_time
        )
        return response
