"""
HTTP middleware: access logging and security headers.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from acquisitions.core.config import settings
from acquisitions.core.logging import get_logger

logger = get_logger("acquisitions.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Write one access-log line per request through the application logger."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()
        client = request.client.host if request.client else "-"

        try:
            response = await call_next(request)
        except Exception:
            latency_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.exception(
                f"{client} {request.method} {request.url.path} failed",
                extra={"latency_ms": latency_ms},
            )
            raise

        latency_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            f"{client} {request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
                "user_agent": request.headers.get("user-agent", "-"),
            },
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add conservative security headers to every response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        if not settings.is_development:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
