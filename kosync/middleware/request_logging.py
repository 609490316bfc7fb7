# Request logging and response hardening middleware
# Every request gets a correlation id that is logged and echoed as X-Request-ID

import json
import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("kosync.requests")

REDACTED_HEADERS = {"x-auth-key", "authorization", "cookie"}
LOGGED_HEADERS = ("user-agent", "content-type", "x-auth-user", "x-auth-key", "authorization")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}
HTML_CSP = "default-src 'self'; style-src 'self'; img-src 'self' data:"


def generate_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def safe_headers(request: Request) -> dict:
    headers = {}
    for name in LOGGED_HEADERS:
        value = request.headers.get(name)
        if value is None:
            continue
        headers[name] = "[REDACTED]" if name in REDACTED_HEADERS else value
    return headers


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = generate_request_id()
        request.state.request_id = request_id
        start = time.perf_counter()
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }

        logger.info("Incoming request %s", json.dumps(safe_headers(request)), extra=context)

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.exception(
                "Request failed",
                extra={
                    **context,
                    "duration_ms": duration_ms,
                    "username": getattr(request.state, "username", None),
                    "user_id": getattr(request.state, "user_id", None),
                },
            )
            response = Response(
                content=json.dumps({
                    "error": "internal",
                    "message": "Internal server error",
                    "request_id": request_id,
                }),
                status_code=500,
                media_type="application/json",
            )

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request completed",
            extra={**context, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if response.headers.get("content-type", "").startswith("text/html"):
            response.headers.setdefault("Content-Security-Policy", HTML_CSP)
        return response
