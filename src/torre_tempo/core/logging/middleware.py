"""Request logging and request ID middleware.

This module provides middleware for logging all HTTP requests and responses
with structured logging via structlog.
"""

import time
import uuid
from collections.abc import Callable
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from torre_tempo.core.utils.paths import matches_path_prefix


logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that writes one access log entry per request.

    The request ID arrives through the structlog context. The tenant is
    resolved further down the stack, so it is read back from
    ``request.state`` once the response is ready.
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            exclude_paths: Path prefixes that are not logged (probes, docs)
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or [
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if matches_path_prefix(path, self.exclude_paths):
            return await call_next(request)

        started = time.perf_counter()
        entry: dict[str, Any] = {"method": request.method, "path": path}
        if request.url.query:
            entry["query"] = request.url.query

        try:
            response = await call_next(request)
        except Exception:
            entry["duration_ms"] = _elapsed_ms(started)
            logger.exception("request_failed", **entry)
            raise

        entry["status_code"] = response.status_code
        tenant_id = getattr(request.state, "tenant_id", None)
        if tenant_id:
            entry["tenant_id"] = str(tenant_id)
        entry["duration_ms"] = _elapsed_ms(started)
        _log_for_status(response.status_code)("request_completed", **entry)
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _log_for_status(status_code: int) -> Callable[..., Any]:
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    return logger.info
