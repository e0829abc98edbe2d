"""Observability middleware: request IDs, logging, and metrics."""

import re
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from dbscope.core.metrics import http_request_duration_seconds, http_requests_total

# Health checks and metric scrapes hit these every few seconds; they log at debug.
QUIET_PATHS = frozenset({"/health/live", "/health/ready", "/metrics"})

_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def request_id_from(request: Request) -> str:
    """Reuse the caller's X-Request-ID when it is a safe token, else mint one."""
    incoming = request.headers.get("X-Request-ID", "")
    if _REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Binds a request_id to the log context and records HTTP metrics.

    Each log line also carries whether the browser session was connected
    when the request arrived, so a 409 is readable without the session dump.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request_id_from(request)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        session = getattr(request.app.state, "session", None)
        if session is not None:
            structlog.contextvars.bind_contextvars(session_connected=session.is_connected)

        logger = structlog.stdlib.get_logger("dbscope.http")
        start = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start
        status = response.status_code

        # Route pattern keeps label cardinality low
        route = request.scope.get("route")
        path = route.path if route else request.url.path
        method = request.method

        http_requests_total.labels(method=method, path=path, status=status).inc()
        http_request_duration_seconds.labels(method=method, path=path).observe(duration)

        response.headers["X-Request-ID"] = request_id

        log = logger.debug if path in QUIET_PATHS else logger.info
        log(
            "request_completed",
            method=method,
            path=path,
            status=status,
            duration_ms=round(duration * 1000, 2),
        )

        structlog.contextvars.clear_contextvars()
        return response
