"""
Trace middleware for request-scoped correlation IDs.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from services.shared.logging import get_logger, trace_id_var
from services.shared.metrics import http_request_duration_seconds, http_requests_total

logger = get_logger("relay.http")


def route_path(request: Request) -> str:
    """Matched route template, so unknown paths do not explode label cardinality."""
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


class TraceMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
        token = trace_id_var.set(trace_id)
        request.state.trace_id = trace_id
        started = time.monotonic()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            elapsed = time.monotonic() - started
            status_code = getattr(response, "status_code", 500)
            method = request.method
            path = route_path(request)

            http_request_duration_seconds.labels(
                method=method,
                path=path,
                status_code=str(status_code),
            ).observe(elapsed)
            http_requests_total.labels(
                method=method,
                path=path,
                status_code=str(status_code),
            ).inc()

            logger.info(
                "http_request",
                extra={
                    "method": method,
                    "path": request.url.path,
                    "status": status_code,
                    "elapsed_ms": round(elapsed * 1000, 1),
                },
            )
            trace_id_var.reset(token)
            if response is not None:
                response.headers["X-Trace-ID"] = trace_id
