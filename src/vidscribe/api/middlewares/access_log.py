from __future__ import annotations

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from vidscribe.metrics import inc_http_request
from vidscribe.utils.logger import get_logger, get_trace_id

logger = get_logger("vidscribe.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Access log + HTTP request counter. Runs inside RequestContextMiddleware."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        method = request.method
        status = 500
        try:
            resp = await call_next(request)
            status = resp.status_code
            return resp
        finally:
            dur_ms = (time.perf_counter() - start) * 1000.0
            route = request.scope.get("route")
            # Route template keeps the label set bounded (/v1/jobs/{job_id}, not every id).
            path = getattr(route, "path", None) or request.url.path
            inc_http_request(method=method, path=path, status=status)
            logger.info(
                "ACCESS method=%s path=%s status=%s dur_ms=%.2f trace=%s",
                method,
                request.url.path,
                status,
                dur_ms,
                get_trace_id(),
            )
