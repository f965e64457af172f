from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from vidscribe.utils.logger import clear_trace_id, set_trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Reuses the caller's request id or generates one
    - Stores it on request.state.request_id and in the logger trace context
    - Echoes it in the response header
    """

    def __init__(self, app, header_name: str = "X-Request-Id") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:
        rid = request.headers.get(self.header_name)
        if not rid:
            rid = uuid.uuid4().hex

        request.state.request_id = rid

        token = set_trace_id(rid)
        try:
            resp: Response = await call_next(request)
        finally:
            clear_trace_id(token)

        resp.headers[self.header_name] = rid
        return resp


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)
