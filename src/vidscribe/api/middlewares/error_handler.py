from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vidscribe.api.middlewares.request_context import get_request_id
from vidscribe.errors import VidscribeError
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.api")


def error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Every error leaves the bridge as {"error": {code, message, details, request_id}}."""
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": jsonable_encoder(details or {}),
            "request_id": get_request_id(request) or "",
        }
    }
    return JSONResponse(status_code=status_code, content=body)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(VidscribeError)
    async def _typed_error(request: Request, exc: VidscribeError) -> JSONResponse:
        logger.info(
            "API_ERROR rid=%s code=%s status=%s msg=%s",
            get_request_id(request), exc.code, exc.status_code, exc.message,
        )
        return error_response(
            request, status_code=exc.status_code, code=exc.code, message=exc.message, details=exc.details
        )

    @app.exception_handler(RequestValidationError)
    async def _bad_request_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        where = ".".join(str(p) for p in first.get("loc", ()))
        return error_response(
            request,
            status_code=422,
            code="invalid_request",
            message=f"{where}: {first.get('msg', 'invalid request')}" if where else "invalid request",
            details={"errors": errors},
        )

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("API_UNHANDLED_ERROR rid=%s", get_request_id(request))
        return error_response(request, status_code=500, code="internal_error", message=str(exc))
