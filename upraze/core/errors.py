"""
Pipeline errors and their HTTP mapping.

Every error response has the same shape:

    {"error": {"code": ..., "message": ..., "request_id": ...}, "detail": ...}

and echoes the request id in the x-request-id header.
"""

import logging
from typing import Any, Optional
from uuid import uuid4

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from upraze.core.logging import LOGGER_NAME, get_request_id

logger = logging.getLogger(LOGGER_NAME)


class AppError(Exception):
    code = "app_error"
    status_code = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None, request_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.request_id = request_id


class ValidationError(AppError, ValueError):
    """Precondition violation on pipeline input (lengths, finiteness, tags)."""
    code = "validation_error"
    status_code = 400


class EmptyHistoryError(ValidationError):
    """A domain was asked for a momentum score without any samples."""
    code = "empty_history"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or get_request_id() or str(uuid4())


def _error_response(status_code: int, code: str, message: str, rid: str, detail: Any = None) -> JSONResponse:
    content = {
        "error": {"code": code, "message": message, "request_id": rid},
        "detail": message if detail is None else detail,
    }
    response = JSONResponse(status_code=status_code, content=content)
    response.headers["x-request-id"] = rid
    return response


async def app_error_handler(request: Request, exc: AppError):
    rid = exc.request_id or _request_id(request)
    logger.log(
        logging.ERROR if exc.status_code >= 500 else logging.WARNING,
        "app.error",
        extra={"request_id": rid, "error_code": exc.code, "status": exc.status_code, "path": request.url.path},
    )
    return _error_response(exc.status_code, exc.code, exc.message, rid)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies (e.g. NaN readings, negative streaks) -> 422."""
    rid = _request_id(request)
    logger.warning("request.invalid", extra={"request_id": rid, "error_code": "invalid_request", "status": 422})
    return _error_response(422, "invalid_request", "Invalid request body", rid, jsonable_encoder(exc.errors()))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    rid = _request_id(request)
    code = "not_found" if exc.status_code == 404 else "http_error"
    logger.warning("http.error", extra={"request_id": rid, "error_code": code, "status": exc.status_code})
    return _error_response(exc.status_code, code, str(exc.detail or "HTTP error"), rid)


async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _request_id(request)
    logger.error("unhandled.exception", exc_info=exc, extra={"request_id": rid, "error_code": "internal_error"})
    return _error_response(500, "internal_error", "Unexpected error", rid)
