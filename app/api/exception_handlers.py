"""Global exception handlers that render errors through the response envelope."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import responses
from app.errors import AppError, ErrorCode, new
from app.schemas.response import ErrorInfo, Response

logger = logging.getLogger(__name__)

INVALID_REQUEST = "Invalid request"

_CODE_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.ALREADY_EXISTS,
}


def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    return responses.error(exc)


def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Binding failures (malformed JSON, wrong types, bad query values) before rule validation."""
    logger.info("Request binding failed: %s", exc.errors())
    return responses.error(new(ErrorCode.VALIDATION, INVALID_REQUEST))


def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing-level errors (unknown path, wrong method) in the shared envelope."""
    message = exc.detail if isinstance(exc.detail, str) and exc.detail else "Request failed"
    code = _CODE_BY_STATUS.get(exc.status_code)
    if code is not None:
        return responses.error(new(code, message))
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return responses.internal_error(exc)
    # Other 4xx keep their status; the closest client-side code is used.
    info = ErrorInfo(code=ErrorCode.VALIDATION.value, message=message)
    return JSONResponse(
        status_code=exc.status_code,
        content=Response(success=False, error=info).to_wire(),
        headers=getattr(exc, "headers", None),
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last line of defense: never leak internal exception text."""
    logger.exception(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return responses.error(exc)


def register_exception_handlers(app):
    """Register envelope exception handlers on the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
