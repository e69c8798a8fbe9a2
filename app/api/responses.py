"""Envelope constructors returning ready-to-send responses."""

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse, Response as EmptyResponse

from app.errors import ErrorCode, OpaqueFailure, StructuredFailure, classify, code_value, new, wrap
from app.schemas.response import ErrorInfo, Meta, Response
from app.validation import ValidationErrors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
VALIDATION_FAILED_MESSAGE = "Validation failed"


def _send(status_code: int, body: Response) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_wire())


# Success responses


def json(status_code: int, data: Any) -> JSONResponse:
    return _send(status_code, Response(success=True, data=data))


def json_with_meta(status_code: int, data: Any, meta: Meta) -> JSONResponse:
    return _send(status_code, Response(success=True, data=data, meta=meta))


# Error responses


def error(err: BaseException) -> JSONResponse:
    """Render any error into the envelope.

    Application errors show their code, safe message and details. Anything else
    becomes a generic INTERNAL_ERROR so no internal text reaches the client.
    """
    failure = classify(err)
    if isinstance(failure, StructuredFailure):
        app_error = failure.error
        if app_error.is_system_error and app_error.unwrap() is not None:
            logger.error("%s", app_error, exc_info=app_error.unwrap())
        info = ErrorInfo(
            code=code_value(app_error.code),
            message=app_error.message,
            details=app_error.details,
        )
        return _send(app_error.status_code, Response(success=False, error=info))
    if isinstance(failure, OpaqueFailure):
        logger.error("Unhandled error rendered as internal error: %r", failure.error)
        info = ErrorInfo(code=ErrorCode.INTERNAL.value, message=INTERNAL_ERROR_MESSAGE)
        return _send(status.HTTP_500_INTERNAL_SERVER_ERROR, Response(success=False, error=info))
    raise TypeError(f"Unhandled failure variant: {failure!r}")


# Convenience methods


def ok(data: Any) -> JSONResponse:
    return json(status.HTTP_200_OK, data)


def created(data: Any) -> JSONResponse:
    return json(status.HTTP_201_CREATED, data)


def no_content() -> EmptyResponse:
    return EmptyResponse(status_code=status.HTTP_204_NO_CONTENT)


def bad_request(message: str) -> JSONResponse:
    return error(new(ErrorCode.VALIDATION, message))


def not_found(message: str) -> JSONResponse:
    return error(new(ErrorCode.NOT_FOUND, message))


def unauthorized(message: str) -> JSONResponse:
    return error(new(ErrorCode.UNAUTHORIZED, message))


def internal_error(err: BaseException) -> JSONResponse:
    return error(wrap(err, ErrorCode.INTERNAL, INTERNAL_ERROR_MESSAGE))


def validation_failed(errors: ValidationErrors) -> JSONResponse:
    """Coerce collected field errors into a VALIDATION_ERROR response."""
    return error(new(ErrorCode.VALIDATION, VALIDATION_FAILED_MESSAGE, details=str(errors)))
