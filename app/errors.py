"""Application error taxonomy.

Every failure that crosses the API boundary is an ``AppError`` carrying a
stable, machine-readable ``ErrorCode``. The HTTP status is derived from the
code and cannot be set on its own.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from fastapi import status


class ErrorCode(str, Enum):
    # Business logic errors
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # System errors
    DATABASE = "DATABASE_ERROR"
    EXTERNAL = "EXTERNAL_SERVICE_ERROR"
    INTERNAL = "INTERNAL_ERROR"
    TIMEOUT = "TIMEOUT_ERROR"


BUSINESS_CODES = frozenset(
    {
        ErrorCode.VALIDATION,
        ErrorCode.NOT_FOUND,
        ErrorCode.ALREADY_EXISTS,
        ErrorCode.UNAUTHORIZED,
        ErrorCode.FORBIDDEN,
    }
)
SYSTEM_CODES = frozenset(
    {ErrorCode.DATABASE, ErrorCode.EXTERNAL, ErrorCode.INTERNAL, ErrorCode.TIMEOUT}
)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.EXTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.TIMEOUT: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _normalize_code(code: ErrorCode | str) -> ErrorCode | str:
    try:
        return ErrorCode(code)
    except ValueError:
        return code


def status_for_code(code: ErrorCode | str) -> int:
    """Map an error code to its HTTP status. Unrecognized codes map to 500."""
    return _STATUS_BY_CODE.get(_normalize_code(code), status.HTTP_500_INTERNAL_SERVER_ERROR)


def code_value(code: ErrorCode | str) -> str:
    return code.value if isinstance(code, ErrorCode) else str(code)


class AppError(Exception):
    """Structured application error.

    ``message`` is safe to show to clients. The wrapped cause (if any) lives in
    ``__cause__`` and is only meant for logs and introspection.
    """

    def __init__(
        self,
        code: ErrorCode | str,
        message: str,
        details: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = _normalize_code(code)
        self.message = message
        self.details = details
        self.__cause__ = cause

    @property
    def status_code(self) -> int:
        return status_for_code(self.code)

    @property
    def is_system_error(self) -> bool:
        return self.code not in BUSINESS_CODES

    def unwrap(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        text = f"{code_value(self.code)}: {self.message}"
        if self.__cause__ is not None:
            return f"{text} (caused by: {self.__cause__})"
        return text

    def __repr__(self) -> str:
        return f"AppError(code={code_value(self.code)!r}, message={self.message!r})"


def new(code: ErrorCode | str, message: str, details: str | None = None) -> AppError:
    return AppError(code, message, details=details)


def wrap(cause: BaseException, code: ErrorCode | str, message: str) -> AppError:
    """Wrap a lower-level error. The cause text never reaches ``details``."""
    return AppError(code, message, cause=cause)


def wrapf(cause: BaseException, code: ErrorCode | str, fmt: str, *args: object) -> AppError:
    return wrap(cause, code, fmt % args if args else fmt)


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and every explicitly chained cause, outermost first."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__


def chain_contains(err: BaseException | None, target: BaseException) -> bool:
    """Report whether ``target`` itself (by identity) is part of the cause chain."""
    return any(item is target for item in iter_chain(err))


def as_app_error(err: BaseException | None) -> AppError | None:
    for item in iter_chain(err):
        if isinstance(item, AppError):
            return item
    return None


def is_error_code(err: BaseException | None, code: ErrorCode | str) -> bool:
    """Report whether any ``AppError`` in the cause chain carries ``code``."""
    wanted = _normalize_code(code)
    return any(isinstance(item, AppError) and item.code == wanted for item in iter_chain(err))


@dataclass(frozen=True)
class StructuredFailure:
    error: AppError


@dataclass(frozen=True)
class OpaqueFailure:
    error: BaseException


Failure = StructuredFailure | OpaqueFailure


def classify(err: BaseException) -> Failure:
    """Split errors into structured application errors and opaque ones."""
    app_error = as_app_error(err)
    if app_error is not None:
        return StructuredFailure(app_error)
    return OpaqueFailure(err)
