"""Exception types and handlers that render every error in one envelope.

Repositories and the trash ledger report failures as `Outcome` values.
Routers turn a failed outcome into the matching `ERPException` with
`ERPException.from_outcome`; the handlers registered here render it as:

    {"error": {"code": "...", "message": "...", "details": {...}}}
"""

import logging
from typing import Union

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from erpdash.schemas.common import ErrorCode, Outcome

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.VALIDATION_FAILURE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.STORE_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


class ERPException(Exception):
    """Base class for errors raised out of a route."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "ERPException":
        """Pick the subclass matching a failed outcome's error code."""
        message = outcome.message or "Operation failed"
        for subclass in (NotAuthenticatedError, ResourceNotFoundError, ValidationFailureError, StoreFailureError):
            if subclass.error_code == getattr(outcome.error, "value", None):
                return subclass(message)
        return ERPException(message)


class NotAuthenticatedError(ERPException):
    status_code = STATUS_BY_CODE[ErrorCode.NOT_AUTHENTICATED]
    error_code = ErrorCode.NOT_AUTHENTICATED.value


class ResourceNotFoundError(ERPException):
    status_code = STATUS_BY_CODE[ErrorCode.NOT_FOUND]
    error_code = ErrorCode.NOT_FOUND.value


class ValidationFailureError(ERPException):
    status_code = STATUS_BY_CODE[ErrorCode.VALIDATION_FAILURE]
    error_code = ErrorCode.VALIDATION_FAILURE.value


class StoreFailureError(ERPException):
    """The backing store rejected or could not complete the call."""

    status_code = STATUS_BY_CODE[ErrorCode.STORE_FAILURE]
    error_code = ErrorCode.STORE_FAILURE.value


def error_body(code: str, message: str, details: Union[dict, list, None] = None) -> dict:
    body = {"code": code, "message": message}
    if details:
        body["details"] = details
    return {"error": body}


def _where(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def erp_exception_handler(request: Request, exc: ERPException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{_where(request)} -> {exc.status_code} {exc.error_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.error_code, exc.message))


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException],
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{_where(request)} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", str(exc.detail)),
    )


async def validation_exception_handler(
    request: Request,
    exc: Union[RequestValidationError, ValidationError],
) -> JSONResponse:
    """Request bodies that fail schema validation never reach a repository."""
    errors = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.info(f"{_where(request)} -> 422 ({len(errors)} validation error(s))")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(ErrorCode.VALIDATION_FAILURE.value, "Validation error", {"errors": errors}),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {_where(request)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
    )


def register_exception_handlers(app):
    """Register all custom exception handlers with the FastAPI app."""
    app.add_exception_handler(ERPException, erp_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
