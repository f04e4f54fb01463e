"""Application error taxonomy and the exception handlers that render it.

Every failure that reaches the HTTP boundary is translated into one of the
shapes below. Handlers and repositories raise the `AppError` subclasses; the
functions registered by `register_exception_handlers` turn them into JSON.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds to validation errors that carry no meaning for clients.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie", "form"}


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error into a response body."""
        return {"message": self.message}


class ValidationFailedError(AppError):
    """Raised when a request does not match its schema."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"

    def __init__(
        self,
        errors: Sequence[Mapping[str, str]] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = [dict(item) for item in errors or ()]

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> ValidationFailedError:
        """Build the error from a Pydantic validation failure."""
        return cls(format_validation_errors(exc.errors()))


class ConflictError(AppError):
    """Raised when a unique value (email, username) is already in use."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class UnauthorizedError(AppError):
    """Raised when the credential is missing, invalid, or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(AppError):
    """Raised when the authenticated user lacks the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, str]]:
    """Flatten Pydantic/FastAPI error dicts into `{field, message}` pairs."""
    formatted: list[dict[str, str]] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_PREFIXES:
            location = location[1:]
        formatted.append(
            {
                "field": ".".join(location) or "__root__",
                "message": str(error.get("msg", "Invalid value")),
            }
        )
    return formatted


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an `AppError` with its status code."""
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render schema mismatches as 400 with every violated field listed."""
    error = ValidationFailedError(format_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404 routes, 405 methods) as `{message}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort catcher: log with stack trace, hide details from the client."""
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler above to the application."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
