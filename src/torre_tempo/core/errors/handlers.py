"""Exception handlers producing ``{error, message}`` JSON bodies.

Handlers registered on the app cover route-level failures. Middleware
that rejects a request before routing calls :func:`error_response` and
:func:`internal_error_response` directly, so both paths share one body
shape.
"""

from typing import TYPE_CHECKING, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from torre_tempo.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ErrorResponse(BaseModel):
    """Error response schema.

    Attributes:
        error: Short, stable summary of the failure
        message: Human-readable explanation specific to this occurrence
        errors: List of field-level errors (for validation errors)
    """

    error: str
    message: str | None = None
    errors: list[FieldError] | None = None


def error_response(exc: AppException) -> JSONResponse:
    """Render an application exception as a JSON response.

    Server-side failures (5xx) always render the opaque internal error body.
    """
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return internal_error_response()

    content = ErrorResponse(error=exc.error, message=exc.message).model_dump(exclude_none=True)
    content.update(exc.response_fields)
    return JSONResponse(status_code=exc.status_code, content=content)


def internal_error_response() -> JSONResponse:
    """Render the opaque 500 response; no error detail reaches the caller."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error").model_dump(exclude_none=True),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )
    return error_response(exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level detail."""
    errors: list[FieldError] = []

    for error in exc.errors():
        loc = error.get("loc", ())
        # Skip "body" prefix in field path
        field_parts = [str(part) for part in loc if part != "body"]
        field = ".".join(field_parts) if field_parts else "unknown"

        errors.append(
            FieldError(
                field=field,
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    logger.warning(
        "validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="Validation error",
            message="Request validation failed",
            errors=errors,
        ).model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    The actual error details are logged but not exposed to clients.
    """
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
