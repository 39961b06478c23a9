"""Error handling module."""

from torre_tempo.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ForbiddenError,
    ModuleAccessError,
    ModuleNotEnabledError,
    ModuleTrialExpiredError,
    NotFoundError,
    TenantContextRequiredError,
    TenantNotFoundError,
    TenantSlugRequiredError,
    TenantSuspendedError,
)
from torre_tempo.core.errors.handlers import (
    ErrorResponse,
    FieldError,
    error_response,
    internal_error_response,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    # Handlers
    "ErrorResponse",
    "FieldError",
    "ForbiddenError",
    "ModuleAccessError",
    "ModuleNotEnabledError",
    "ModuleTrialExpiredError",
    "NotFoundError",
    "TenantContextRequiredError",
    "TenantNotFoundError",
    "TenantSlugRequiredError",
    "TenantSuspendedError",
    "error_response",
    "internal_error_response",
    "register_exception_handlers",
]
