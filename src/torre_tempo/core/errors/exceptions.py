"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to ``{"error": ..., "message": ...}`` responses by the
exception handlers.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable explanation of this occurrence
        error: Short, stable summary returned to clients
        error_code: Machine-readable error code used in logs
        status_code: HTTP status code for the response
        details: Additional error details, logged but not returned
        response_fields: Extra top-level fields added to the response body
    """

    message: str = "An unexpected error occurred"
    error: str = "Internal server error"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        response_fields: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error = error or self.error
        self.error_code = error_code or self.error_code
        self.details = details or {}
        self.response_fields = response_fields or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    """Raised for general client errors.

    Example:
        raise BadRequestError("Invalid request format")
    """

    message = "Bad request"
    error = "Bad request"
    error_code = "bad_request"
    status_code = 400


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("User not found", resource="user", resource_id=str(user_id))
    """

    message = "Resource not found"
    error = "Not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ForbiddenError(AppException):
    """Raised when the caller may not access a resource.

    Example:
        raise ForbiddenError("Tenant account is not active")
    """

    message = "Access forbidden"
    error = "Forbidden"
    error_code = "forbidden"
    status_code = 403


class TenantSlugRequiredError(BadRequestError):
    """Raised when a tenant-scoped path carries no tenant slug."""

    error = "Tenant slug required"
    error_code = "tenant_slug_required"

    def __init__(self, prefix: str) -> None:
        super().__init__(message=f"URL must be in format: {prefix}/{{tenantSlug}}/...")


class TenantNotFoundError(NotFoundError):
    """Raised when no tenant exists for a slug."""

    error = "Tenant not found"
    error_code = "tenant_not_found"

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(message=f"Tenant '{slug}' does not exist")


class TenantSuspendedError(ForbiddenError):
    """Raised when a tenant exists but its subscription forbids access."""

    message = "This tenant account is not active"
    error = "Tenant suspended"
    error_code = "tenant_suspended"


class TenantContextRequiredError(BadRequestError):
    """Raised when a tenant-scoped handler runs without a resolved tenant."""

    message = "Tenant context is required for this operation"
    error = "Tenant context required"
    error_code = "tenant_context_required"


class ModuleAccessError(ForbiddenError):
    """Base for a tenant lacking access to a feature module.

    The response carries ``upgrade_url`` pointing at the tenant's billing
    upgrade page for the module.
    """

    def __init__(self, module_key: str, message: str, upgrade_url: str) -> None:
        self.module_key = module_key
        super().__init__(
            message=message,
            details={"module_key": module_key},
            response_fields={"upgrade_url": upgrade_url},
        )


class ModuleNotEnabledError(ModuleAccessError):
    """Raised when a module is absent or disabled for the tenant."""

    error = "Module not enabled"
    error_code = "module_not_enabled"

    def __init__(self, module_key: str, upgrade_url: str) -> None:
        super().__init__(
            module_key,
            f"The '{module_key}' module is not enabled for this tenant",
            upgrade_url,
        )


class ModuleTrialExpiredError(ModuleAccessError):
    """Raised when a module's trial period has ended."""

    error = "Module trial expired"
    error_code = "module_trial_expired"

    def __init__(self, module_key: str, upgrade_url: str) -> None:
        super().__init__(module_key, f"The trial for '{module_key}' has expired", upgrade_url)
