"""Tenant context middleware.

Every request outside the excluded paths must address a tenant through
``{prefix}/{slug}/...``. The middleware resolves the slug once, before
routing, and either attaches the tenant to ``request.state`` or answers
the request itself.
"""

from typing import TYPE_CHECKING

import structlog
from fastapi import Request, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from torre_tempo.core.errors import (
    AppException,
    TenantSlugRequiredError,
    error_response,
    internal_error_response,
)
from torre_tempo.core.tenancy.context import TenantContext
from torre_tempo.core.tenancy.path import NO_MATCH, parse_tenant_slug
from torre_tempo.core.tenancy.resolver import TenantResolver
from torre_tempo.core.utils.paths import matches_path_prefix


if TYPE_CHECKING:
    from starlette.types import ASGIApp


logger = structlog.get_logger()


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Middleware that injects tenant context into requests.

    Attributes:
        session_factory: Factory for the session used by the tenant lookup
        prefix: Literal path segment that precedes the tenant slug
        exclude_paths: Paths that don't require tenant context
    """

    def __init__(
        self,
        app: "ASGIApp",
        session_factory: async_sessionmaker[AsyncSession],
        prefix: str,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.session_factory = session_factory
        self.prefix = prefix
        self.exclude_paths = exclude_paths or [
            "/health",
            "/info",
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Resolve the tenant for the request, then hand it downstream.

        Args:
            request: The incoming request
            call_next: The next middleware/handler

        Returns:
            The handler's response, or an error response if the tenant
            could not be resolved
        """
        path = request.url.path
        if matches_path_prefix(path, self.exclude_paths):
            return await call_next(request)

        slug = parse_tenant_slug(path, self.prefix)
        if slug is NO_MATCH:
            return error_response(TenantSlugRequiredError(self.prefix))

        try:
            tenant = await self._resolve(slug.value)
        except AppException as exc:
            return error_response(exc)
        except Exception:
            logger.exception("tenant_context_failed", tenant_slug=slug.value, path=path)
            return internal_error_response()

        request.state.tenant = tenant
        request.state.tenant_id = tenant.id
        structlog.contextvars.bind_contextvars(
            tenant_id=str(tenant.id),
            tenant_slug=tenant.slug,
        )
        logger.debug("tenant_context_resolved", tenant_id=str(tenant.id), tenant_slug=tenant.slug)

        return await call_next(request)

    async def _resolve(self, slug: str) -> TenantContext:
        async with self.session_factory() as session:
            return await TenantResolver(session).resolve(slug)
