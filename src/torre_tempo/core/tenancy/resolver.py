"""Tenant resolution service."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from torre_tempo.core.errors import TenantNotFoundError, TenantSuspendedError
from torre_tempo.core.tenancy.context import TenantContext
from torre_tempo.modules.tenants.models import grants_access
from torre_tempo.modules.tenants.repos import TenantRepository


logger = structlog.get_logger()


class TenantResolver:
    """Resolves a tenant slug into the context handed to request handlers.

    Usage:
        resolver = TenantResolver(session)
        context = await resolver.resolve("demo")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.repo = TenantRepository(session)

    async def resolve(self, slug: str) -> TenantContext:
        """Look up ``slug`` and check that its subscription admits access.

        Args:
            slug: Tenant slug taken from the request path

        Returns:
            The tenant context without subscription status

        Raises:
            TenantNotFoundError: If no tenant has this slug
            TenantSuspendedError: If the subscription is neither active nor trial
        """
        record = await self.repo.get_by_slug(slug)
        if record is None:
            logger.info("tenant_not_found", tenant_slug=slug)
            raise TenantNotFoundError(slug)

        if not grants_access(record.subscription_status):
            logger.warning(
                "tenant_suspended",
                tenant_id=str(record.id),
                tenant_slug=slug,
                subscription_status=record.subscription_status,
            )
            raise TenantSuspendedError()

        return TenantContext(
            id=record.id,
            slug=record.slug,
            legal_name=record.legal_name,
            settings=record.settings or {},
        )
