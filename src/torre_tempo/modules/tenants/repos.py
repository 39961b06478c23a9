"""Tenant repository for database operations."""

from typing import Any, NamedTuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from torre_tempo.modules.tenants.models import Tenant, TenantModule


class TenantRecord(NamedTuple):
    """Projection of the tenant columns needed to resolve a request."""

    id: UUID
    slug: str
    legal_name: str
    settings: dict[str, Any] | None
    subscription_status: str


class TenantRepository:
    """Repository for Tenant database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_slug(self, slug: str) -> TenantRecord | None:
        """Fetch the resolution projection of a tenant by its unique slug.

        Args:
            slug: The tenant's URL slug

        Returns:
            TenantRecord if found, None otherwise
        """
        stmt = select(
            Tenant.id,
            Tenant.slug,
            Tenant.legal_name,
            Tenant.settings,
            Tenant.subscription_status,
        ).where(Tenant.slug == slug)
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return TenantRecord(*row)


class TenantModuleRepository:
    """Repository for TenantModule database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, tenant_id: UUID, module_key: str) -> TenantModule | None:
        """Get a tenant's entry for one module, if any."""
        stmt = select(TenantModule).where(
            TenantModule.tenant_id == tenant_id,
            TenantModule.module_key == module_key,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
