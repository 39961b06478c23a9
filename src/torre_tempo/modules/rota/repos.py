"""Rota repository for database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from torre_tempo.modules.rota.models import RotaShift, RotaWeek


class RotaRepository:
    """Repository for RotaWeek and RotaShift database operations.

    All queries are scoped to a tenant.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_weeks(
        self,
        tenant_id: UUID,
        location: str | None = None,
        department: str | None = None,
    ) -> list[RotaWeek]:
        """List a tenant's rota weeks, newest first.

        Args:
            tenant_id: The tenant's UUID
            location: Only weeks planned for this location
            department: Only weeks planned for this department

        Returns:
            Matching rota weeks
        """
        stmt = select(RotaWeek).where(RotaWeek.tenant_id == tenant_id)
        if location:
            stmt = stmt.where(RotaWeek.location == location)
        if department:
            stmt = stmt.where(RotaWeek.department == department)
        stmt = stmt.order_by(RotaWeek.week_start.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_week(self, week_id: UUID, tenant_id: UUID) -> RotaWeek | None:
        """Get a rota week by ID within a tenant."""
        stmt = select(RotaWeek).where(RotaWeek.id == week_id, RotaWeek.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_shifts(self, week_id: UUID, tenant_id: UUID) -> list[RotaShift]:
        """List the shifts of a week in chronological order."""
        stmt = (
            select(RotaShift)
            .where(RotaShift.week_id == week_id, RotaShift.tenant_id == tenant_id)
            .order_by(RotaShift.shift_date, RotaShift.start_time)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
