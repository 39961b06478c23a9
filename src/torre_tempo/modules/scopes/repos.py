"""Scope membership repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from torre_tempo.modules.scopes.models import UserScope


class UserScopeRepository:
    """Repository for UserScope database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for_user(self, user_id: UUID) -> list[UserScope]:
        """List a user's memberships ordered by location, then department."""
        stmt = (
            select(UserScope)
            .where(UserScope.user_id == user_id)
            .order_by(UserScope.location, UserScope.department)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
