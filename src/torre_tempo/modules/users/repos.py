"""User repository for database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from torre_tempo.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    All queries are scoped to a tenant.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: UUID, tenant_id: UUID) -> User | None:
        """Get a user by ID within a tenant.

        Args:
            user_id: The user's UUID
            tenant_id: The tenant the user must belong to

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
