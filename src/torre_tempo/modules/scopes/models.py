"""Scope membership model."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from torre_tempo.core.constants import MAX_SCOPE_LENGTH
from torre_tempo.core.database.base import Base


if TYPE_CHECKING:
    from torre_tempo.modules.users.models import User


class UserScope(Base):
    """Explicit membership of a user in a (location, department) pair.

    The whole triple is the primary key: a user may hold many scopes but
    never the same one twice.
    """

    __tablename__ = "user_scopes"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    location: Mapped[str] = mapped_column(
        String(MAX_SCOPE_LENGTH),
        primary_key=True,
    )
    department: Mapped[str] = mapped_column(
        String(MAX_SCOPE_LENGTH),
        primary_key=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="scopes")

    def __repr__(self) -> str:
        return (
            f"<UserScope(user_id={self.user_id}, location={self.location}, "
            f"department={self.department})>"
        )
