"""User database models."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from torre_tempo.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from torre_tempo.core.database.base import (
    Base,
    ScopeMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)


if TYPE_CHECKING:
    from torre_tempo.modules.scopes.models import UserScope


class User(Base, UUIDMixin, TimestampMixin, TenantMixin, ScopeMixin):
    """User model representing an employee of a tenant.

    ``location`` and ``department`` hold the legacy single-scope
    assignment; explicit memberships live in ``user_scopes``.

    Attributes:
        email: Email address, unique within the tenant
        full_name: User's full name
        is_active: Whether the user can sign in and be rostered
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    scopes: Mapped[list["UserScope"]] = relationship(
        "UserScope",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, tenant_id={self.tenant_id})>"
