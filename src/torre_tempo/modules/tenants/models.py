"""Tenant database models."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from torre_tempo.core.constants import (
    MAX_MODULE_KEY_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SLUG_LENGTH,
    MAX_STATUS_LENGTH,
)
from torre_tempo.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class SubscriptionStatus(str, Enum):
    """Known subscription states of a tenant."""

    TRIAL = "trial"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


# Only these states let requests through to tenant-scoped handlers.
ACCESS_GRANTING_STATUSES: frozenset[str] = frozenset(
    {SubscriptionStatus.ACTIVE.value, SubscriptionStatus.TRIAL.value}
)


def grants_access(subscription_status: str) -> bool:
    """Whether a subscription state admits tenant-scoped requests."""
    return subscription_status in ACCESS_GRANTING_STATUSES


class Tenant(Base, UUIDMixin, TimestampMixin):
    """Tenant model representing an organizational customer.

    All tenant-scoped data references this table via tenant_id. The slug
    appears in every tenant-scoped URL and never changes once assigned.

    Attributes:
        slug: Globally unique URL token
        legal_name: Registered name of the organization
        settings: Free-form settings document (directories, rota, time rules)
        subscription_status: Billing state; stored as text so statuses
            unknown to this code stay representable
    """

    __tablename__ = "tenants"

    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    legal_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    settings: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )
    subscription_status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        nullable=False,
        default=SubscriptionStatus.TRIAL.value,
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug={self.slug}, status={self.subscription_status})>"


class TenantModule(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """A feature module switched on or off for one tenant.

    Attributes:
        module_key: Stable module identifier, e.g. ``advanced_scheduling``
        enabled: Whether the tenant may use the module at all
        trial_until: End of the trial period; ``None`` for a paid module
    """

    __tablename__ = "tenant_modules"
    __table_args__ = (UniqueConstraint("tenant_id", "module_key", name="uq_tenant_modules_key"),)

    module_key: Mapped[str] = mapped_column(
        String(MAX_MODULE_KEY_LENGTH),
        nullable=False,
    )
    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    trial_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def trial_expired(self, now: datetime | None = None) -> bool:
        """Whether the trial period ended before ``now``."""
        if self.trial_until is None:
            return False
        trial_until = self.trial_until
        # SQLite hands back naive datetimes; they are stored as UTC
        if trial_until.tzinfo is None:
            trial_until = trial_until.replace(tzinfo=UTC)
        return (now or datetime.now(UTC)) > trial_until

    def __repr__(self) -> str:
        return f"<TenantModule(tenant_id={self.tenant_id}, key={self.module_key})>"
