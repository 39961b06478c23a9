"""Rota (schedule) database models."""

from datetime import date, time
from enum import Enum
from uuid import UUID

from sqlalchemy import Date, ForeignKey, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from torre_tempo.core.constants import MAX_ROLE_NAME_LENGTH, MAX_STATUS_LENGTH
from torre_tempo.core.database.base import (
    Base,
    ScopeMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)


class RotaWeekStatus(str, Enum):
    """Publication state of a rota week."""

    DRAFT = "draft"
    PUBLISHED = "published"


class RotaWeek(Base, UUIDMixin, TimestampMixin, TenantMixin, ScopeMixin):
    """A week of shifts planned for one location and department."""

    __tablename__ = "rota_weeks"

    week_start: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        nullable=False,
        default=RotaWeekStatus.DRAFT.value,
    )

    shifts: Mapped[list["RotaShift"]] = relationship(
        "RotaShift",
        back_populates="week",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<RotaWeek(id={self.id}, week_start={self.week_start}, location={self.location})>"


class RotaShift(Base, UUIDMixin, TimestampMixin, TenantMixin, ScopeMixin):
    """A single shift inside a rota week, optionally assigned to a user."""

    __tablename__ = "rota_shifts"

    week_id: Mapped[UUID] = mapped_column(
        ForeignKey("rota_weeks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    shift_date: Mapped[date] = mapped_column(
        "date",
        Date,
        nullable=False,
    )
    start_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )
    end_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )
    role: Mapped[str | None] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=True,
    )

    week: Mapped["RotaWeek"] = relationship("RotaWeek", back_populates="shifts")

    def __repr__(self) -> str:
        return f"<RotaShift(id={self.id}, week_id={self.week_id}, date={self.shift_date})>"
