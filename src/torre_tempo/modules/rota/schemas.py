"""Pydantic schemas for rota responses."""

from datetime import date, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RotaWeekRead(BaseModel):
    """A rota week."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    week_start: date
    status: str
    location: str | None
    department: str | None


class RotaShiftRead(BaseModel):
    """A shift inside a rota week."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    week_id: UUID
    user_id: UUID | None
    shift_date: date = Field(serialization_alias="date")
    start_time: time
    end_time: time
    role: str | None
    location: str | None
    department: str | None
