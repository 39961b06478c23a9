"""Pydantic schemas for tenant responses."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TenantRead(BaseModel):
    """The resolved tenant as seen by its own users."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    legal_name: str
    settings: dict[str, Any]
