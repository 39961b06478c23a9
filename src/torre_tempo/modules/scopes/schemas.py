"""Pydantic schemas for scope responses."""

from pydantic import BaseModel, ConfigDict


class UserScopeRead(BaseModel):
    """One scope membership of a user."""

    model_config = ConfigDict(from_attributes=True)

    location: str
    department: str


class ScopeDirectoryRead(BaseModel):
    """Locations and departments configured for a tenant.

    Attributes:
        locations: Configured location names, in settings order
        departments: Configured department names, in settings order
        default_location: Location given to rows that have none
        default_department: Department given to rows that have none
    """

    locations: list[str]
    departments: list[str]
    default_location: str
    default_department: str
