"""Scope routes."""

from fastapi import APIRouter

from torre_tempo.core.tenancy.dependencies import CurrentTenant
from torre_tempo.modules.scopes.defaults import ScopeDefaults, directory_entries
from torre_tempo.modules.scopes.schemas import ScopeDirectoryRead


router = APIRouter(prefix="/scopes", tags=["scopes"])


@router.get(
    "/directory",
    response_model=ScopeDirectoryRead,
    summary="Scope directory",
    description="Locations and departments configured in the tenant settings.",
)
async def get_scope_directory(tenant: CurrentTenant) -> ScopeDirectoryRead:
    """Return the tenant's scope directory and derived defaults."""
    defaults = ScopeDefaults.from_settings(tenant.settings)
    return ScopeDirectoryRead(
        locations=_names(directory_entries(tenant.settings, "locations")),
        departments=_names(directory_entries(tenant.settings, "departments")),
        default_location=defaults.location,
        default_department=defaults.department,
    )


def _names(entries: list[object]) -> list[str]:
    return [entry for entry in entries if isinstance(entry, str) and entry]
