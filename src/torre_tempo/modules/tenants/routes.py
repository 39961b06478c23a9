"""Tenant routes."""

from fastapi import APIRouter

from torre_tempo.core.tenancy.dependencies import CurrentTenant
from torre_tempo.modules.tenants.schemas import TenantRead


router = APIRouter(prefix="/tenant", tags=["tenants"])


@router.get(
    "",
    response_model=TenantRead,
    summary="Current tenant",
    description="Returns the tenant addressed by the request path.",
)
async def get_current_tenant(tenant: CurrentTenant) -> TenantRead:
    """Return the resolved tenant context."""
    return TenantRead.model_validate(tenant)
