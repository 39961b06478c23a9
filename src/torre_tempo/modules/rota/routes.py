"""Rota routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from torre_tempo.api.dependencies import DBSession
from torre_tempo.core.constants import ADVANCED_SCHEDULING_MODULE
from torre_tempo.core.errors import NotFoundError
from torre_tempo.core.tenancy.dependencies import CurrentTenant
from torre_tempo.modules.rota.repos import RotaRepository
from torre_tempo.modules.rota.schemas import RotaShiftRead, RotaWeekRead
from torre_tempo.modules.tenants.dependencies import require_module


router = APIRouter(
    prefix="/rota",
    tags=["rota"],
    dependencies=[Depends(require_module(ADVANCED_SCHEDULING_MODULE))],
)


@router.get(
    "/weeks",
    response_model=list[RotaWeekRead],
    summary="List rota weeks",
    description="Lists the tenant's rota weeks, optionally narrowed to one scope.",
)
async def list_weeks(
    tenant: CurrentTenant,
    db: DBSession,
    location: str | None = Query(default=None),
    department: str | None = Query(default=None),
) -> list[RotaWeekRead]:
    """List rota weeks for the current tenant."""
    weeks = await RotaRepository(db).list_weeks(tenant.id, location, department)
    return [RotaWeekRead.model_validate(week) for week in weeks]


@router.get(
    "/weeks/{week_id}/shifts",
    response_model=list[RotaShiftRead],
    response_model_by_alias=True,
    summary="List shifts of a week",
)
async def list_week_shifts(
    week_id: UUID,
    tenant: CurrentTenant,
    db: DBSession,
) -> list[RotaShiftRead]:
    """List the shifts of one rota week."""
    repo = RotaRepository(db)
    week = await repo.get_week(week_id, tenant.id)
    if week is None:
        raise NotFoundError("Rota week not found", resource="rota_week", resource_id=str(week_id))

    shifts = await repo.list_shifts(week.id, tenant.id)
    return [RotaShiftRead.model_validate(shift) for shift in shifts]
