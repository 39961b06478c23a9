"""Root API router with health endpoints and module mounting."""

from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text

from torre_tempo.api.dependencies import DBSession
from torre_tempo.modules import discover_modules


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    checks: dict[str, str]


# Health check endpoints, outside tenant scope
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 if the process is running.",
)
async def liveness() -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks database connectivity.",
)
async def readiness(db: DBSession) -> JSONResponse:
    """Readiness probe endpoint."""
    checks: dict[str, str] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = type(e).__name__

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK
        if all_ok
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_ok else "degraded",
            "checks": checks,
        },
    )


@health_router.get(
    "/info",
    summary="Application info",
    description="Returns application metadata.",
)
async def info(request: Request) -> dict[str, Any]:
    """Application info endpoint."""
    settings = request.app.state.settings
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "tenant_path_prefix": settings.tenant_path_prefix,
    }


def build_api_router(tenant_path_prefix: str) -> APIRouter:
    """Build the root router, mounting module routers under the tenant prefix.

    Args:
        tenant_path_prefix: Literal segment preceding the tenant slug, e.g. ``/t``

    Returns:
        Router serving health endpoints and ``{prefix}/{tenant_slug}/...`` routes
    """
    api_router = APIRouter()
    api_router.include_router(health_router)

    tenant_router = APIRouter(prefix=f"{tenant_path_prefix}/{{tenant_slug}}")
    for module_router in discover_modules():
        tenant_router.include_router(module_router)
    api_router.include_router(tenant_router)

    return api_router
