"""Per-tenant feature module gate."""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request

from torre_tempo.api.dependencies import DBSession
from torre_tempo.core.errors import ModuleNotEnabledError, ModuleTrialExpiredError
from torre_tempo.core.tenancy.dependencies import CurrentTenant
from torre_tempo.modules.tenants.repos import TenantModuleRepository


logger = structlog.get_logger()


def require_module(module_key: str) -> Callable[..., Awaitable[None]]:
    """Create a dependency that admits only tenants with ``module_key`` enabled.

    Usage:
        router = APIRouter(dependencies=[Depends(require_module("advanced_scheduling"))])

    Args:
        module_key: Identifier of the feature module

    Returns:
        Dependency raising ``ModuleNotEnabledError`` or
        ``ModuleTrialExpiredError`` when the tenant may not use the module
    """

    async def check_module(request: Request, tenant: CurrentTenant, db: DBSession) -> None:
        module = await TenantModuleRepository(db).get(tenant.id, module_key)

        prefix = request.app.state.settings.tenant_path_prefix
        upgrade_url = f"{prefix}/{tenant.slug}/billing/upgrade?module={module_key}"

        if module is None or not module.enabled:
            raise ModuleNotEnabledError(module_key, upgrade_url)
        if module.trial_expired():
            raise ModuleTrialExpiredError(module_key, upgrade_url)

        logger.debug("module_access_granted", tenant_id=str(tenant.id), module_key=module_key)

    return check_module
