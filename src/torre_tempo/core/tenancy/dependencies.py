"""FastAPI dependencies for the resolved tenant."""

from typing import Annotated

from fastapi import Depends, Request

from torre_tempo.core.errors import TenantContextRequiredError
from torre_tempo.core.tenancy.context import TenantContext


def get_tenant_context(request: Request) -> TenantContext:
    """Return the tenant attached by ``TenantContextMiddleware``.

    Raises:
        TenantContextRequiredError: If the route is reachable without tenant resolution
    """
    tenant = getattr(request.state, "tenant", None)
    if tenant is None:
        raise TenantContextRequiredError()
    return tenant


CurrentTenant = Annotated[TenantContext, Depends(get_tenant_context)]
