"""Per-request tenant context."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TenantContext(BaseModel):
    """Tenant data attached to a request once its slug has been resolved.

    Subscription status is not carried; only tenants that passed the
    subscription gate get a context.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    slug: str
    legal_name: str
    settings: dict[str, Any]

