"""User routes."""

from uuid import UUID

from fastapi import APIRouter

from torre_tempo.api.dependencies import DBSession
from torre_tempo.core.errors import NotFoundError
from torre_tempo.core.tenancy.dependencies import CurrentTenant
from torre_tempo.modules.scopes.repos import UserScopeRepository
from torre_tempo.modules.scopes.schemas import UserScopeRead
from torre_tempo.modules.users.repos import UserRepository


router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/{user_id}/scopes",
    response_model=list[UserScopeRead],
    summary="User scope memberships",
    description="Lists the (location, department) pairs a user of this tenant belongs to.",
)
async def list_user_scopes(
    user_id: UUID,
    tenant: CurrentTenant,
    db: DBSession,
) -> list[UserScopeRead]:
    """List a user's scope memberships."""
    user = await UserRepository(db).get_by_id(user_id, tenant.id)
    if user is None:
        raise NotFoundError("User not found", resource="user", resource_id=str(user_id))

    scopes = await UserScopeRepository(db).list_for_user(user.id)
    return [UserScopeRead.model_validate(scope) for scope in scopes]
