from __future__ import annotations

from fastapi import APIRouter

from messaging_service.api.deps import CurrentPrincipal, UoWDep
from messaging_service.api.v1.schemas.user import UserResponse
from messaging_service.services import directory_service

router = APIRouter(prefix="/api/v1/messaging", tags=["directory"])


@router.get("/users", response_model=list[UserResponse])
async def list_contactable_users(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[UserResponse]:
    users = await directory_service.list_contactable_users(principal, uow)
    return [UserResponse.model_validate(u, from_attributes=True) for u in users]
