from __future__ import annotations

from pydantic import BaseModel

from messaging_service.domain.entities.user import UserRef


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


def user_response(user: UserRef | None) -> UserResponse | None:
    if user is None:
        return None
    return UserResponse.model_validate(user, from_attributes=True)
