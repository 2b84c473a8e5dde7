from __future__ import annotations

from messaging_service.domain.entities.user import UserRef
from messaging_service.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> UserRef:
    return UserRef(
        id=model.id,
        name=model.name or model.email,
        email=model.email,
        role=model.role,
    )
