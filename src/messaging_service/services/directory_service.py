from __future__ import annotations

from messaging_service.application.dto.principal import Principal
from messaging_service.application.policies.roles import capabilities_for
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.user import UserRef


async def list_contactable_users(principal: Principal, uow: UnitOfWork) -> list[UserRef]:
    """Users the caller may address in a direct message, by name."""
    roles = capabilities_for(principal.role).contactable_roles
    users = await uow.users.list_by_roles([role.value for role in roles])
    return sorted(
        (u for u in users if u.id != principal.user_id),
        key=lambda u: (u.name.lower(), u.id),
    )
