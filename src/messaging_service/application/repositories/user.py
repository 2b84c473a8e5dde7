from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from messaging_service.domain.entities.user import UserRef


class UserDirectory(Protocol):
    """Read-only access to portal users, owned by the identity subsystem."""

    async def get_many(self, user_ids: Collection[int]) -> dict[int, UserRef]: ...

    async def list_by_roles(self, roles: Collection[str]) -> list[UserRef]: ...
