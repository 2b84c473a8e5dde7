from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from messaging_service.domain.entities.user import UserRef
from messaging_service.infrastructure.db.mappers import user as mapper
from messaging_service.infrastructure.db.models.user import UserModel


class UserDirectoryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_many(self, user_ids: Collection[int]) -> dict[int, UserRef]:
        if not user_ids:
            return {}
        stmt = select(UserModel).where(UserModel.id.in_(list(user_ids)))
        result = await self._session.execute(stmt)
        return {m.id: mapper.model_to_entity(m) for m in result.scalars().all()}

    async def list_by_roles(self, roles: Collection[str]) -> list[UserRef]:
        stmt = (
            select(UserModel)
            .where(UserModel.role.in_(list(roles)))
            .order_by(UserModel.name, UserModel.id)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]
