from __future__ import annotations

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.enums import MessageMode
from messaging_service.infrastructure.db.mappers import message as mapper
from messaging_service.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: UUID) -> Message | None:
        result = await self._session.get(MessageModel, message_id)
        return mapper.model_to_entity(result) if result else None

    async def list_for_viewer(
        self,
        user_id: int,
        role: str,
        mode: MessageMode = MessageMode.ALL,
    ) -> list[Message]:
        clauses = []
        if mode in (MessageMode.DIRECT, MessageMode.ALL):
            clauses.append(
                and_(
                    MessageModel.is_broadcast.is_(False),
                    or_(
                        MessageModel.sender_id == user_id,
                        MessageModel.receiver_id == user_id,
                    ),
                )
            )
        if mode in (MessageMode.BROADCAST, MessageMode.ALL):
            clauses.append(
                and_(
                    MessageModel.is_broadcast.is_(True),
                    or_(
                        MessageModel.sender_id == user_id,
                        MessageModel.target_role == role,
                        MessageModel.target_role.is_(None),
                    ),
                )
            )
        stmt = (
            select(MessageModel)
            .where(or_(*clauses))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_by_conversations(
        self,
        conversation_ids: Collection[UUID],
    ) -> list[Message]:
        if not conversation_ids:
            return []
        ids = list(conversation_ids)
        stmt = (
            select(MessageModel)
            .where(or_(MessageModel.id.in_(ids), MessageModel.thread_id.in_(ids)))
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def set_read(self, message_id: UUID, is_read: bool) -> None:
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == message_id)
            .values(is_read=is_read)
        )
        await self._session.execute(stmt)
