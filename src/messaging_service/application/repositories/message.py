from __future__ import annotations

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.enums import MessageMode


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_for_viewer(
        self,
        user_id: int,
        role: str,
        mode: MessageMode = MessageMode.ALL,
    ) -> list[Message]:
        """Messages the viewer sent or received, newest first."""
        ...

    async def list_by_conversations(
        self, conversation_ids: Collection[UUID]
    ) -> list[Message]:
        """Every message whose id or thread id is one of ``conversation_ids``."""
        ...


class MessageWriter(Protocol):
    async def add(self, message: Message) -> Message: ...

    async def set_read(self, message_id: UUID, is_read: bool) -> None: ...
