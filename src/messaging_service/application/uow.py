from __future__ import annotations

from typing import Protocol

from messaging_service.application.repositories.message import MessageReader, MessageWriter
from messaging_service.application.repositories.outbox import OutboxWriter
from messaging_service.application.repositories.user import UserDirectory


class UnitOfWork(Protocol):
    messages: MessageReader
    messages_w: MessageWriter
    users: UserDirectory
    outbox: OutboxWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
