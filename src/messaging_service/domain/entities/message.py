from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    sender_id: int
    receiver_id: int | None
    subject: str
    content: str
    type: str
    priority: str
    is_broadcast: bool
    target_role: str | None
    thread_id: UUID | None
    reply_to_id: UUID | None
    is_read: bool
    created_at: datetime

    @property
    def conversation_id(self) -> UUID:
        """Grouping key: the shared thread id, or the message's own id for a root."""
        return self.thread_id or self.id

    def with_read(self, is_read: bool) -> Message:
        return replace(self, is_read=is_read)
