from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any
from uuid import UUID

from messaging_service.domain.entities.message import Message

EVENT_TYPE = "messaging.message_created"


@dataclass(frozen=True, slots=True)
class MessageCreated:
    message_id: UUID
    conversation_id: UUID
    sender_id: int
    receiver_id: int | None
    is_broadcast: bool
    target_role: str | None
    subject: str
    priority: str

    @classmethod
    def from_message(cls, message: Message) -> MessageCreated:
        return cls(
            message_id=message.id,
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            is_broadcast=message.is_broadcast,
            target_role=message.target_role,
            subject=message.subject,
            priority=message.priority,
        )

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["message_id"] = str(self.message_id)
        payload["conversation_id"] = str(self.conversation_id)
        return payload
