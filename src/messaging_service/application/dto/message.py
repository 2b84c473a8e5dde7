from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from messaging_service.domain.entities.message import Message
from messaging_service.domain.entities.user import UserRef
from messaging_service.domain.value_objects.enums import MessageType, Priority


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    subject: str
    content: str
    recipient_ids: list[int] = field(default_factory=list)
    is_broadcast: bool = False
    target_role: str | None = None
    type: MessageType = MessageType.GENERAL
    priority: Priority = Priority.MEDIUM
    reply_to_id: UUID | None = None
    thread_id: UUID | None = None


@dataclass(frozen=True, slots=True)
class SendResult:
    messages: list[Message]

    @property
    def conversation_id(self) -> UUID:
        return self.messages[0].conversation_id


@dataclass(frozen=True, slots=True)
class ReplyPreview:
    id: UUID
    subject: str
    sender_name: str | None


@dataclass(frozen=True, slots=True)
class MailboxEntry:
    """A message as shown in a mailbox view, decorated for display."""

    message: Message
    sender: UserRef | None
    receiver: UserRef | None
    reply_to: ReplyPreview | None
    reply_count: int
    participants: list[UserRef] | None


@dataclass(frozen=True, slots=True)
class MailboxStats:
    total: int = 0
    unread: int = 0
    sent: int = 0
    received: int = 0
    broadcasts: int = 0
    direct: int = 0


@dataclass(frozen=True, slots=True)
class MailboxResult:
    entries: list[MailboxEntry]
    stats: MailboxStats


@dataclass(frozen=True, slots=True)
class ConversationDTO:
    thread_id: UUID
    messages: list[Message]
    original_message: Message


@dataclass(frozen=True, slots=True)
class ParticipantsDTO:
    participants: list[UserRef]
    total_messages: int
