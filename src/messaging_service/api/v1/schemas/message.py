from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from messaging_service.api.v1.schemas.user import UserResponse, user_response
from messaging_service.application.dto.message import MailboxEntry, SendMessageDTO
from messaging_service.domain.value_objects.enums import MessageType, Priority, UserRole


class SendMessageRequest(BaseModel):
    subject: str = Field(max_length=255)
    content: str
    recipient_ids: list[int] = Field(default_factory=list)
    # Single-recipient shorthand; takes precedence over recipient_ids.
    receiver_id: int | None = None
    is_broadcast: bool = False
    target_role: UserRole | Literal["ALL"] | None = None
    type: MessageType = MessageType.GENERAL
    priority: Priority = Priority.MEDIUM
    reply_to_id: UUID | None = None
    thread_id: UUID | None = None

    def to_dto(self) -> SendMessageDTO:
        recipients = [self.receiver_id] if self.receiver_id is not None else self.recipient_ids
        return SendMessageDTO(
            subject=self.subject,
            content=self.content,
            recipient_ids=list(recipients),
            is_broadcast=self.is_broadcast,
            target_role=self.target_role,
            type=self.type,
            priority=self.priority,
            reply_to_id=self.reply_to_id,
            thread_id=self.thread_id,
        )


class MarkReadRequest(BaseModel):
    is_read: bool = True


class MessageResponse(BaseModel):
    id: UUID
    conversation_id: UUID
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

    model_config = {"from_attributes": True}


class ReplyPreviewResponse(BaseModel):
    id: UUID
    subject: str
    sender_name: str | None

    model_config = {"from_attributes": True}


class MailboxEntryResponse(MessageResponse):
    sender: UserResponse | None = None
    receiver: UserResponse | None = None
    reply_to: ReplyPreviewResponse | None = None
    reply_count: int = 0
    participants: list[UserResponse] | None = None

    @classmethod
    def from_entry(cls, entry: MailboxEntry) -> MailboxEntryResponse:
        base = MessageResponse.model_validate(entry.message, from_attributes=True)
        return cls(
            **base.model_dump(),
            sender=user_response(entry.sender),
            receiver=user_response(entry.receiver),
            reply_to=(
                ReplyPreviewResponse.model_validate(entry.reply_to, from_attributes=True)
                if entry.reply_to
                else None
            ),
            reply_count=entry.reply_count,
            participants=(
                [user_response(u) for u in entry.participants]
                if entry.participants is not None
                else None
            ),
        )


class MailboxStatsResponse(BaseModel):
    total: int
    unread: int
    sent: int
    received: int
    broadcasts: int
    direct: int

    model_config = {"from_attributes": True}


class MailboxResponse(BaseModel):
    messages: list[MailboxEntryResponse]
    stats: MailboxStatsResponse


class SendMessageResponse(BaseModel):
    messages: list[MessageResponse]
    conversation_id: UUID
