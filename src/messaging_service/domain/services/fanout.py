"""Materialise one logical send into stored rows."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.enums import ALL_ROLES


@dataclass(frozen=True, slots=True)
class Envelope:
    """Fields shared by every row produced from one send."""

    sender_id: int
    subject: str
    content: str
    type: str
    priority: str


def normalize_target_role(target_role: str | None) -> str | None:
    if target_role is None or target_role == ALL_ROLES:
        return None
    return target_role


def unique_recipients(recipient_ids: list[int]) -> list[int]:
    return list(dict.fromkeys(recipient_ids))


def build_broadcast(
    envelope: Envelope,
    target_role: str | None,
    now: datetime,
    *,
    thread_id: uuid.UUID | None = None,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        sender_id=envelope.sender_id,
        receiver_id=None,
        subject=envelope.subject,
        content=envelope.content,
        type=envelope.type,
        priority=envelope.priority,
        is_broadcast=True,
        target_role=normalize_target_role(target_role),
        thread_id=thread_id,
        reply_to_id=None,
        is_read=False,
        created_at=now,
    )


def build_direct(
    envelope: Envelope,
    recipient_ids: list[int],
    now: datetime,
) -> list[Message]:
    """One row per recipient.

    A single recipient gets no thread id; several recipients share a
    freshly generated one so the send reads as one conversation.
    """
    recipients = unique_recipients(recipient_ids)
    thread_id = uuid.uuid4() if len(recipients) > 1 else None
    return [
        Message(
            id=uuid.uuid4(),
            sender_id=envelope.sender_id,
            receiver_id=receiver_id,
            subject=envelope.subject,
            content=envelope.content,
            type=envelope.type,
            priority=envelope.priority,
            is_broadcast=False,
            target_role=None,
            thread_id=thread_id,
            reply_to_id=None,
            is_read=False,
            created_at=now,
        )
        for receiver_id in recipients
    ]
