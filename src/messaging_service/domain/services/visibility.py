"""Who may see a message, independent of how it is projected."""
from __future__ import annotations

from messaging_service.domain.entities.message import Message
from messaging_service.domain.value_objects.enums import MessageMode


def is_recipient(message: Message, user_id: int, role: str) -> bool:
    if message.is_broadcast:
        return message.target_role is None or message.target_role == role
    return message.receiver_id == user_id


def can_view(message: Message, user_id: int, role: str) -> bool:
    return message.sender_id == user_id or is_recipient(message, user_id, role)


def matches_mode(message: Message, mode: MessageMode) -> bool:
    if mode == MessageMode.DIRECT:
        return not message.is_broadcast
    if mode == MessageMode.BROADCAST:
        return message.is_broadcast
    return True
