from __future__ import annotations

from collections.abc import Iterable

from messaging_service.application.dto.principal import Principal
from messaging_service.application.exceptions import ForbiddenError, NotFoundError
from messaging_service.application.policies.roles import capabilities_for
from messaging_service.domain.entities.message import Message
from messaging_service.domain.services.visibility import can_view, is_recipient


def assert_can_broadcast(principal: Principal) -> None:
    if not capabilities_for(principal.role).can_broadcast:
        raise ForbiddenError("Only administrators and teachers can send broadcasts")


def assert_message_access(principal: Principal, message: Message | None) -> Message:
    """Raise if the message doesn't exist or the principal can't see it."""
    if message is None:
        raise NotFoundError("Message not found")
    if not can_view(message, principal.user_id, principal.role):
        raise ForbiddenError("No access to this message")
    return message


def assert_conversation_access(principal: Principal, messages: Iterable[Message]) -> None:
    messages = list(messages)
    if not messages:
        raise NotFoundError("Conversation not found")
    if not any(can_view(m, principal.user_id, principal.role) for m in messages):
        raise ForbiddenError("No access to this conversation")


def assert_can_mark_read(principal: Principal, message: Message | None) -> Message:
    if message is None:
        raise NotFoundError("Message not found")
    # Senders don't own the read flag; only recipients do.
    if not is_recipient(message, principal.user_id, principal.role):
        raise ForbiddenError("Only a recipient can change the read state of this message")
    return message
