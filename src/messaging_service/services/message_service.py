from __future__ import annotations

import logging
from datetime import datetime, timezone

from messaging_service.application.dto.message import SendMessageDTO, SendResult
from messaging_service.application.dto.principal import Principal
from messaging_service.application.exceptions import NotFoundError, ValidationError
from messaging_service.application.policies.permissions import (
    assert_can_broadcast,
    assert_message_access,
)
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.message import Message
from messaging_service.domain.events import message_created
from messaging_service.domain.events.message_created import MessageCreated
from messaging_service.domain.services.fanout import (
    Envelope,
    build_broadcast,
    build_direct,
    unique_recipients,
)
from messaging_service.domain.services.reply_resolver import build_reply
from messaging_service.domain.value_objects.enums import ALL_ROLES, UserRole

logger = logging.getLogger(__name__)


async def send_message(
    principal: Principal,
    data: SendMessageDTO,
    uow: UnitOfWork,
) -> SendResult:
    """Create the rows for a new message, a reply or a broadcast.

    Everything is validated before the first insert, and all rows of one
    send are committed together or not at all.
    """
    _validate_text(data)
    envelope = Envelope(
        sender_id=principal.user_id,
        subject=data.subject,
        content=data.content,
        type=data.type.value,
        priority=data.priority.value,
    )
    now = datetime.now(timezone.utc)

    if data.reply_to_id is not None:
        original = await uow.messages.get_by_id(data.reply_to_id)
        if original is None:
            raise NotFoundError("Original message not found")
        assert_message_access(principal, original)
        rows = [build_reply(envelope, original, now)]
    elif data.is_broadcast:
        assert_can_broadcast(principal)
        _validate_target_role(data.target_role)
        rows = [build_broadcast(envelope, data.target_role, now, thread_id=data.thread_id)]
    else:
        recipients = unique_recipients(data.recipient_ids)
        await _assert_recipients_exist(recipients, uow)
        rows = build_direct(envelope, recipients, now)

    stored = await _store(rows, uow)
    logger.info(
        "User %s sent %d message(s) in conversation %s (broadcast=%s)",
        principal.user_id,
        len(stored),
        stored[0].conversation_id,
        stored[0].is_broadcast,
    )
    return SendResult(messages=stored)


async def _store(rows: list[Message], uow: UnitOfWork) -> list[Message]:
    stored: list[Message] = []
    try:
        for row in rows:
            stored.append(await uow.messages_w.add(row))
            await uow.outbox.add(
                message_created.EVENT_TYPE,
                MessageCreated.from_message(row).to_payload(),
            )
        await uow.commit()
    except Exception:
        await uow.rollback()
        raise
    return stored


def _validate_text(data: SendMessageDTO) -> None:
    if not data.subject or not data.subject.strip():
        raise ValidationError("Subject is required", field="subject")
    if not data.content or not data.content.strip():
        raise ValidationError("Content is required", field="content")


def _validate_target_role(target_role: str | None) -> None:
    if target_role is None or target_role == ALL_ROLES:
        return
    if target_role not in UserRole.__members__.values():
        raise ValidationError(
            f"Unknown target role: {target_role}",
            field="target_role",
            invalid=[target_role],
        )


async def _assert_recipients_exist(recipients: list[int], uow: UnitOfWork) -> None:
    if not recipients:
        raise ValidationError(
            "At least one recipient is required for a direct message",
            field="recipient_ids",
        )
    found = await uow.users.get_many(recipients)
    missing = [user_id for user_id in recipients if user_id not in found]
    if missing:
        logger.warning("Rejected send with unknown recipient ids: %s", missing)
        raise ValidationError(
            f"Unknown recipients: {', '.join(map(str, missing))}",
            field="recipient_ids",
            invalid=missing,
        )
