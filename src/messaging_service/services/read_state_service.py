from __future__ import annotations

import logging
import uuid

from messaging_service.application.dto.principal import Principal
from messaging_service.application.policies.permissions import assert_can_mark_read
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.message import Message
from messaging_service.domain.events import message_read
from messaging_service.domain.events.message_read import MessageRead

logger = logging.getLogger(__name__)


async def mark_read(
    message_id: uuid.UUID,
    principal: Principal,
    is_read: bool,
    uow: UnitOfWork,
) -> Message:
    """Set the read flag. Setting it to its current value is a no-op."""
    message = await uow.messages.get_by_id(message_id)
    message = assert_can_mark_read(principal, message)
    if message.is_read == is_read:
        return message

    await uow.messages_w.set_read(message_id, is_read)
    await uow.outbox.add(
        message_read.EVENT_TYPE,
        MessageRead(message_id=message_id, reader_id=principal.user_id, is_read=is_read).to_payload(),
    )
    await uow.commit()
    logger.info("User %s marked message %s is_read=%s", principal.user_id, message_id, is_read)
    return message.with_read(is_read)
