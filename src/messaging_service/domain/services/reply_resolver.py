from __future__ import annotations

import uuid
from datetime import datetime

from messaging_service.domain.entities.message import Message
from messaging_service.domain.services.fanout import Envelope


def build_reply(envelope: Envelope, original: Message, now: datetime) -> Message:
    """Private answer to the author of ``original``.

    The reply joins the conversation of ``original``, so chains of any
    depth converge on one conversation id. Replies are never broadcast,
    even when ``original`` was.
    """
    return Message(
        id=uuid.uuid4(),
        sender_id=envelope.sender_id,
        receiver_id=original.sender_id,
        subject=envelope.subject,
        content=envelope.content,
        type=envelope.type,
        priority=envelope.priority,
        is_broadcast=False,
        target_role=None,
        thread_id=original.thread_id or original.id,
        reply_to_id=original.id,
        is_read=False,
        created_at=now,
    )
