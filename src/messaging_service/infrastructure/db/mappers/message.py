from __future__ import annotations

from messaging_service.domain.entities.message import Message
from messaging_service.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender_id=model.sender_id,
        receiver_id=model.receiver_id,
        subject=model.subject,
        content=model.content,
        type=model.type,
        priority=model.priority,
        is_broadcast=model.is_broadcast,
        target_role=model.target_role,
        thread_id=model.thread_id,
        reply_to_id=model.reply_to_id,
        is_read=model.is_read,
        created_at=model.created_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        sender_id=entity.sender_id,
        receiver_id=entity.receiver_id,
        subject=entity.subject,
        content=entity.content,
        type=entity.type,
        priority=entity.priority,
        is_broadcast=entity.is_broadcast,
        target_role=entity.target_role,
        thread_id=entity.thread_id,
        reply_to_id=entity.reply_to_id,
        is_read=entity.is_read,
        created_at=entity.created_at,
    )
