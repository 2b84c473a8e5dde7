from __future__ import annotations

import uuid

from messaging_service.application.dto.message import ConversationDTO, ParticipantsDTO
from messaging_service.application.dto.principal import Principal
from messaging_service.application.policies.permissions import (
    assert_conversation_access,
    assert_message_access,
)
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.services import thread_resolver


async def get_conversation(
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> ConversationDTO:
    """Full thread around ``message_id``, oldest first."""
    anchor = await uow.messages.get_by_id(message_id)
    anchor = assert_message_access(principal, anchor)

    thread = await uow.messages.list_by_conversations([anchor.conversation_id])
    return ConversationDTO(
        thread_id=anchor.conversation_id,
        messages=thread_resolver.collapse_fanout_copies(thread or [anchor]),
        original_message=anchor,
    )


async def list_participants(
    conversation_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> ParticipantsDTO:
    messages = await uow.messages.list_by_conversations([conversation_id])
    assert_conversation_access(principal, messages)

    ids = thread_resolver.participant_ids(messages) or []
    users = await uow.users.get_many(ids)
    return ParticipantsDTO(
        participants=[users[user_id] for user_id in ids if user_id in users],
        total_messages=len(messages),
    )
