from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from messaging_service.api.deps import CurrentPrincipal, UoWDep
from messaging_service.api.v1.schemas.conversation import (
    ConversationResponse,
    ParticipantsResponse,
)
from messaging_service.api.v1.schemas.message import MessageResponse
from messaging_service.api.v1.schemas.user import UserResponse
from messaging_service.services import conversation_service

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])


@router.get("/{message_id}", response_model=ConversationResponse)
async def get_conversation(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ConversationResponse:
    conv = await conversation_service.get_conversation(message_id, principal, uow)
    return ConversationResponse(
        thread_id=conv.thread_id,
        messages=[MessageResponse.model_validate(m, from_attributes=True) for m in conv.messages],
        original_message=MessageResponse.model_validate(conv.original_message, from_attributes=True),
    )


@router.get("/{conversation_id}/participants", response_model=ParticipantsResponse)
async def list_participants(
    conversation_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ParticipantsResponse:
    result = await conversation_service.list_participants(conversation_id, principal, uow)
    return ParticipantsResponse(
        participants=[UserResponse.model_validate(u, from_attributes=True) for u in result.participants],
        total_messages=result.total_messages,
    )
