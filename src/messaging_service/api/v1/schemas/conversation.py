from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from messaging_service.api.v1.schemas.message import MessageResponse
from messaging_service.api.v1.schemas.user import UserResponse


class ConversationResponse(BaseModel):
    thread_id: UUID
    messages: list[MessageResponse]
    original_message: MessageResponse


class ParticipantsResponse(BaseModel):
    participants: list[UserResponse]
    total_messages: int
