from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query

from messaging_service.api.deps import CurrentPrincipal, UoWDep
from messaging_service.api.v1.schemas.message import (
    MailboxEntryResponse,
    MailboxResponse,
    MailboxStatsResponse,
    MarkReadRequest,
    MessageResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from messaging_service.domain.value_objects.enums import MailboxView, MessageMode
from messaging_service.services import mailbox_service, message_service, read_state_service

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("", response_model=MailboxResponse)
async def list_messages(
    principal: CurrentPrincipal,
    uow: UoWDep,
    mode: MessageMode = Query(MessageMode.ALL),
    view: MailboxView = Query(MailboxView.ALL),
) -> MailboxResponse:
    result = await mailbox_service.list_messages(principal, mode, view, uow)
    return MailboxResponse(
        messages=[MailboxEntryResponse.from_entry(e) for e in result.entries],
        stats=MailboxStatsResponse.model_validate(result.stats, from_attributes=True),
    )


@router.post("", response_model=SendMessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> SendMessageResponse:
    result = await message_service.send_message(principal, body.to_dto(), uow)
    return SendMessageResponse(
        messages=[MessageResponse.model_validate(m, from_attributes=True) for m in result.messages],
        conversation_id=result.conversation_id,
    )


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_read(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    body: MarkReadRequest | None = None,
) -> MessageResponse:
    is_read = body.is_read if body is not None else True
    msg = await read_state_service.mark_read(message_id, principal, is_read, uow)
    return MessageResponse.model_validate(msg, from_attributes=True)
