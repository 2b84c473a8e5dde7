"""Inbox, sent and broadcast projections of the unified message timeline."""
from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from messaging_service.application.dto.message import (
    MailboxEntry,
    MailboxResult,
    MailboxStats,
    ReplyPreview,
)
from messaging_service.application.dto.principal import Principal
from messaging_service.application.uow import UnitOfWork
from messaging_service.domain.entities.message import Message
from messaging_service.domain.entities.user import UserRef
from messaging_service.domain.services import thread_resolver
from messaging_service.domain.services.visibility import is_recipient
from messaging_service.domain.value_objects.enums import MailboxView, MessageMode


async def list_messages(
    principal: Principal,
    mode: MessageMode,
    view: MailboxView,
    uow: UnitOfWork,
) -> MailboxResult:
    visible = await uow.messages.list_for_viewer(principal.user_id, principal.role, mode)
    selected = project_view(visible, principal, view)

    conversations = thread_resolver.group_by_conversation(
        await uow.messages.list_by_conversations({m.conversation_id for m in selected})
    )
    entries = await _decorate(selected, conversations, uow)
    return MailboxResult(entries=entries, stats=compute_stats(selected, principal))


def project_view(
    messages: Iterable[Message],
    principal: Principal,
    view: MailboxView,
) -> list[Message]:
    """Pick the messages shown by ``view``, newest first."""
    messages = list(messages)

    if view == MailboxView.INBOX:
        selected = [
            thread_resolver.inbox_representative(group, principal.user_id, principal.role)
            for group in thread_resolver.group_by_conversation(messages).values()
        ]
    elif view == MailboxView.SENT:
        selected = [
            thread_resolver.sent_representative(group, principal.user_id)
            for group in thread_resolver.group_by_conversation(messages).values()
        ]
    elif view == MailboxView.BROADCASTS:
        selected = [m for m in messages if m.is_broadcast]
    else:
        selected = messages

    return sorted(
        (m for m in selected if m is not None),
        key=lambda m: (m.created_at, str(m.id)),
        reverse=True,
    )


def compute_stats(messages: Iterable[Message], principal: Principal) -> MailboxStats:
    messages = list(messages)
    # A broadcast can reach its own sender by role; that is not a received message.
    received = [
        m
        for m in messages
        if m.sender_id != principal.user_id
        and is_recipient(m, principal.user_id, principal.role)
    ]
    return MailboxStats(
        total=len(messages),
        unread=sum(1 for m in received if not m.is_read),
        sent=sum(1 for m in messages if m.sender_id == principal.user_id),
        received=len(received),
        broadcasts=sum(1 for m in messages if m.is_broadcast),
        direct=sum(1 for m in messages if not m.is_broadcast),
    )


async def _decorate(
    selected: list[Message],
    conversations: dict[UUID, list[Message]],
    uow: UnitOfWork,
) -> list[MailboxEntry]:
    by_id = {m.id: m for group in conversations.values() for m in group}
    participants = {
        m.conversation_id: thread_resolver.participant_ids(conversations.get(m.conversation_id, [m]))
        for m in selected
        if not m.is_broadcast
    }

    user_ids: set[int] = set()
    for message in selected:
        user_ids.add(message.sender_id)
        if message.receiver_id is not None:
            user_ids.add(message.receiver_id)
        if message.reply_to_id in by_id:
            user_ids.add(by_id[message.reply_to_id].sender_id)
    for ids in participants.values():
        user_ids.update(ids or ())
    users = await uow.users.get_many(user_ids)

    return [
        MailboxEntry(
            message=message,
            sender=users.get(message.sender_id),
            receiver=users.get(message.receiver_id) if message.receiver_id is not None else None,
            reply_to=_reply_preview(by_id.get(message.reply_to_id), users),
            reply_count=thread_resolver.reply_count(
                conversations.get(message.conversation_id, [message])
            ),
            participants=(
                None
                if message.is_broadcast
                else _resolve(participants.get(message.conversation_id), users)
            ),
        )
        for message in selected
    ]


def _reply_preview(parent: Message | None, users: dict[int, UserRef]) -> ReplyPreview | None:
    if parent is None:
        return None
    sender = users.get(parent.sender_id)
    return ReplyPreview(
        id=parent.id,
        subject=parent.subject,
        sender_name=sender.name if sender else None,
    )


def _resolve(ids: list[int] | None, users: dict[int, UserRef]) -> list[UserRef] | None:
    if ids is None:
        return None
    return [users[user_id] for user_id in ids if user_id in users]
