from __future__ import annotations

import uuid

import pytest

from messaging_service.application.dto.principal import Principal
from messaging_service.domain.value_objects.enums import MailboxView, MessageMode, UserRole
from messaging_service.services import mailbox_service
from tests.conftest import (
    ADMIN_ID,
    PARENT_B_ID,
    PARENT_C_ID,
    STUDENT_ID,
    TEACHER_ID,
    make_message,
)


async def _inbox(principal, uow, mode=MessageMode.ALL):
    return await mailbox_service.list_messages(principal, mode, MailboxView.INBOX, uow)


async def _sent(principal, uow, mode=MessageMode.ALL):
    return await mailbox_service.list_messages(principal, mode, MailboxView.SENT, uow)


def _ids(result):
    return [entry.message.id for entry in result.entries]


@pytest.mark.asyncio
async def test_role_broadcast_reaches_only_that_role(
    admin_principal, parent_principal, teacher_principal, uow,
):
    notice = make_message(sender_id=ADMIN_ID, is_broadcast=True, target_role=UserRole.PARENT)
    uow.seed(notice)

    parent_inbox = await _inbox(parent_principal, uow)
    teacher_inbox = await _inbox(teacher_principal, uow)
    admin_sent = await _sent(admin_principal, uow)

    assert _ids(parent_inbox) == [notice.id]
    assert parent_inbox.entries[0].participants is None
    assert parent_inbox.entries[0].receiver is None
    assert teacher_inbox.entries == []
    assert _ids(admin_sent) == [notice.id]


@pytest.mark.asyncio
async def test_broadcast_to_everyone_reaches_every_role(student_principal, uow):
    notice = make_message(sender_id=ADMIN_ID, is_broadcast=True, target_role=None)
    uow.seed(notice)

    result = await _inbox(student_principal, uow)

    assert _ids(result) == [notice.id]
    assert result.stats.unread == 1


@pytest.mark.asyncio
async def test_fanout_shows_once_per_recipient_and_once_in_sent(
    teacher_principal, parent_principal, other_parent_principal, uow,
):
    thread = uuid.uuid4()
    copy_b = make_message(sender_id=TEACHER_ID, receiver_id=PARENT_B_ID, thread_id=thread)
    copy_c = make_message(sender_id=TEACHER_ID, receiver_id=PARENT_C_ID, thread_id=thread)
    uow.seed(copy_b, copy_c)

    inbox_b = await _inbox(parent_principal, uow)
    inbox_c = await _inbox(other_parent_principal, uow)
    sent = await _sent(teacher_principal, uow)

    assert _ids(inbox_b) == [copy_b.id]
    assert _ids(inbox_c) == [copy_c.id]
    assert inbox_b.entries[0].reply_count == 0

    (entry,) = sent.entries
    assert entry.message.thread_id == thread
    assert entry.reply_count == 0
    assert {u.id for u in entry.participants} == {TEACHER_ID, PARENT_B_ID, PARENT_C_ID}


@pytest.mark.asyncio
async def test_reply_surfaces_as_latest_in_senders_inbox(teacher_principal, uow):
    thread = uuid.uuid4()
    copy_b = make_message(sender_id=TEACHER_ID, receiver_id=PARENT_B_ID, thread_id=thread)
    copy_c = make_message(sender_id=TEACHER_ID, receiver_id=PARENT_C_ID, thread_id=thread)
    reply = make_message(
        sender_id=PARENT_B_ID,
        receiver_id=TEACHER_ID,
        thread_id=thread,
        reply_to_id=copy_b.id,
        minutes=5,
        subject="Re: Seguimiento académico",
    )
    uow.seed(copy_b, copy_c, reply)

    inbox = await _inbox(teacher_principal, uow)
    sent = await _sent(teacher_principal, uow)

    (entry,) = inbox.entries
    assert entry.message.id == reply.id
    assert entry.reply_count == 1
    assert entry.sender.name == "Marta Díaz"
    assert entry.reply_to.id == copy_b.id
    assert entry.reply_to.sender_name == "Luis Romero"

    (root,) = sent.entries
    assert root.message.reply_to_id is None
    assert root.message.thread_id == thread


@pytest.mark.asyncio
async def test_each_conversation_appears_at_most_once(parent_principal, uow):
    root = make_message(sender_id=TEACHER_ID, receiver_id=PARENT_B_ID)
    answers = [
        make_message(
            sender_id=TEACHER_ID,
            receiver_id=PARENT_B_ID,
            thread_id=root.id,
            reply_to_id=root.id,
            minutes=i,
        )
        for i in range(1, 4)
    ]
    other = make_message(sender_id=ADMIN_ID, receiver_id=PARENT_B_ID, minutes=10)
    uow.seed(root, *answers, other)

    result = await _inbox(parent_principal, uow)

    conversation_ids = [e.message.conversation_id for e in result.entries]
    assert len(conversation_ids) == len(set(conversation_ids))
    assert _ids(result) == [other.id, answers[-1].id]


@pytest.mark.asyncio
async def test_inbox_is_newest_first(parent_principal, uow):
    older = make_message(sender_id=TEACHER_ID, minutes=1)
    newer = make_message(sender_id=ADMIN_ID, minutes=30)
    uow.seed(older, newer)

    result = await _inbox(parent_principal, uow)

    assert _ids(result) == [newer.id, older.id]


@pytest.mark.asyncio
async def test_own_messages_never_count_as_unread(teacher_principal, uow):
    uow.seed(
        make_message(sender_id=TEACHER_ID, receiver_id=PARENT_B_ID, is_read=False),
        make_message(sender_id=PARENT_B_ID, receiver_id=TEACHER_ID, is_read=False, minutes=1),
        make_message(sender_id=ADMIN_ID, receiver_id=TEACHER_ID, is_read=True, minutes=2),
    )

    result = await mailbox_service.list_messages(
        teacher_principal, MessageMode.ALL, MailboxView.ALL, uow,
    )

    assert result.stats.total == 3
    assert result.stats.received == 2
    assert result.stats.sent == 1
    assert result.stats.unread == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("target_role", [None, UserRole.TEACHER])
@pytest.mark.parametrize("view", [MailboxView.ALL, MailboxView.SENT, MailboxView.INBOX])
async def test_own_broadcast_is_not_received_or_unread(teacher_principal, uow, target_role, view):
    uow.seed(make_message(sender_id=TEACHER_ID, is_broadcast=True, target_role=target_role))

    result = await mailbox_service.list_messages(teacher_principal, MessageMode.ALL, view, uow)

    assert result.stats.sent == 1
    assert result.stats.received == 0
    assert result.stats.unread == 0


@pytest.mark.asyncio
async def test_mode_filters_direct_and_broadcast(parent_principal, uow):
    direct = make_message(sender_id=TEACHER_ID, receiver_id=PARENT_B_ID)
    notice = make_message(sender_id=ADMIN_ID, is_broadcast=True, minutes=1)
    uow.seed(direct, notice)

    only_direct = await _inbox(parent_principal, uow, MessageMode.DIRECT)
    only_broadcast = await _inbox(parent_principal, uow, MessageMode.BROADCAST)

    assert _ids(only_direct) == [direct.id]
    assert _ids(only_broadcast) == [notice.id]
    assert only_broadcast.stats.broadcasts == 1
    assert only_broadcast.stats.direct == 0


@pytest.mark.asyncio
async def test_broadcasts_view_lists_visible_broadcasts(teacher_principal, uow):
    mine = make_message(sender_id=TEACHER_ID, is_broadcast=True, target_role=UserRole.PARENT)
    for_teachers = make_message(
        sender_id=ADMIN_ID, is_broadcast=True, target_role=UserRole.TEACHER, minutes=1,
    )
    for_students = make_message(
        sender_id=ADMIN_ID, is_broadcast=True, target_role=UserRole.STUDENT, minutes=2,
    )
    uow.seed(mine, for_teachers, for_students)

    result = await mailbox_service.list_messages(
        teacher_principal, MessageMode.ALL, MailboxView.BROADCASTS, uow,
    )

    assert _ids(result) == [for_teachers.id, mine.id]


@pytest.mark.asyncio
async def test_private_messages_stay_private(other_parent_principal, uow):
    uow.seed(make_message(sender_id=TEACHER_ID, receiver_id=PARENT_B_ID))

    result = await mailbox_service.list_messages(
        other_parent_principal, MessageMode.ALL, MailboxView.ALL, uow,
    )

    assert result.entries == []
    assert result.stats.total == 0


@pytest.mark.asyncio
async def test_unknown_sender_is_left_undecorated(uow):
    ghost = make_message(sender_id=999, receiver_id=STUDENT_ID)
    uow.seed(ghost)

    result = await _inbox(Principal(user_id=STUDENT_ID, role=UserRole.STUDENT), uow)

    assert result.entries[0].sender is None
    assert result.entries[0].receiver.id == STUDENT_ID
