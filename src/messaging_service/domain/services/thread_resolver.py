"""Conversation grouping and representative selection.

A conversation is the set of messages sharing ``Message.conversation_id``.
Every function here operates on the messages of a single conversation,
except :func:`group_by_conversation` which builds those sets.
"""
from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from messaging_service.domain.entities.message import Message
from messaging_service.domain.services.visibility import is_recipient


def _chronological_key(message: Message) -> tuple:
    return (message.created_at, str(message.id))


def group_by_conversation(messages: Iterable[Message]) -> dict[UUID, list[Message]]:
    groups: dict[UUID, list[Message]] = {}
    for message in messages:
        groups.setdefault(message.conversation_id, []).append(message)
    return groups


def inbox_representative(
    messages: Iterable[Message],
    user_id: int,
    role: str,
) -> Message | None:
    """Latest message of the conversation the viewer received."""
    received = [m for m in messages if is_recipient(m, user_id, role)]
    if not received:
        return None
    return max(received, key=_chronological_key)


def sent_representative(messages: Iterable[Message], user_id: int) -> Message | None:
    """Opening message of the conversation, if the viewer sent it.

    Fanned-out copies of the opening share the conversation, so the
    earliest one stands in for all of them.
    """
    openings = [m for m in messages if m.sender_id == user_id and m.reply_to_id is None]
    if not openings:
        return None
    return min(openings, key=_chronological_key)


def reply_count(messages: Iterable[Message]) -> int:
    """Messages in the conversation other than its opening.

    The copies of a multi-recipient opening are one opening, so only
    messages that answer another message are counted.
    """
    return sum(1 for m in messages if m.reply_to_id is not None)


def participant_ids(messages: Iterable[Message]) -> list[int] | None:
    """Distinct senders and receivers in first-seen order.

    Returns ``None`` for a conversation made only of broadcasts, which are
    not participant-scoped.
    """
    messages = list(messages)
    if all(m.is_broadcast for m in messages):
        return None

    seen: dict[int, None] = {}
    for message in sorted(messages, key=_chronological_key):
        seen.setdefault(message.sender_id, None)
        if message.receiver_id is not None:
            seen.setdefault(message.receiver_id, None)
    return list(seen)


def collapse_fanout_copies(messages: Iterable[Message]) -> list[Message]:
    """Chronological thread with duplicate fanned-out openings removed."""
    seen: set[tuple] = set()
    result: list[Message] = []
    for message in sorted(messages, key=_chronological_key):
        if message.reply_to_id is None and message.thread_id is not None:
            key = (message.thread_id, message.sender_id, message.subject, message.content)
            if key in seen:
                continue
            seen.add(key)
        result.append(message)
    return result
