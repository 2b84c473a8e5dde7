"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import pytest

from messaging_service.application.dto.principal import Principal
from messaging_service.application.repositories.outbox import OutboxRecord
from messaging_service.domain.entities.message import Message
from messaging_service.domain.entities.user import UserRef
from messaging_service.domain.services.visibility import can_view, matches_mode
from messaging_service.domain.value_objects.enums import MessageMode, UserRole

ADMIN_ID = 1
TEACHER_ID = 10
PARENT_B_ID = 20
PARENT_C_ID = 30
STUDENT_ID = 40

BASE_TIME = datetime(2020, 9, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=ADMIN_ID, role=UserRole.ADMIN)


@pytest.fixture
def teacher_principal() -> Principal:
    return Principal(user_id=TEACHER_ID, role=UserRole.TEACHER)


@pytest.fixture
def parent_principal() -> Principal:
    return Principal(user_id=PARENT_B_ID, role=UserRole.PARENT)


@pytest.fixture
def other_parent_principal() -> Principal:
    return Principal(user_id=PARENT_C_ID, role=UserRole.PARENT)


@pytest.fixture
def student_principal() -> Principal:
    return Principal(user_id=STUDENT_ID, role=UserRole.STUDENT)


def make_user(user_id: int, role: str, name: str | None = None) -> UserRef:
    return UserRef(
        id=user_id,
        name=name or f"user-{user_id}",
        email=f"user{user_id}@school.test",
        role=str(role),
    )


def make_message(
    *,
    sender_id: int = TEACHER_ID,
    receiver_id: int | None = PARENT_B_ID,
    is_broadcast: bool = False,
    target_role: str | None = None,
    thread_id: UUID | None = None,
    reply_to_id: UUID | None = None,
    is_read: bool = False,
    minutes: int = 0,
    subject: str = "Seguimiento académico",
    content: str = "hello",
) -> Message:
    return Message(
        id=uuid.uuid4(),
        sender_id=sender_id,
        receiver_id=None if is_broadcast else receiver_id,
        subject=subject,
        content=content,
        type="GENERAL",
        priority="MEDIUM",
        is_broadcast=is_broadcast,
        target_role=target_role,
        thread_id=thread_id,
        reply_to_id=reply_to_id,
        is_read=is_read,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def _chronological(message: Message) -> tuple:
    return (message.created_at, str(message.id))


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    async def list_for_viewer(
        self, user_id: int, role: str, mode: MessageMode = MessageMode.ALL,
    ) -> list[Message]:
        visible = [
            m for m in self._messages if can_view(m, user_id, role) and matches_mode(m, mode)
        ]
        return sorted(visible, key=_chronological, reverse=True)

    async def list_by_conversations(self, conversation_ids: Any) -> list[Message]:
        ids = set(conversation_ids)
        found = [m for m in self._messages if m.id in ids or m.thread_id in ids]
        return sorted(found, key=_chronological)


@dataclass
class FakeMessageWriter:
    """Stages writes until the unit of work commits."""

    _reader: FakeMessageReader
    _pending: list[Message] = field(default_factory=list)
    _read_updates: dict[UUID, bool] = field(default_factory=dict)
    set_read_calls: int = 0
    fail_on_insert: int | None = None

    async def add(self, message: Message) -> Message:
        if self.fail_on_insert is not None and len(self._pending) + 1 >= self.fail_on_insert:
            raise RuntimeError("simulated insert failure")
        self._pending.append(message)
        return message

    async def set_read(self, message_id: UUID, is_read: bool) -> None:
        self.set_read_calls += 1
        self._read_updates[message_id] = is_read

    def apply(self) -> None:
        self._reader._messages.extend(self._pending)
        self._reader._messages[:] = [
            replace(m, is_read=self._read_updates[m.id]) if m.id in self._read_updates else m
            for m in self._reader._messages
        ]
        self.discard()

    def discard(self) -> None:
        self._pending.clear()
        self._read_updates.clear()


@dataclass
class FakeUserDirectory:
    _users: dict[int, UserRef] = field(default_factory=dict)

    def add(self, *users: UserRef) -> None:
        for user in users:
            self._users[user.id] = user

    async def get_many(self, user_ids: Any) -> dict[int, UserRef]:
        return {i: self._users[i] for i in user_ids if i in self._users}

    async def list_by_roles(self, roles: Any) -> list[UserRef]:
        wanted = set(roles)
        return [u for u in self._users.values() if u.role in wanted]


@dataclass
class FakeOutboxWriter:
    _records: list[dict[str, Any]] = field(default_factory=list)
    _pending: list[dict[str, Any]] = field(default_factory=list)
    _queued: list[OutboxRecord] = field(default_factory=list)
    sent_ids: list[int] = field(default_factory=list)
    failed: list[tuple[int, datetime, str | None]] = field(default_factory=list)

    async def add(self, event_type: str, payload: dict[str, Any]) -> None:
        self._pending.append({"event_type": event_type, "payload": payload})

    async def fetch_pending(self, batch_size: int) -> list[OutboxRecord]:
        batch, self._queued = self._queued[:batch_size], self._queued[batch_size:]
        return batch

    async def mark_sent(self, ids: list[int]) -> None:
        self.sent_ids.extend(ids)

    async def mark_failed(
        self, record_id: int, next_retry_at: datetime, error: str | None = None,
    ) -> None:
        self.failed.append((record_id, next_retry_at, error))


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    users: FakeUserDirectory = field(default_factory=FakeUserDirectory)
    outbox: FakeOutboxWriter = field(default_factory=FakeOutboxWriter)
    _committed: bool = False
    _rolled_back: bool = False

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)

    def seed(self, *messages: Message) -> None:
        self.messages._messages.extend(messages)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self.messages_w.apply()
        self.outbox._records.extend(self.outbox._pending)
        self.outbox._pending.clear()
        self._committed = True

    async def rollback(self) -> None:
        self.messages_w.discard()
        self.outbox._pending.clear()
        self._rolled_back = True


@pytest.fixture
def uow() -> FakeUoW:
    """UoW with a small school directory."""
    uow = FakeUoW()
    uow.users.add(
        make_user(ADMIN_ID, UserRole.ADMIN, "Ana Torres"),
        make_user(TEACHER_ID, UserRole.TEACHER, "Luis Romero"),
        make_user(PARENT_B_ID, UserRole.PARENT, "Marta Díaz"),
        make_user(PARENT_C_ID, UserRole.PARENT, "Jorge Pérez"),
        make_user(STUDENT_ID, UserRole.STUDENT, "Sofía Pérez"),
    )
    return uow
