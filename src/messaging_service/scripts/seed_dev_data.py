"""Seed development data: creates the schema, demo users and sample threads."""
from __future__ import annotations

import asyncio
import logging

from sqlalchemy.dialects.postgresql import insert as pg_insert

from messaging_service.application.dto.message import SendMessageDTO
from messaging_service.application.dto.principal import Principal
from messaging_service.config import settings
from messaging_service.domain.value_objects.enums import MessageType, Priority, UserRole
from messaging_service.infrastructure.db.base import Base
from messaging_service.infrastructure.db.models import UserModel
from messaging_service.infrastructure.db.session import AsyncSessionLocal, engine
from messaging_service.infrastructure.db.uow import SqlAlchemyUoW
from messaging_service.logging_config import configure_logging
from messaging_service.services import message_service

logger = logging.getLogger(__name__)

DEMO_USERS = [
    (1, "Ana Torres", "admin@school.test", UserRole.ADMIN),
    (2, "Luis Romero", "l.romero@school.test", UserRole.TEACHER),
    (3, "Marta Díaz", "m.diaz@family.test", UserRole.PARENT),
    (4, "Jorge Pérez", "j.perez@family.test", UserRole.PARENT),
    (5, "Sofía Pérez", "sofia.perez@school.test", UserRole.STUDENT),
]


async def seed() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
        stmt = pg_insert(UserModel).values(
            [
                {"id": user_id, "name": name, "email": email, "role": role.value}
                for user_id, name, email, role in DEMO_USERS
            ]
        ).on_conflict_do_nothing(index_elements=["id"])
        await session.execute(stmt)
        await uow.commit()

        admin = Principal(user_id=1, role=UserRole.ADMIN)
        teacher = Principal(user_id=2, role=UserRole.TEACHER)
        parent = Principal(user_id=3, role=UserRole.PARENT)

        await message_service.send_message(
            admin,
            SendMessageDTO(
                subject="Reunión de padres",
                content="Se convoca a reunión de padres el viernes a las 19:00.",
                is_broadcast=True,
                target_role=UserRole.PARENT,
                type=MessageType.ANNOUNCEMENT,
                priority=Priority.HIGH,
            ),
            uow,
        )
        sent = await message_service.send_message(
            teacher,
            SendMessageDTO(
                subject="Seguimiento académico",
                content="Les escribo para comentar el progreso de sus hijos en matemáticas.",
                recipient_ids=[3, 4],
                type=MessageType.ACADEMIC,
            ),
            uow,
        )
        first = next(m for m in sent.messages if m.receiver_id == parent.user_id)
        await message_service.send_message(
            parent,
            SendMessageDTO(
                subject=f"Re: {first.subject}",
                content="Gracias, ¿podemos hablar el lunes?",
                reply_to_id=first.id,
                type=MessageType.MEETING_REQUEST,
            ),
            uow,
        )
        logger.info("Seeded %d users and conversation %s", len(DEMO_USERS), sent.conversation_id)


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
