"""Import all models so Base.metadata knows every table (used by the seed script's create_all)."""
from messaging_service.infrastructure.db.models.message import MessageModel
from messaging_service.infrastructure.db.models.outbox import OutboxMessageModel
from messaging_service.infrastructure.db.models.user import UserModel

__all__ = [
    "MessageModel",
    "OutboxMessageModel",
    "UserModel",
]
