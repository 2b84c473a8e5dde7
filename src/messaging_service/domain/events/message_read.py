from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

EVENT_TYPE = "messaging.message_read"


@dataclass(frozen=True, slots=True)
class MessageRead:
    message_id: UUID
    reader_id: int
    is_read: bool

    def to_payload(self) -> dict[str, Any]:
        return {
            "message_id": str(self.message_id),
            "reader_id": self.reader_id,
            "is_read": self.is_read,
        }
