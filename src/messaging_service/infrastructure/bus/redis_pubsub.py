"""Redis Pub/Sub publisher for outbox events."""
from __future__ import annotations

from typing import Any

import redis.asyncio as aioredis

from messaging_service.infrastructure.bus.serializer import serialize_event


class RedisPubSubPublisher:
    """Implements application.ports.bus.EventPublisher."""

    def __init__(self, redis: aioredis.Redis) -> None:
        self._redis = redis

    async def publish(self, channel: str, event_type: str, payload: dict[str, Any]) -> None:
        await self._redis.publish(channel, serialize_event(event_type, payload))
