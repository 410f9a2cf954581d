"""Redis-backed key-value store for sharing a session across machines."""

from typing import Optional

import redis

from roomdesk.config.settings import RedisSettings


class RedisKeyValueStore:
    """Stores keys under a ``roomdesk:`` namespace in Redis."""

    KEY_PREFIX = "roomdesk:"

    def __init__(self, redis_settings: RedisSettings, client: Optional[redis.Redis] = None):
        """Initialize the Redis client.

        Args:
            redis_settings: Connection settings
            client: Pre-built client (tests pass a mock)
        """
        self.redis_client = client or redis.Redis(
            host=redis_settings.host,
            port=redis_settings.port,
            db=redis_settings.db,
            password=redis_settings.password,
            ssl=redis_settings.ssl,
            decode_responses=True,
            socket_timeout=redis_settings.socket_timeout,
            socket_connect_timeout=redis_settings.socket_connect_timeout,
        )

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.redis_client.get(self._key(key))
        return value if value else None

    def set(self, key: str, value: str) -> None:
        self.redis_client.set(self._key(key), value)

    def remove(self, key: str) -> None:
        self.redis_client.delete(self._key(key))

    def close(self) -> None:
        """Close the Redis connection."""
        self.redis_client.close()
