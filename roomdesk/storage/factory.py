"""Pick the session store backend from settings."""

from roomdesk.config.settings import RedisSettings, SessionSettings
from roomdesk.storage.base import KeyValueStore, MemoryKeyValueStore
from roomdesk.storage.file_store import FileKeyValueStore
from roomdesk.storage.redis_store import RedisKeyValueStore


def create_store(
    session_settings: SessionSettings, redis_settings: RedisSettings
) -> KeyValueStore:
    """Build the store named by SESSION_STORAGE.

    Args:
        session_settings: Session persistence settings
        redis_settings: Used only when the storage is "redis"

    Returns:
        A KeyValueStore implementation
    """
    if session_settings.storage == "memory":
        return MemoryKeyValueStore()
    if session_settings.storage == "redis":
        return RedisKeyValueStore(redis_settings)
    return FileKeyValueStore(session_settings.file_path)
