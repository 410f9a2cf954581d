"""Durable storage package."""

from roomdesk.storage.base import KeyValueStore, MemoryKeyValueStore
from roomdesk.storage.factory import create_store
from roomdesk.storage.file_store import FileKeyValueStore
from roomdesk.storage.redis_store import RedisKeyValueStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "RedisKeyValueStore",
    "create_store",
]
