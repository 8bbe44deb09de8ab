"""Storage backends for Hexstead save blobs."""

from hexstead.repository.json_store import JsonFileStore
from hexstead.repository.memory_store import MemoryStore
from hexstead.repository.sql_store import SqlKeyValueStore

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "SqlKeyValueStore",
]
