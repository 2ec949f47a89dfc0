"""
Storage Package

Provides the key-value RecordStore interface and its backends:
a JSON file on disk for the app, and an in-memory store for tests.
"""

from financehub.storage.interface import (
    CorruptStoreError,
    RecordStore,
    SerializationError,
    StorageError,
    StorageQuotaExceededError,
)
from financehub.storage.memory import InMemoryRecordStore
from financehub.storage.json_file import JsonFileRecordStore

__all__ = [
    # Interface
    "RecordStore",
    # Exceptions
    "CorruptStoreError",
    "SerializationError",
    "StorageError",
    "StorageQuotaExceededError",
    # Backends
    "InMemoryRecordStore",
    "JsonFileRecordStore",
]
