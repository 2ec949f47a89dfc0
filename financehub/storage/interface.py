"""
Abstract Record Store Interface

DESIGN DECISION: Persistence is a plain key-value interface.
This allows us to:
1. Keep every collection under its own key, exactly as the
   dashboard always stored them
2. Use an in-memory store for testing
3. Swap the JSON file for something else without touching managers

The store is injected into each manager. There is no module-level
store instance anywhere in the package.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar


T = TypeVar("T")


class RecordStore(ABC):
    """
    Abstract key-value store for JSON-serializable values.

    Any storage implementation must round-trip lists of record
    dicts exactly: same keys, same order, same string values.
    """

    @abstractmethod
    def get(self, key: str, default: T) -> T:
        """
        Read the value stored under key.

        Args:
            key: Collection key (e.g. "incomes")
            default: Returned (as a copy) when nothing is stored yet

        Returns:
            The stored value, or a copy of default
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Replace the value stored under key.

        Args:
            key: Collection key
            value: Any JSON-serializable structure

        Raises:
            SerializationError: value is not JSON-serializable
            StorageQuotaExceededError: the store is full
            StorageError: any other write failure
        """
        pass

    def keys(self) -> list[str]:
        """Keys currently stored. Backends override when they can."""
        return []


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SerializationError(StorageError):
    """Value could not be converted to JSON."""
    pass


class StorageQuotaExceededError(StorageError):
    """Writing the value would exceed the store's size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Storage is full ({size} bytes needed, limit is {limit})")


class CorruptStoreError(StorageError):
    """Stored document could not be read back."""
    pass
