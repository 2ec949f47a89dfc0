"""
In-Memory Record Store

Used by the tests and as the fallback when the data file cannot be
opened. Values are kept as JSON text so that anything the file store
would refuse is refused here too, and so callers never share mutable
state with the store.
"""

import copy
import json
from typing import Any, Optional

from financehub.storage.interface import (
    RecordStore,
    SerializationError,
    StorageQuotaExceededError,
)


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store holding serialized JSON per key."""

    def __init__(
        self,
        initial: Optional[dict[str, Any]] = None,
        max_document_bytes: Optional[int] = None,
    ):
        self._data: dict[str, str] = {}
        self._max_bytes = max_document_bytes
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any) -> Any:
        if key not in self._data:
            return copy.deepcopy(default)
        return json.loads(self._data[key])

    def set(self, key: str, value: Any) -> None:
        try:
            text = json.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot store {key!r}: {e}")

        if self._max_bytes is not None:
            others = sum(len(v) for k, v in self._data.items() if k != key)
            size = others + len(text)
            if size > self._max_bytes:
                raise StorageQuotaExceededError(size, self._max_bytes)

        self._data[key] = text

    def keys(self) -> list[str]:
        return list(self._data)
