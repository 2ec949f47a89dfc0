"""
JSON File Record Store

DESIGN DECISION: A single JSON document on disk stands in for the
browser's local storage:
1. The user can open and back up their data with any text editor
2. No database setup required
3. Every key is one top-level entry, so the file mirrors what the
   dashboard kept in local storage

TRADEOFFS:
- Every write rewrites the whole document (fine for a household's data)
- Writes are atomic (temp file + replace) but there is no journal

Transient OS errors on write are retried with tenacity; anything still
failing after the last attempt surfaces as StorageError so managers can
keep the unsaved changes in memory.
"""

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from financehub.config import get_settings
from financehub.storage.interface import (
    CorruptStoreError,
    RecordStore,
    SerializationError,
    StorageError,
    StorageQuotaExceededError,
)


logger = structlog.get_logger(__name__)


class JsonFileRecordStore(RecordStore):
    """
    Record store persisted as one JSON object: {key: value, ...}.

    Reads go to disk every time so two browser tabs (two Streamlit
    sessions) see each other's last completed write.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        max_document_bytes: Optional[int] = None,
        write_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path) if path is not None else settings.data_path
        self._max_bytes = max_document_bytes or settings.max_document_bytes
        self._write_attempts = write_attempts or settings.write_attempts

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, Any]:
        """Load the whole document; a missing file is an empty store."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"Data file {self._path} is not valid JSON: {e}")
        except OSError as e:
            raise CorruptStoreError(f"Data file {self._path} could not be read: {e}")
        if not isinstance(data, dict):
            raise CorruptStoreError(
                f"Data file {self._path} does not hold a JSON object"
            )
        return data

    def get(self, key: str, default: Any) -> Any:
        try:
            document = self._read_document()
        except CorruptStoreError as e:
            logger.warning("store_read_failed", key=key, error=str(e))
            return copy.deepcopy(default)
        if key not in document:
            return copy.deepcopy(default)
        return document[key]

    def set(self, key: str, value: Any) -> None:
        # Never overwrite a document we could not read: the other
        # collections in it would be lost.
        document = self._read_document()
        document[key] = value

        try:
            text = json.dumps(document, ensure_ascii=False, indent=2, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot store {key!r}: {e}")

        size = len(text.encode("utf-8"))
        if size > self._max_bytes:
            raise StorageQuotaExceededError(size, self._max_bytes)

        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._write_attempts),
                wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_atomic(text)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

        logger.debug("store_written", key=key, bytes=size)

    def _write_atomic(self, text: str) -> None:
        """Write to a temp file beside the target, then replace it."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def keys(self) -> list[str]:
        try:
            return list(self._read_document())
        except CorruptStoreError:
            return []
