"""
Tests for the record store backends.

The JSON file store is exercised against a real temporary directory;
transient write failures are simulated by patching os.replace.
"""

import json

import pytest

from financehub.storage import (
    CorruptStoreError,
    InMemoryRecordStore,
    JsonFileRecordStore,
    SerializationError,
    StorageError,
    StorageQuotaExceededError,
)
from financehub.storage import json_file


INCOMES = [
    {"id": "1", "source": "Freelance", "amount": "500", "type": "business", "date": "2024-03-15"},
]


class TestInMemoryRecordStore:
    """Tests for the in-memory backend."""

    def test_round_trip(self):
        store = InMemoryRecordStore()
        store.set("incomes", INCOMES)
        assert store.get("incomes", []) == INCOMES

    def test_missing_key_returns_copy_of_default(self):
        store = InMemoryRecordStore()
        default = []
        value = store.get("incomes", default)
        value.append("x")
        assert default == []

    def test_returned_values_are_not_shared(self):
        """Mutating what get() returned never changes the store."""
        store = InMemoryRecordStore({"incomes": INCOMES})
        store.get("incomes", [])[0]["amount"] = "999"
        assert store.get("incomes", [])[0]["amount"] == "500"

    def test_rejects_non_serializable(self):
        store = InMemoryRecordStore()
        with pytest.raises(SerializationError):
            store.set("incomes", [object()])

    def test_rejects_nan(self):
        store = InMemoryRecordStore()
        with pytest.raises(SerializationError):
            store.set("savings", {"currentAmount": float("nan")})

    def test_quota(self):
        store = InMemoryRecordStore(max_document_bytes=10)
        with pytest.raises(StorageQuotaExceededError) as excinfo:
            store.set("incomes", "x" * 20)
        assert excinfo.value.limit == 10
        assert store.get("incomes", None) is None

    def test_keys(self):
        store = InMemoryRecordStore({"incomes": [], "expenses": []})
        assert store.keys() == ["incomes", "expenses"]


class TestJsonFileRecordStore:
    """Tests for the JSON file backend."""

    def test_round_trip_across_instances(self, tmp_path):
        path = tmp_path / "data.json"
        JsonFileRecordStore(path).set("incomes", INCOMES)
        JsonFileRecordStore(path).set("expenses", [])

        reopened = JsonFileRecordStore(path)
        assert reopened.get("incomes", []) == INCOMES
        assert reopened.get("expenses", None) == []
        assert sorted(reopened.keys()) == ["expenses", "incomes"]

    def test_file_is_one_json_object(self, tmp_path):
        path = tmp_path / "data.json"
        JsonFileRecordStore(path).set("incomes", INCOMES)
        assert json.loads(path.read_text(encoding="utf-8")) == {"incomes": INCOMES}

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileRecordStore(tmp_path / "nothing.json")
        assert store.get("incomes", []) == []
        assert store.keys() == []

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "data.json"
        JsonFileRecordStore(path).set("incomes", [])
        assert path.exists()

    def test_corrupt_file_falls_back_to_default(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileRecordStore(path)
        assert store.get("incomes", []) == []

    def test_corrupt_file_is_never_overwritten(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        store = JsonFileRecordStore(path)
        with pytest.raises(CorruptStoreError):
            store.set("incomes", INCOMES)
        assert path.read_text(encoding="utf-8") == "[1, 2, 3]"

    def test_quota(self, tmp_path):
        store = JsonFileRecordStore(tmp_path / "data.json", max_document_bytes=1024)
        with pytest.raises(StorageQuotaExceededError):
            store.set("incomes", "x" * 2048)

    def test_transient_write_failure_is_retried(self, tmp_path, monkeypatch):
        real_replace = json_file.os.replace
        calls = []

        def flaky_replace(src, dst):
            calls.append(dst)
            if len(calls) == 1:
                raise OSError("file is locked")
            real_replace(src, dst)

        monkeypatch.setattr(json_file.os, "replace", flaky_replace)
        store = JsonFileRecordStore(tmp_path / "data.json", write_attempts=3)
        store.set("incomes", INCOMES)

        assert len(calls) == 2
        assert store.get("incomes", []) == INCOMES

    def test_persistent_write_failure_raises_storage_error(self, tmp_path, monkeypatch):
        def broken_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(json_file.os, "replace", broken_replace)
        store = JsonFileRecordStore(tmp_path / "data.json", write_attempts=2)

        with pytest.raises(StorageError):
            store.set("incomes", INCOMES)
        # no temp files left behind
        assert list(tmp_path.iterdir()) == []
