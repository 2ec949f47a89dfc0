"""Shared fixtures for the FinanceHub tests."""

from datetime import date
from decimal import Decimal

import pytest

from financehub.audit import AuditLogger
from financehub.config import DashboardSettings, SavingsSettings
from financehub.storage import InMemoryRecordStore, StorageError
from financehub.validation import RecordValidator


TODAY = date(2024, 3, 15)


class RecordingStore(InMemoryRecordStore):
    """
    In-memory store that records writes per key and can be told to fail.

    Set fail_writes to simulate a full or unwritable disk.
    """

    def __init__(self, initial=None):
        self.writes: list[str] = []
        self.fail_writes = False
        super().__init__(initial)
        self.writes.clear()

    def set(self, key, value):
        if self.fail_writes:
            raise StorageError("disk unavailable")
        self.writes.append(key)
        super().set(key, value)

    def writes_to(self, key: str) -> int:
        return self.writes.count(key)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def audit_logger(store) -> AuditLogger:
    return AuditLogger(store)


@pytest.fixture
def validator(today) -> RecordValidator:
    return RecordValidator(today)


@pytest.fixture
def dashboard_settings() -> DashboardSettings:
    return DashboardSettings()


@pytest.fixture
def savings_settings() -> SavingsSettings:
    return SavingsSettings(
        starting_amount=Decimal("32500"),
        goal_amount=Decimal("35000"),
        target_date=date(2026, 7, 1),
    )
