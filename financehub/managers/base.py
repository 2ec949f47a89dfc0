"""
Collection Managers

DESIGN DECISION: A manager owns exactly one key of the record store.
- The store is injected, never looked up globally
- State is replaced, never mutated: every change builds a new tuple
- Every change is written through to the store immediately

STORAGE FAILURES:
A failed write does NOT roll back the change. The new state stays in
memory, storage_error holds a message for the page, is_dirty is set,
and flush() retries.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

import structlog
from pydantic import ValidationError

from financehub.audit import AuditLogger, create_correlation_id
from financehub.models.audit import AuditEventBuilder
from financehub.models.records import Record, RecordKind
from financehub.models.summaries import ValidationIssue, ValidationResult
from financehub.storage import RecordStore, StorageError
from financehub.validation import RecordValidator


RecordT = TypeVar("RecordT", bound=Record)


class PersistedState(ABC):
    """
    Write-through persistence for one store key, with failure tracking.
    """

    store_key: str = ""

    def __init__(
        self,
        store: RecordStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit = audit_logger or AuditLogger()
        self._storage_error: Optional[str] = None
        self._logger = structlog.get_logger(__name__).bind(key=self.store_key)

    @property
    def storage_error(self) -> Optional[str]:
        """User-presentable message for the last failed write, if any."""
        return self._storage_error

    @property
    def is_dirty(self) -> bool:
        """True while in-memory changes have not reached the store."""
        return self._storage_error is not None

    @abstractmethod
    def _snapshot(self) -> Any:
        """JSON-serializable value written under store_key."""

    def _persist(self, correlation_id: Optional[UUID] = None) -> bool:
        was_dirty = self.is_dirty
        try:
            self._store.set(self.store_key, self._snapshot())
        except StorageError as e:
            self._storage_error = (
                f"Your latest changes could not be saved ({e}). "
                "They are kept for this session; try saving again."
            )
            self._audit.log(AuditEventBuilder.save_failed(
                collection=self.store_key,
                error_message=str(e),
                correlation_id=correlation_id,
            ))
            return False

        self._storage_error = None
        if was_dirty:
            self._audit.log(AuditEventBuilder.save_recovered(self.store_key))
        return True

    def flush(self) -> bool:
        """
        Retry a failed write.

        Returns True when the store is up to date afterwards.
        """
        if not self.is_dirty:
            return True
        return self._persist()


class CollectionManager(PersistedState, Generic[RecordT]):
    """
    Add/remove/status operations over one record collection.

    Subclasses set kind and record_model and map add-form fields
    onto the matching RecordValidator method.
    """

    kind: RecordKind
    record_model: type[RecordT]
    status_fields: frozenset[str] = frozenset()

    def __init__(
        self,
        store: RecordStore,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[RecordValidator] = None,
    ):
        self.store_key = self.kind.value
        super().__init__(store, audit_logger)
        self._validator = validator or RecordValidator()
        self._last_validation: Optional[ValidationResult] = None
        self._records: tuple[RecordT, ...] = self._load()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _load(self) -> tuple[RecordT, ...]:
        """
        Read the stored list, dropping entries that no longer validate.

        A bad entry costs that entry only, never the whole collection.
        """
        stored = self._store.get(self.store_key, [])
        if not isinstance(stored, list):
            self._audit.log(AuditEventBuilder.load_rejected_record(
                collection=self.store_key,
                position=0,
                error_message=f"expected a list, found {type(stored).__name__}",
            ))
            return ()

        records: list[RecordT] = []
        seen_ids: set[str] = set()
        for position, entry in enumerate(stored):
            try:
                record = self.record_model.model_validate(entry)
            except ValidationError as e:
                self._audit.log(AuditEventBuilder.load_rejected_record(
                    collection=self.store_key,
                    position=position,
                    error_message=str(e),
                ))
                continue
            if record.id in seen_ids:
                self._audit.log(AuditEventBuilder.load_rejected_record(
                    collection=self.store_key,
                    position=position,
                    error_message=f"duplicate id {record.id!r}",
                ))
                continue
            seen_ids.add(record.id)
            records.append(record)

        self._logger.debug("collection_loaded", count=len(records))
        return tuple(records)

    def _snapshot(self) -> list[dict]:
        return [record.to_storage() for record in self._records]

    def _commit(self, records: list[RecordT], correlation_id: Optional[UUID] = None) -> bool:
        self._records = tuple(records)
        return self._persist(correlation_id)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def records(self) -> tuple[RecordT, ...]:
        return self._records

    @property
    def last_validation(self) -> Optional[ValidationResult]:
        """Result of the most recent add() call."""
        return self._last_validation

    def get(self, record_id: str) -> Optional[RecordT]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @abstractmethod
    def validate(self, **fields: Any) -> ValidationResult:
        """Validate raw add-form input without adding anything."""

    @staticmethod
    @abstractmethod
    def label(record: RecordT) -> str:
        """Short human label used in audit events."""

    def add(self, **fields: Any) -> Optional[RecordT]:
        """
        Validate raw input and append a new record.

        Returns None when the input is rejected; the reasons are in
        last_validation.
        """
        correlation_id = create_correlation_id()
        result = self.validate(**fields)

        record = None
        if result.is_valid:
            try:
                record = self.record_model(**result.cleaned)
            except ValidationError as e:
                result = ValidationResult(issues=[
                    *result.issues,
                    *(
                        ValidationIssue(
                            field=".".join(str(part) for part in error["loc"]) or "record",
                            issue_type=error["type"],
                            message=error["msg"],
                        )
                        for error in e.errors()
                    ),
                ])
        self._last_validation = result

        if record is None:
            self._audit.log_validation_rejected(
                collection=self.store_key,
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=correlation_id,
            )
            return None

        self._commit([*self._records, record], correlation_id)
        self._audit.log_record_added(
            collection=self.store_key,
            record_id=record.id,
            label=self.label(record),
            amount=str(record.amount),
            correlation_id=correlation_id,
        )
        return record

    def remove(self, record_id: str) -> bool:
        """
        Remove a record by id.

        Removing an id that is not there changes nothing and writes
        nothing. Returns whether a record was removed.
        """
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return False

        correlation_id = create_correlation_id()
        self._commit(remaining, correlation_id)
        self._audit.log_record_removed(
            collection=self.store_key,
            record_id=record_id,
            correlation_id=correlation_id,
        )
        return True

    def set_status(self, record_id: str, field: str, value: Any) -> Optional[RecordT]:
        """
        Replace the record with a copy whose status field is updated.

        Raises:
            ValueError: field is not a status field of this collection,
                or value is not a bool
        """
        if field not in self.status_fields:
            raise ValueError(
                f"{field!r} is not a status field of {self.store_key}; "
                f"allowed: {sorted(self.status_fields) or 'none'}"
            )
        if not isinstance(value, bool):
            raise ValueError(f"{field!r} must be True or False, got {value!r}")

        current = self.get(record_id)
        if current is None:
            return None

        old_value = getattr(current, field)
        updated = current.model_copy(update={field: value})
        correlation_id = create_correlation_id()
        self._commit(
            [updated if r.id == record_id else r for r in self._records],
            correlation_id,
        )
        self._audit.log_status_changed(
            collection=self.store_key,
            record_id=record_id,
            field=field,
            old_value=old_value,
            new_value=getattr(updated, field),
            correlation_id=correlation_id,
        )
        return updated


class PayableCollectionManager(CollectionManager[RecordT]):
    """Collections whose records carry an is_paid flag."""

    status_fields = frozenset({"is_paid"})

    def toggle_paid(self, record_id: str) -> Optional[RecordT]:
        current = self.get(record_id)
        if current is None:
            return None
        return self.set_status(record_id, "is_paid", not current.is_paid)
