"""
Savings Goal Tracker

One balance moving toward one goal by one date. The balance only
changes through adjust(); it never drops below zero.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import ValidationError

from financehub.aggregation.goals import (
    goal_projection,
    goal_status,
    milestones,
    monthly_target,
    months_until,
    progress_percentage,
    progress_tier,
)
from financehub.aggregation.totals import ZERO, as_decimal
from financehub.audit import AuditLogger, create_correlation_id
from financehub.config import SavingsSettings, get_settings
from financehub.managers.base import PersistedState
from financehub.models.audit import AuditEventBuilder
from financehub.models.records import SavingsState
from financehub.models.summaries import (
    GoalProgressTier,
    GoalProjection,
    GoalStatus,
    Milestone,
    ValidationResult,
)
from financehub.storage import RecordStore
from financehub.validation import RecordValidator


SAVINGS_KEY = "savings"


class SavingsGoalTracker(PersistedState):
    """
    Savings balance, goal and target date, persisted under "savings".

    Defaults come from SavingsSettings until the first write.
    """

    store_key = SAVINGS_KEY

    def __init__(
        self,
        store: RecordStore,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[SavingsSettings] = None,
        validator: Optional[RecordValidator] = None,
    ):
        super().__init__(store, audit_logger)
        self._settings = settings or get_settings().savings
        self._validator = validator or RecordValidator()
        self._last_validation: Optional[ValidationResult] = None
        self._state = self._load()

    def _default_state(self) -> SavingsState:
        return SavingsState(
            current_amount=self._settings.starting_amount,
            goal_amount=self._settings.goal_amount,
            target_date=self._settings.target_date,
        )

    def _load(self) -> SavingsState:
        stored = self._store.get(self.store_key, None)
        if stored is None:
            return self._default_state()
        try:
            return SavingsState.model_validate(stored)
        except ValidationError as e:
            self._audit.log(AuditEventBuilder.load_rejected_record(
                collection=self.store_key,
                position=0,
                error_message=str(e),
            ))
            return self._default_state()

    def _snapshot(self) -> dict:
        return self._state.to_storage()

    @property
    def state(self) -> SavingsState:
        return self._state

    @property
    def last_validation(self) -> Optional[ValidationResult]:
        return self._last_validation

    # -------------------------------------------------------------------------
    # Balance changes
    # -------------------------------------------------------------------------

    def adjust(self, delta: Decimal) -> SavingsState:
        """
        Add delta (negative to withdraw) to the balance, clamped at zero.
        """
        correlation_id = create_correlation_id()
        old_amount = self._state.current_amount
        raw = old_amount + as_decimal(delta)
        new_amount = max(raw, ZERO)

        self._state = self._state.model_copy(update={"current_amount": new_amount})
        self._persist(correlation_id)
        self._audit.log(AuditEventBuilder.savings_adjusted(
            delta=str(delta),
            old_amount=str(old_amount),
            new_amount=str(new_amount),
            clamped=raw < ZERO,
            correlation_id=correlation_id,
        ))
        return self._state

    def adjust_from_input(self, raw_delta: Any) -> Optional[SavingsState]:
        """
        Adjust from a raw form value.

        Non-numeric input changes nothing and returns None; the reason
        is in last_validation.
        """
        result = self._validator.validate_adjustment(raw_delta)
        self._last_validation = result
        if not result.is_valid:
            self._audit.log_validation_rejected(
                collection=self.store_key,
                issues=[issue.model_dump() for issue in result.issues],
            )
            return None
        return self.adjust(result.cleaned["delta"])

    # -------------------------------------------------------------------------
    # Goal outlook
    # -------------------------------------------------------------------------

    def months_remaining(self, today: Optional[date] = None) -> int:
        """Whole 30-day months until the target date; zero or negative once passed."""
        return months_until(self._state.target_date, today)

    def status(self, today: Optional[date] = None) -> GoalStatus:
        return goal_status(self._state, today)

    def monthly_target(self, today: Optional[date] = None) -> Decimal:
        """
        Raises:
            GoalOverdueError: the target date passed before the goal was reached
        """
        return monthly_target(self._state, today)

    def projection(self, today: Optional[date] = None) -> GoalProjection:
        return goal_projection(self._state, today)

    def progress_percentage(self) -> Decimal:
        return progress_percentage(self._state.current_amount, self._state.goal_amount)

    def progress_tier(self) -> GoalProgressTier:
        return progress_tier(self.progress_percentage())

    def milestones(self) -> list[Milestone]:
        return milestones(self._state.current_amount, self._settings.milestones)
