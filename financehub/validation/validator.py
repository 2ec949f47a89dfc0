"""
Add-Form Validation

DESIGN DECISION: Validation happens in two stages:

STAGE 1 - FIELD PARSING:
- Required text present, not blank, and within the record's length limit
- Amount parses to a finite, non-negative number
- Category/type is one of the known values
- Dates are real calendar dates

STAGE 2 - SANITY CHECKS (warnings only):
- Zero amounts
- Bills that are already past due when entered

A failed stage 1 means no record is created. Parse failures are
collected as issues, never raised: a typo in the amount box must
not crash the page.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the form can show them.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from financehub.models.records import (
    DailySpendRecord,
    DueCategory,
    DueDateRecord,
    ExpenseCategory,
    ExpenseRecord,
    IncomeRecord,
    IncomeType,
    Record,
    SpendCategory,
)
from financehub.models.summaries import ValidationIssue, ValidationResult


class RecordValidator:
    """
    Validates raw add-form input for each collection.

    Each validate_* method returns a ValidationResult whose cleaned
    dict can be passed straight to the record model when valid.
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    # -------------------------------------------------------------------------
    # Field parsers
    # -------------------------------------------------------------------------

    @staticmethod
    def _max_length(model: type[Record], field: str) -> Optional[int]:
        for constraint in model.model_fields[field].metadata:
            limit = getattr(constraint, "max_length", None)
            if limit is not None:
                return limit
        return None

    def _check_length(
        self,
        model: type[Record],
        field: str,
        text: str,
        issues: list[ValidationIssue],
    ) -> Optional[str]:
        limit = self._max_length(model, field)
        if limit is not None and len(text) > limit:
            issues.append(ValidationIssue(
                field=field,
                issue_type="too_long",
                message=(
                    f"{field.replace('_', ' ').capitalize()} is too long "
                    f"({len(text)} characters, at most {limit})"
                ),
            ))
            return None
        return text

    def _require_text(
        self,
        model: type[Record],
        field: str,
        value: Any,
        issues: list[ValidationIssue],
    ) -> Optional[str]:
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message=f"{field.replace('_', ' ').capitalize()} is required",
            ))
            return None
        return self._check_length(model, field, text, issues)

    def _parse_amount(
        self,
        value: Any,
        issues: list[ValidationIssue],
        field: str = "amount",
    ) -> Optional[Decimal]:
        if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message="Amount is required",
            ))
            return None

        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            issues.append(ValidationIssue(
                field=field,
                issue_type="not_a_number",
                message=f"Amount must be a number, got {value!r}",
            ))
            return None

        if not amount.is_finite():
            issues.append(ValidationIssue(
                field=field,
                issue_type="not_a_number",
                message="Amount must be a finite number",
            ))
            return None

        if amount < 0:
            issues.append(ValidationIssue(
                field=field,
                issue_type="negative",
                message="Amount cannot be negative",
            ))
            return None

        if amount == 0:
            issues.append(ValidationIssue(
                field=field,
                issue_type="zero",
                message="Amount is zero",
                severity="warning",
            ))
        return amount

    def _parse_choice(
        self,
        field: str,
        value: Any,
        enum_type: type[Enum],
        issues: list[ValidationIssue],
    ) -> Optional[Enum]:
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return enum_type(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_type)
            issues.append(ValidationIssue(
                field=field,
                issue_type="unknown_value",
                message=f"Unknown {field} {value!r}; expected one of: {allowed}",
            ))
            return None

    def _parse_date(
        self,
        field: str,
        value: Any,
        issues: list[ValidationIssue],
    ) -> Optional[date]:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_format",
                    message=f"{value!r} is not a YYYY-MM-DD date",
                ))
                return None
        issues.append(ValidationIssue(
            field=field,
            issue_type="missing",
            message=f"{field.replace('_', ' ').capitalize()} is required",
        ))
        return None

    @staticmethod
    def _result(issues: list[ValidationIssue], cleaned: dict) -> ValidationResult:
        if any(issue.severity == "error" for issue in issues):
            cleaned = {}
        return ValidationResult(issues=issues, cleaned=cleaned)

    # -------------------------------------------------------------------------
    # Per-collection validation
    # -------------------------------------------------------------------------

    def validate_income(
        self,
        source: Any,
        amount: Any,
        type: Any = IncomeType.BUSINESS,
        date: Any = None,
    ) -> ValidationResult:
        """Income entries default to today's date."""
        issues: list[ValidationIssue] = []
        cleaned = {
            "source": self._require_text(IncomeRecord, "source", source, issues),
            "amount": self._parse_amount(amount, issues),
            "type": self._parse_choice("type", type, IncomeType, issues),
            "date": self._parse_date("date", date or self.today, issues),
        }
        return self._result(issues, cleaned)

    def validate_expense(
        self,
        name: Any,
        amount: Any,
        category: Any = ExpenseCategory.MISC,
        is_recurring: bool = False,
        purpose: Any = None,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []
        purpose_text = purpose.strip() if isinstance(purpose, str) else None
        if purpose_text:
            purpose_text = self._check_length(ExpenseRecord, "purpose", purpose_text, issues)
        cleaned = {
            "name": self._require_text(ExpenseRecord, "name", name, issues),
            "amount": self._parse_amount(amount, issues),
            "category": self._parse_choice("category", category, ExpenseCategory, issues),
            "is_recurring": bool(is_recurring),
            "purpose": purpose_text or None,
        }
        return self._result(issues, cleaned)

    def validate_daily_spend(
        self,
        date: Any,
        amount: Any,
        description: Any,
        category: Any = SpendCategory.FOOD,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []
        cleaned = {
            "date": self._parse_date("date", date, issues),
            "category": self._parse_choice("category", category, SpendCategory, issues),
            "amount": self._parse_amount(amount, issues),
            "description": self._require_text(DailySpendRecord, "description", description, issues),
        }
        return self._result(issues, cleaned)

    def validate_due_date(
        self,
        name: Any,
        amount: Any,
        due_date: Any,
        category: Any = DueCategory.MISC,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []
        cleaned = {
            "name": self._require_text(DueDateRecord, "name", name, issues),
            "amount": self._parse_amount(amount, issues),
            "due_date": self._parse_date("due_date", due_date, issues),
            "category": self._parse_choice("category", category, DueCategory, issues),
        }

        # Stage 2: only when the date itself parsed
        if cleaned["due_date"] is not None and cleaned["due_date"] < self.today:
            issues.append(ValidationIssue(
                field="due_date",
                issue_type="past_date",
                message="This bill is already overdue",
                severity="warning",
            ))
        return self._result(issues, cleaned)

    def validate_adjustment(self, delta: Any) -> ValidationResult:
        """
        Savings adjustments may be negative; only the number is checked.
        """
        issues: list[ValidationIssue] = []
        amount: Optional[Decimal] = None
        if delta is None or isinstance(delta, bool) or (isinstance(delta, str) and not delta.strip()):
            issues.append(ValidationIssue(
                field="delta",
                issue_type="missing",
                message="Adjustment amount is required",
            ))
        else:
            try:
                amount = Decimal(str(delta).strip())
            except (InvalidOperation, ValueError):
                amount = None
            if amount is None or not amount.is_finite():
                issues.append(ValidationIssue(
                    field="delta",
                    issue_type="not_a_number",
                    message=f"Adjustment must be a number, got {delta!r}",
                ))
                amount = None
        return self._result(issues, {"delta": amount})
