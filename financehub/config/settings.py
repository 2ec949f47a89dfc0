"""
Configuration Management for FinanceHub

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Every tunable number the dashboard uses lives here.
Numbers like the $1500 monthly business cost and the 85/15
fixed/variable expense split are estimates, not data. Keeping them as settings makes
each formula testable in isolation and overridable per household.
"""

from datetime import date
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local record store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCEHUB_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: Path = Field(
        default=Path("data/financehub.json"),
        description="JSON document holding every persisted collection"
    )
    max_document_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Largest document the store will write (local-storage quota)"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a write hitting a transient OS error"
    )


class DashboardSettings(BaseSettings):
    """Thresholds and constants used by the aggregation layer."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCEHUB_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    currency_symbol: str = Field(default="$", max_length=3)
    months_back: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Months shown in the trend charts"
    )

    # Overview formulas
    assumed_business_expenses: Decimal = Field(
        default=Decimal("1500"),
        ge=0,
        description="Monthly business cost subtracted for the margin badge"
    )
    fixed_expense_share: Decimal = Field(
        default=Decimal("0.85"),
        ge=0,
        le=1,
        description="Share of total expenses treated as fixed"
    )
    variable_expense_share: Decimal = Field(
        default=Decimal("0.15"),
        ge=0,
        le=1,
        description="Share of total expenses treated as variable"
    )

    # Overview badges and insights
    cashflow_excellent: Decimal = Field(default=Decimal("2000"))
    cashflow_good: Decimal = Field(default=Decimal("1000"))
    margin_good: Decimal = Field(default=Decimal("50"), description="Percent")
    margin_ok: Decimal = Field(default=Decimal("30"), description="Percent")
    savings_rate_outstanding: Decimal = Field(default=Decimal("40"), description="Percent")
    fixed_share_high: Decimal = Field(
        default=Decimal("50"),
        description="Fixed expenses above this percent of income are flagged"
    )

    # Calendar heatmap
    calendar_high_total: Decimal = Field(default=Decimal("100"), ge=0)
    calendar_medium_total: Decimal = Field(default=Decimal("50"), ge=0)
    calendar_many_transactions: int = Field(default=5, ge=0)

    # Due date badges (days until due)
    due_soon_days: int = Field(default=3, ge=0)
    due_this_week_days: int = Field(default=7, ge=0)

    # Spending tips
    tip_average_daily: Decimal = Field(default=Decimal("60"), ge=0)
    tip_food_month_total: Decimal = Field(default=Decimal("300"), ge=0)
    tip_entertainment_month_total: Decimal = Field(default=Decimal("200"), ge=0)
    tip_under_budget_total: Decimal = Field(default=Decimal("800"), ge=0)

    @model_validator(mode="after")
    def validate_expense_split(self) -> "DashboardSettings":
        """The fixed and variable shares describe one whole."""
        if self.fixed_expense_share + self.variable_expense_share != 1:
            raise ValueError("Fixed and variable expense shares must add up to 1")
        if self.calendar_medium_total > self.calendar_high_total:
            raise ValueError("Calendar medium threshold cannot exceed the high threshold")
        if self.due_soon_days > self.due_this_week_days:
            raise ValueError("Due-soon window cannot be longer than the this-week window")
        return self


class SavingsSettings(BaseSettings):
    """Savings goal defaults used the first time the tracker loads."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCEHUB_SAVINGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    starting_amount: Decimal = Field(default=Decimal("32500"), ge=0)
    goal_amount: Decimal = Field(default=Decimal("35000"), gt=0)
    target_date: date = Field(default=date(2026, 7, 1))
    milestone_amounts: str = Field(
        default="25000,30000,35000",
        description="Comma-separated milestone amounts"
    )
    milestone_labels: str = Field(
        default="Emergency Fund,Safety Buffer,Final Goal",
        description="Comma-separated milestone labels, same order as amounts"
    )

    @field_validator("milestone_amounts")
    @classmethod
    def validate_milestone_amounts(cls, v: str) -> str:
        for part in v.split(","):
            if part.strip() and not part.strip().replace(".", "", 1).isdigit():
                raise ValueError(f"Milestone amount is not a number: {part!r}")
        return v

    @property
    def milestones(self) -> list[tuple[str, Decimal]]:
        """Milestones as (label, amount) pairs."""
        amounts = [Decimal(a.strip()) for a in self.milestone_amounts.split(",") if a.strip()]
        labels = [l.strip() for l in self.milestone_labels.split(",")]
        labels += [f"Milestone {i + 1}" for i in range(len(labels), len(amounts))]
        return list(zip(labels, amounts))


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for the local structured log"
    )
    audit_log_limit: int = Field(
        default=500,
        ge=0,
        description="Audit events kept in the record store (0 disables persistence)"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def dashboard(self) -> DashboardSettings:
        return DashboardSettings()

    @property
    def savings(self) -> SavingsSettings:
        return SavingsSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings sections.

    Returns a dict of {section_name: is_valid} plus
    {section_name + "_error": message} for failing sections.
    """
    results = {}
    settings = get_settings()

    for section in ("storage", "dashboard", "savings", "app"):
        try:
            getattr(settings, section)
            results[section] = True
        except ValueError as e:
            results[section] = False
            results[f"{section}_error"] = str(e)

    return results
