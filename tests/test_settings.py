"""Tests for environment-driven configuration."""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from financehub.config import (
    AppSettings,
    DashboardSettings,
    SavingsSettings,
    StorageSettings,
    validate_all_settings,
)


class TestDashboardSettings:
    """Tests for aggregation thresholds."""

    def test_defaults(self):
        settings = DashboardSettings()
        assert settings.assumed_business_expenses == Decimal("1500")
        assert settings.fixed_expense_share == Decimal("0.85")
        assert settings.months_back == 6

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FINANCEHUB_DASHBOARD_MONTHS_BACK", "3")
        monkeypatch.setenv("FINANCEHUB_DASHBOARD_ASSUMED_BUSINESS_EXPENSES", "900")
        settings = DashboardSettings()
        assert settings.months_back == 3
        assert settings.assumed_business_expenses == Decimal("900")

    def test_expense_split_must_be_whole(self):
        with pytest.raises(ValidationError):
            DashboardSettings(fixed_expense_share=Decimal("0.9"))

    def test_medium_cannot_exceed_high(self):
        with pytest.raises(ValidationError):
            DashboardSettings(calendar_medium_total=Decimal("150"))


class TestSavingsSettings:
    """Tests for savings goal defaults."""

    def test_defaults(self):
        settings = SavingsSettings()
        assert settings.target_date == date(2026, 7, 1)
        assert settings.milestones == [
            ("Emergency Fund", Decimal("25000")),
            ("Safety Buffer", Decimal("30000")),
            ("Final Goal", Decimal("35000")),
        ]

    def test_unlabelled_milestones_get_a_name(self):
        settings = SavingsSettings(milestone_amounts="1000,2000", milestone_labels="Start")
        assert settings.milestones == [("Start", Decimal("1000")), ("Milestone 2", Decimal("2000"))]

    def test_bad_milestone_amount(self):
        with pytest.raises(ValidationError):
            SavingsSettings(milestone_amounts="1000,lots")


class TestOtherSettings:
    """Tests for storage and app settings."""

    def test_storage_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FINANCEHUB_STORAGE_DATA_PATH", str(tmp_path / "x.json"))
        assert StorageSettings().data_path == tmp_path / "x.json"

    def test_log_level_pattern(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="LOUD")

    def test_validate_all_settings_reports_bad_section(self, monkeypatch):
        monkeypatch.setenv("FINANCEHUB_DASHBOARD_DUE_SOON_DAYS", "10")
        status = validate_all_settings()
        assert status["storage"] is True
        assert status["dashboard"] is False
        assert "dashboard_error" in status
