"""Tests for savings goal progress."""

import pytest
from datetime import date
from decimal import Decimal

from financehub.aggregation import (
    GoalOverdueError,
    goal_projection,
    goal_status,
    milestones,
    monthly_target,
    months_until,
    progress_percentage,
    progress_tier,
)
from financehub.models import GoalProgressTier, GoalStatus, SavingsState


def state(current="32500", goal="35000", target=date(2026, 7, 1)):
    return SavingsState(current_amount=Decimal(current), goal_amount=Decimal(goal), target_date=target)


class TestProgress:
    """Tests for percentage, tiers and milestones."""

    def test_progress_percentage(self):
        assert progress_percentage(Decimal("17500"), Decimal("35000")) == Decimal("50")

    def test_progress_percentage_requires_positive_goal(self):
        with pytest.raises(ValueError):
            progress_percentage(Decimal("100"), Decimal("0"))

    @pytest.mark.parametrize("percentage,expected", [
        (Decimal("100"), GoalProgressTier.COMPLETE),
        (Decimal("120"), GoalProgressTier.COMPLETE),
        (Decimal("85"), GoalProgressTier.NEARLY_THERE),
        (Decimal("60"), GoalProgressTier.ON_TRACK),
        (Decimal("59.9"), GoalProgressTier.STARTED),
    ])
    def test_progress_tier(self, percentage, expected):
        assert progress_tier(percentage) == expected

    def test_milestones(self):
        result = milestones(Decimal("30000"), [
            ("Emergency Fund", Decimal("25000")),
            ("Safety Buffer", Decimal("30000")),
            ("Final Goal", Decimal("35000")),
        ])
        assert [m.reached for m in result] == [True, True, False]
        assert result[0].to_go == Decimal("0")
        assert result[2].to_go == Decimal("5000")


class TestGoalOutlook:
    """Tests for months remaining, status and monthly target."""

    def test_months_until_rounds_up(self):
        # 181 days
        assert months_until(date(2026, 7, 1), date(2026, 1, 1)) == 7
        assert months_until(date(2026, 7, 1), date(2026, 6, 1)) == 1

    def test_months_until_past_date_is_not_positive(self):
        assert months_until(date(2026, 7, 1), date(2026, 7, 1)) == 0
        assert months_until(date(2026, 7, 1), date(2026, 9, 1)) <= 0

    def test_in_progress_monthly_target(self):
        goal = state()
        assert goal_status(goal, date(2026, 1, 1)) == GoalStatus.IN_PROGRESS
        assert monthly_target(goal, date(2026, 1, 1)) == Decimal("2500") / 7

    def test_reached_goal_needs_nothing_more(self):
        goal = state(current="36000")
        assert goal_status(goal, date(2027, 1, 1)) == GoalStatus.REACHED
        assert monthly_target(goal, date(2027, 1, 1)) == Decimal("0")

    def test_overdue_goal_raises_instead_of_dividing(self):
        goal = state()
        assert goal_status(goal, date(2026, 7, 2)) == GoalStatus.OVERDUE
        with pytest.raises(GoalOverdueError) as excinfo:
            monthly_target(goal, date(2026, 7, 2))
        assert excinfo.value.remaining == Decimal("2500")

    def test_projection_in_progress(self):
        projection = goal_projection(state(), date(2026, 6, 1))
        assert projection.status == GoalStatus.IN_PROGRESS
        assert projection.months_remaining == 1
        assert projection.monthly_target == Decimal("2500")
        assert projection.remaining_amount == Decimal("2500")

    def test_projection_overdue_has_no_target(self):
        projection = goal_projection(state(), date(2026, 8, 1))
        assert projection.status == GoalStatus.OVERDUE
        assert projection.months_remaining is None
        assert projection.monthly_target is None

    def test_projection_reached_never_negative(self):
        projection = goal_projection(state(current="40000"), date(2026, 8, 1))
        assert projection.remaining_amount == Decimal("0")
        assert projection.months_remaining == 0
        assert projection.monthly_target == Decimal("0")
