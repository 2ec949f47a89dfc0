"""
Savings Goal Progress

DESIGN DECISION: A goal whose target date has passed is OVERDUE.
We never divide the remaining amount by zero or negative months;
callers get an explicit status instead of a nonsense monthly target.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

from financehub.aggregation.status import classify_status, days_until
from financehub.aggregation.totals import ZERO, as_decimal
from financehub.models.records import SavingsState
from financehub.models.summaries import (
    GoalProgressTier,
    GoalProjection,
    GoalStatus,
    Milestone,
)


DAYS_PER_MONTH = 30


class GoalOverdueError(Exception):
    """The target date has passed before the goal was reached."""

    def __init__(self, target_date: date, remaining: Decimal):
        self.target_date = target_date
        self.remaining = remaining
        super().__init__(
            f"Savings goal target date {target_date.isoformat()} has passed "
            f"with {remaining} still to save"
        )


def progress_percentage(current: Decimal, goal: Decimal) -> Decimal:
    """
    current / goal * 100.

    The caller guarantees goal > 0; a zero goal is a bug upstream and
    raises rather than turning into NaN.
    """
    goal = as_decimal(goal)
    if goal <= 0:
        raise ValueError(f"goal must be greater than zero, got {goal}")
    return as_decimal(current) / goal * 100


def months_until(target_date: date, today: Optional[date] = None) -> int:
    """ceil(days until target / 30). Zero or negative once the date is reached."""
    days = days_until(target_date, today)
    return -(-days // DAYS_PER_MONTH)


def goal_status(state: SavingsState, today: Optional[date] = None) -> GoalStatus:
    if state.is_reached:
        return GoalStatus.REACHED
    if months_until(state.target_date, today) <= 0:
        return GoalStatus.OVERDUE
    return GoalStatus.IN_PROGRESS


def monthly_target(state: SavingsState, today: Optional[date] = None) -> Decimal:
    """
    What has to be saved per month to hit the goal on time.

    Raises:
        GoalOverdueError: target date reached with money still to save
    """
    status = goal_status(state, today)
    if status == GoalStatus.REACHED:
        return ZERO
    if status == GoalStatus.OVERDUE:
        raise GoalOverdueError(state.target_date, state.remaining_amount)
    return state.remaining_amount / months_until(state.target_date, today)


def goal_projection(state: SavingsState, today: Optional[date] = None) -> GoalProjection:
    status = goal_status(state, today)
    months: Optional[int] = None
    target: Optional[Decimal] = None
    if status != GoalStatus.OVERDUE:
        months = max(months_until(state.target_date, today), 0)
        target = monthly_target(state, today)
    return GoalProjection(
        status=status,
        progress_percentage=progress_percentage(state.current_amount, state.goal_amount),
        remaining_amount=max(state.remaining_amount, ZERO),
        months_remaining=months,
        monthly_target=target,
    )


def progress_tier(percentage: Decimal) -> GoalProgressTier:
    return classify_status(
        percentage,
        {
            GoalProgressTier.COMPLETE: 100,
            GoalProgressTier.NEARLY_THERE: 80,
            GoalProgressTier.ON_TRACK: 60,
        },
        default=GoalProgressTier.STARTED,
    )


def milestones(
    current: Decimal,
    targets: Iterable[tuple[str, Decimal]],
) -> list[Milestone]:
    current = as_decimal(current)
    return [
        Milestone(
            label=label,
            amount=amount,
            reached=current >= amount,
            to_go=max(amount - current, ZERO),
        )
        for label, amount in targets
    ]
