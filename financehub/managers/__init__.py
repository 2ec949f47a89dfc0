"""
Managers Package

Stateful owners of the persisted collections and the savings goal.
"""

from financehub.managers.base import (
    CollectionManager,
    PayableCollectionManager,
    PersistedState,
)
from financehub.managers.collections import (
    DailySpendManager,
    DueDateManager,
    ExpenseManager,
    IncomeManager,
)
from financehub.managers.savings import SAVINGS_KEY, SavingsGoalTracker

__all__ = [
    "CollectionManager",
    "PayableCollectionManager",
    "PersistedState",
    "IncomeManager",
    "ExpenseManager",
    "DailySpendManager",
    "DueDateManager",
    "SAVINGS_KEY",
    "SavingsGoalTracker",
]
