"""
FinanceHub - Source Package

A personal and household finance dashboard: income, expenses,
daily spending, upcoming bills and a savings goal, summarised
into monthly, category and calendar views.

DESIGN PRINCIPLES:
1. Records are immutable; status changes produce new records
2. Aggregations are pure functions over snapshots
3. Storage is injected, never global
4. Bad input is rejected visibly, never silently corrected
5. A failed save never loses what the user just entered
"""

__version__ = "1.0.0"
__author__ = "FinanceHub Team"
