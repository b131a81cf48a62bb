"""Debtinator value types."""

from .debt import (
    DEBT_TYPE_LABELS,
    DEBT_TYPES,
    Debt,
    DebtSummary,
    DebtType,
    PayoffMethod,
    PayoffPlan,
    PayoffSchedule,
    PayoffStep,
    migrate_debts,
    validate_debt,
)

__all__ = [
    "DEBT_TYPE_LABELS",
    "DEBT_TYPES",
    "Debt",
    "DebtSummary",
    "DebtType",
    "PayoffMethod",
    "PayoffPlan",
    "PayoffSchedule",
    "PayoffStep",
    "migrate_debts",
    "validate_debt",
]
