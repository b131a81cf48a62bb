"""Debtinator debt tracking and payoff simulation package."""

from __future__ import annotations

from .config import BaseConfig
from .models import Debt, PayoffPlan, PayoffSchedule, PayoffStep
from .services.debts import calculate_payoff_schedule, get_debt_summary

__all__ = [
    "BaseConfig",
    "Debt",
    "PayoffPlan",
    "PayoffSchedule",
    "PayoffStep",
    "calculate_payoff_schedule",
    "get_debt_summary",
]
