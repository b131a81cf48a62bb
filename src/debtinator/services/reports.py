"""Reporting utilities derived from a finished payoff schedule."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..models.debt import Debt, PayoffSchedule
from .debts import get_debt_summary


@dataclass(slots=True, frozen=True)
class ScheduleRow:
    """A single month/debt row of a flattened schedule."""

    month: int
    debt_name: str
    payment: float
    remaining_balance: float
    interest_paid: float


@dataclass(slots=True, frozen=True)
class PlanOverview:
    """Headline numbers for a payoff plan."""

    total_months: int
    total_years: float
    total_interest: float
    total_payments: float
    monthly_payment: float
    minimums_to_income_pct: float | None
    payment_to_income_pct: float | None


def flatten_schedule(schedule: PayoffSchedule) -> list[ScheduleRow]:
    """Return one row per step, months numbered from 1 in schedule order."""

    rows: list[ScheduleRow] = []
    for index, month_steps in enumerate(schedule.steps, start=1):
        for step in month_steps:
            rows.append(
                ScheduleRow(
                    month=index,
                    debt_name=step.debt_name,
                    payment=step.payment,
                    remaining_balance=step.remaining_balance,
                    interest_paid=step.interest_paid,
                )
            )
    return rows


def balance_series(debts: Iterable[Debt], schedule: PayoffSchedule) -> list[float]:
    """Return the starting total balance followed by each month's total.

    Monthly totals only cover debts that received a payment that month.
    """

    series = [sum(d.balance for d in debts)]
    for month_steps in schedule.steps:
        series.append(sum(s.remaining_balance for s in month_steps))
    return series


def principal_interest_split(schedule: PayoffSchedule) -> tuple[float, float]:
    """Return (principal, interest) paid over the whole schedule."""

    principal = max(0.0, schedule.total_payments - schedule.total_interest)
    return principal, schedule.total_interest


def debt_payoff_months(schedule: PayoffSchedule) -> dict[str, int]:
    """Return the first month each debt's remaining balance hit zero."""

    payoff: dict[str, int] = {}
    for month_steps in schedule.steps:
        for step in month_steps:
            if step.remaining_balance <= 0 and step.debt_id not in payoff:
                payoff[step.debt_id] = step.month
    return payoff


def _one_decimal(value: float) -> float:
    """Round to one decimal place with halves rounded up, as displayed."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _pct(amount: float, income: float) -> float | None:
    if income <= 0:
        return None
    return _one_decimal(amount / income * 100)


def plan_overview(
    *,
    debts: Sequence[Debt],
    schedule: PayoffSchedule,
    monthly_payment: float,
    monthly_income: float = 0.0,
) -> PlanOverview:
    """Summarize a schedule, with debt-to-income ratios when income is known."""

    summary = get_debt_summary(debts)
    return PlanOverview(
        total_months=schedule.total_months,
        total_years=_one_decimal(schedule.total_months / 12),
        total_interest=schedule.total_interest,
        total_payments=schedule.total_payments,
        monthly_payment=monthly_payment,
        minimums_to_income_pct=_pct(summary.total_minimum_payments, monthly_income),
        payment_to_income_pct=_pct(monthly_payment, monthly_income),
    )


__all__ = [
    "PlanOverview",
    "ScheduleRow",
    "balance_series",
    "debt_payoff_months",
    "flatten_schedule",
    "plan_overview",
    "principal_interest_split",
]
