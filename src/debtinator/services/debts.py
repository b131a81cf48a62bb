"""Debt payoff simulator (snowball, avalanche and custom ordering)."""

from __future__ import annotations

import math
from dataclasses import asdict, replace
from typing import Any, Iterable, Sequence

from ..logging_config import get_logger
from ..models.debt import Debt, DebtSummary, PayoffPlan, PayoffSchedule, PayoffStep

logger = get_logger(__name__)

# Fail-safe against plans whose interest outpaces payments: 50 years.
MAX_SIMULATION_MONTHS = 600


def _monthly_rate(apr: float) -> float:
    """Convert an APR percentage into a monthly periodic rate."""
    return apr / 100 / 12


def _apply_payment(balance: float, payment: float) -> tuple[float, float]:
    """Return (new_balance, principal_paid); interest is already in ``balance``."""
    principal_paid = min(payment, balance)
    return max(0.0, balance - principal_paid), principal_paid


def _sort_by_custom(debts: Sequence[Debt], custom_order: Iterable[str]) -> list[Debt]:
    by_id = {d.id: d for d in debts}
    ordered: list[Debt] = []
    placed: set[str] = set()
    for debt_id in custom_order:
        if debt_id in by_id and debt_id not in placed:
            ordered.append(by_id[debt_id])
            placed.add(debt_id)
    ordered.extend(d for d in debts if d.id not in placed)
    return ordered


def order_debts(
    debts: Iterable[Debt], method: str, custom_order: Iterable[str] | None = None
) -> list[Debt]:
    """Return debts in the priority order that receives surplus payments.

    Snowball sorts by ascending balance and avalanche by descending APR; both
    sorts are stable. Custom follows ``custom_order``, ignoring unknown ids and
    appending unmentioned debts in input order. Any other method keeps the
    input order.
    """
    debts = list(debts)
    if method == "snowball":
        return sorted(debts, key=lambda d: d.balance)
    if method == "avalanche":
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    if method == "custom":
        return _sort_by_custom(debts, custom_order) if custom_order is not None else debts
    logger.debug("Unknown payoff method %r; keeping input order", method)
    return debts


def _check_finite(plan: PayoffPlan) -> None:
    if not math.isfinite(plan.monthly_payment):
        raise ValueError("Monthly payment must be a finite number")
    for debt in plan.debts:
        for value in (debt.balance, debt.interest_rate, debt.minimum_payment):
            if not math.isfinite(value):
                raise ValueError(f"Debt {debt.id!r} has a non-finite amount")


def _simulate_month(
    working: list[dict[str, Any]], month: int, budget: float
) -> tuple[tuple[PayoffStep, ...], float, float]:
    """Advance every working debt by one month.

    Returns the month's steps, the interest accrued and the amount paid.
    """
    steps: list[PayoffStep] = []
    interest_total = 0.0
    paid_total = 0.0
    remaining = budget

    # Interest accrues on every debt before any payment lands.
    accrued: dict[str, float] = {}
    for debt in working:
        if debt["balance"] <= 0:
            continue
        interest = debt["balance"] * _monthly_rate(debt["interest_rate"])
        accrued[debt["id"]] = interest
        debt["balance"] += interest
        interest_total += interest

    # Minimums in priority order; an underfunded budget shortchanges the tail.
    for debt in working:
        if debt["balance"] <= 0:
            continue
        payment = min(min(debt["minimum_payment"], debt["balance"]), remaining)
        if payment > 0:
            debt["balance"], _ = _apply_payment(debt["balance"], payment)
            paid_total += payment
            remaining -= payment
            steps.append(
                PayoffStep(
                    debt_id=debt["id"],
                    debt_name=debt["name"],
                    month=month,
                    payment=payment,
                    remaining_balance=debt["balance"],
                    interest_paid=accrued.get(debt["id"], 0.0),
                )
            )

    # Whatever is left goes to the first debt still carrying a balance.
    if remaining > 0:
        target = next((d for d in working if d["balance"] > 0), None)
        if target is not None:
            target["balance"], payment = _apply_payment(target["balance"], remaining)
            paid_total += payment
            index = next((i for i, s in enumerate(steps) if s.debt_id == target["id"]), None)
            if index is not None:
                steps[index] = replace(
                    steps[index],
                    payment=steps[index].payment + payment,
                    remaining_balance=target["balance"],
                )
            else:
                steps.append(
                    PayoffStep(
                        debt_id=target["id"],
                        debt_name=target["name"],
                        month=month,
                        payment=payment,
                        remaining_balance=target["balance"],
                        interest_paid=accrued.get(target["id"], 0.0),
                    )
                )

    return tuple(steps), interest_total, paid_total


def calculate_payoff_schedule(plan: PayoffPlan) -> PayoffSchedule:
    """Simulate ``plan`` month by month until every debt is paid off.

    The caller's debts are never modified. The loop stops after
    ``MAX_SIMULATION_MONTHS`` even if balances remain, which only happens
    when payments cannot keep up with interest.

    Raises:
        ValueError: if the payment or any debt amount is NaN or infinite.
    """
    _check_finite(plan)

    ordered = order_debts(plan.debts, plan.method, plan.custom_order)
    working: list[dict[str, Any]] = [asdict(d) for d in ordered]

    steps: list[tuple[PayoffStep, ...]] = []
    month = 0
    total_interest = 0.0
    total_payments = 0.0

    logger.debug(
        "Simulating payoff",
        extra={"method": plan.method, "debt_count": len(working), "monthly_payment": plan.monthly_payment},
    )

    while any(d["balance"] > 0 for d in working):
        month += 1
        month_steps, interest, paid = _simulate_month(working, month, plan.monthly_payment)
        total_interest += interest
        total_payments += paid
        steps.append(month_steps)

        if month >= MAX_SIMULATION_MONTHS:
            logger.warning(
                "Payoff simulation hit the %d month cap with balances remaining",
                MAX_SIMULATION_MONTHS,
                extra={"method": plan.method, "monthly_payment": plan.monthly_payment},
            )
            break

    logger.debug(
        "Payoff simulation finished",
        extra={"months": month, "total_interest": total_interest, "total_payments": total_payments},
    )

    return PayoffSchedule(
        steps=tuple(steps),
        total_months=month,
        total_interest=total_interest,
        total_payments=total_payments,
    )


def get_debt_summary(debts: Iterable[Debt]) -> DebtSummary:
    """Return totals and the balance-weighted average APR for ``debts``."""
    debts = list(debts)
    total_balance = sum(d.balance for d in debts)
    total_minimum_payments = sum(d.minimum_payment for d in debts)
    if total_balance == 0:
        weighted_interest_rate = 0.0
    else:
        weighted_interest_rate = sum(d.balance * d.interest_rate for d in debts) / total_balance
    return DebtSummary(
        total_balance=total_balance,
        total_minimum_payments=total_minimum_payments,
        weighted_interest_rate=weighted_interest_rate,
        count=len(debts),
    )


def has_valid_plan(debts: Sequence[Debt], monthly_payment: float) -> bool:
    """Return True when the payment covers every minimum of a non-empty list."""
    if not debts:
        return False
    return monthly_payment >= sum(d.minimum_payment for d in debts)


__all__ = [
    "MAX_SIMULATION_MONTHS",
    "calculate_payoff_schedule",
    "get_debt_summary",
    "has_valid_plan",
    "order_debts",
]
