"""Command line interface for Debtinator."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from .config import PAYOFF_METHODS, BaseConfig
from .logging_config import get_logger, setup_logging
from .models.debt import DEBT_TYPE_LABELS, Debt, PayoffPlan, migrate_debts
from .services.debts import calculate_payoff_schedule, get_debt_summary, has_valid_plan
from .services.reports import flatten_schedule, plan_overview

logger = get_logger(__name__)


def _currency(amount: float) -> str:
    return f"${amount:,.2f}"


def load_debts(path: Path) -> list[Debt]:
    """Read debt records from a JSON list or a ``{"debts": [...]}`` object."""

    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc

    records = payload.get("debts", []) if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise click.ClickException(f"{path} does not contain a list of debts")

    try:
        return [Debt.from_record(record) for record in migrate_debts(records)]
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Track debts and simulate payoff strategies."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@main.command("summary")
@click.argument("debts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def summary_command(debts_file: Path) -> None:
    """Print aggregate statistics for the debts in DEBTS_FILE."""

    debts = load_debts(debts_file)
    summary = get_debt_summary(debts)
    click.echo(f"Debts: {summary.count}")
    click.echo(f"Total balance: {_currency(summary.total_balance)}")
    click.echo(f"Total minimum payments: {_currency(summary.total_minimum_payments)}")
    click.echo(f"Weighted interest rate: {summary.weighted_interest_rate:.2f}%")
    for debt in debts:
        click.echo(
            f"  {debt.name} ({DEBT_TYPE_LABELS[debt.type]}): {_currency(debt.balance)} "
            f"at {debt.interest_rate:.2f}%, min {_currency(debt.minimum_payment)}"
        )


@main.command("plan")
@click.argument("debts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--payment", "monthly_payment", type=float, required=True, help="Total paid per month")
@click.option("--method", type=click.Choice(PAYOFF_METHODS), default=None, help="Payoff ordering")
@click.option("--order", "custom_order", multiple=True, help="Debt id for custom ordering (repeatable)")
@click.option("--income", "monthly_income", type=float, default=0.0, help="Monthly income for ratios")
@click.option("--months", type=int, default=12, show_default=True, help="Months of schedule to print")
@click.pass_obj
def plan_command(
    config: BaseConfig,
    debts_file: Path,
    monthly_payment: float,
    method: str | None,
    custom_order: tuple[str, ...],
    monthly_income: float,
    months: int,
) -> None:
    """Simulate paying off the debts in DEBTS_FILE."""

    debts = load_debts(debts_file)
    method = method or config.DEFAULT_METHOD
    if not has_valid_plan(debts, monthly_payment):
        minimums = get_debt_summary(debts).total_minimum_payments
        click.echo(
            f"No valid plan: add at least one debt and pay at least the "
            f"minimum payments of {_currency(minimums)} (got {_currency(monthly_payment)})."
        )
        raise click.exceptions.Exit(1)

    plan = PayoffPlan(
        method=method,
        monthly_payment=monthly_payment,
        debts=debts,
        custom_order=list(custom_order) or None,
    )
    try:
        schedule = calculate_payoff_schedule(plan)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.info("Plan simulated", extra={"method": method, "months": schedule.total_months})

    overview = plan_overview(
        debts=debts,
        schedule=schedule,
        monthly_payment=monthly_payment,
        monthly_income=monthly_income,
    )
    click.echo(f"Method: {method}")
    click.echo(f"Time to payoff: {overview.total_months} months ({overview.total_years:.1f} years)")
    click.echo(f"Total interest: {_currency(overview.total_interest)}")
    click.echo(f"Total payments: {_currency(overview.total_payments)}")
    if overview.minimums_to_income_pct is not None:
        click.echo(f"Minimum payments: {overview.minimums_to_income_pct:.1f}% of income")
        click.echo(f"Your payment: {overview.payment_to_income_pct:.1f}% of income")

    rows = [row for row in flatten_schedule(schedule) if row.month <= months]
    if rows:
        click.echo("")
        click.echo(f"{'Month':>5}  {'Debt':<24} {'Payment':>12} {'Remaining':>12} {'Interest':>10}")
        for row in rows:
            click.echo(
                f"{row.month:>5}  {row.debt_name[:24]:<24} {_currency(row.payment):>12} "
                f"{_currency(row.remaining_balance):>12} {_currency(row.interest_paid):>10}"
            )


if __name__ == "__main__":  # pragma: no cover
    main()
