"""Debt records and payoff plan/schedule value types."""

from __future__ import annotations

import math
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Literal, Mapping, Sequence

DebtType = Literal["credit_card", "personal_loan", "other"]
PayoffMethod = Literal["snowball", "avalanche", "custom"]

DEBT_TYPES: tuple[str, ...] = ("credit_card", "personal_loan", "other")
DEFAULT_DEBT_TYPE: DebtType = "other"

DEBT_TYPE_LABELS = {
    "credit_card": "Credit Card",
    "personal_loan": "Personal Loan",
    "other": "Other",
}

# Persisted records use camelCase keys; snake_case is accepted too.
_RECORD_KEYS = {
    "interest_rate": ("interestRate", "interest_rate"),
    "minimum_payment": ("minimumPayment", "minimum_payment"),
    "created_at": ("createdAt", "created_at"),
}


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return "".join(reversed(out))


def generate_debt_id() -> str:
    """Return an opaque id: base36 milliseconds plus a random suffix."""

    return _base36(int(time.time() * 1000)) + _base36(secrets.randbits(52))


def _lookup(record: Mapping[str, Any], attr: str, default: Any = None) -> Any:
    for key in _RECORD_KEYS.get(attr, (attr,)):
        if key in record:
            return record[key]
    return default


@dataclass(slots=True, frozen=True)
class Debt:
    """A single owed balance being tracked."""

    id: str
    name: str
    balance: float
    interest_rate: float  # APR in percent, e.g. 18.99
    minimum_payment: float
    type: DebtType = DEFAULT_DEBT_TYPE
    created_at: str = ""

    @classmethod
    def create(
        cls,
        *,
        name: str,
        balance: float,
        interest_rate: float,
        minimum_payment: float,
        type: str | None = None,
    ) -> "Debt":
        """Build a new debt with a fresh id and creation timestamp."""

        return cls(
            id=generate_debt_id(),
            name=name.strip(),
            balance=float(balance),
            interest_rate=float(interest_rate),
            minimum_payment=float(minimum_payment),
            type=_coerce_type(type),
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    def updated(
        self,
        *,
        name: str,
        balance: float,
        interest_rate: float,
        minimum_payment: float,
        type: str | None = None,
    ) -> "Debt":
        """Return an edited copy keeping ``id`` and ``created_at``.

        An empty ``type`` keeps the current type.
        """

        return Debt(
            id=self.id,
            name=name.strip(),
            balance=float(balance),
            interest_rate=float(interest_rate),
            minimum_payment=float(minimum_payment),
            type=_coerce_type(type or self.type),
            created_at=self.created_at,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Debt":
        """Build a debt from a persisted record.

        Older records may lack ``type``; those default to ``other``.
        """

        missing = [
            attr
            for attr in ("id", "name", "balance", "interest_rate", "minimum_payment")
            if _lookup(record, attr) is None
        ]
        if missing:
            raise ValueError(f"Debt record missing fields: {', '.join(missing)}")

        try:
            balance = float(_lookup(record, "balance"))
            interest_rate = float(_lookup(record, "interest_rate"))
            minimum_payment = float(_lookup(record, "minimum_payment"))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Debt record {record.get('id')!r} has a non-numeric amount") from exc

        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            type=_coerce_type(record.get("type")),
            created_at=str(_lookup(record, "created_at", "") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        """Return the camelCase record shape used for persistence."""

        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "balance": self.balance,
            "interestRate": self.interest_rate,
            "minimumPayment": self.minimum_payment,
            "createdAt": self.created_at,
        }


def _coerce_type(value: Any) -> DebtType:
    if not value:
        return DEFAULT_DEBT_TYPE
    if value not in DEBT_TYPES:
        raise ValueError(f"Invalid debt type: {value}")
    return value


def migrate_debts(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return copies of ``records`` with a ``type`` on every entry."""

    migrated: list[dict[str, Any]] = []
    for record in records:
        if not isinstance(record, Mapping):
            raise ValueError(f"Debt record must be an object, got {type(record).__name__}")
        migrated.append({**record, "type": record.get("type") or DEFAULT_DEBT_TYPE})
    return migrated


def validate_debt(debt: Debt) -> list[str]:
    """Return the problems that keep ``debt`` out of a payoff plan.

    An empty list means the debt is valid.
    """

    problems: list[str] = []
    if not debt.name.strip():
        problems.append("Name is required")
    for label, value in (
        ("Balance", debt.balance),
        ("Interest rate", debt.interest_rate),
        ("Minimum payment", debt.minimum_payment),
    ):
        if not math.isfinite(value):
            problems.append(f"{label} must be a finite number")
    if math.isfinite(debt.balance) and debt.balance <= 0:
        problems.append("Balance must be greater than zero")
    if math.isfinite(debt.interest_rate) and debt.interest_rate < 0:
        problems.append("Interest rate cannot be negative")
    if math.isfinite(debt.minimum_payment) and debt.minimum_payment <= 0:
        problems.append("Minimum payment must be greater than zero")
    return problems


@dataclass(slots=True, frozen=True)
class PayoffPlan:
    """Simulation input."""

    method: PayoffMethod
    monthly_payment: float
    debts: Sequence[Debt]
    custom_order: Sequence[str] | None = None


@dataclass(slots=True, frozen=True)
class PayoffStep:
    """One debt's payment record within one month."""

    debt_id: str
    debt_name: str
    month: int
    payment: float
    remaining_balance: float
    interest_paid: float


@dataclass(slots=True, frozen=True)
class PayoffSchedule:
    """Simulation output: monthly steps plus aggregate totals."""

    steps: tuple[tuple[PayoffStep, ...], ...] = ()
    total_months: int = 0
    total_interest: float = 0.0
    total_payments: float = 0.0


@dataclass(slots=True, frozen=True)
class DebtSummary:
    """Aggregate statistics over a debt list."""

    total_balance: float
    total_minimum_payments: float
    weighted_interest_rate: float
    count: int
