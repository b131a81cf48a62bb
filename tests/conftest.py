"""Pytest configuration and shared fixtures for Debtinator tests.

Provides debt factories, environment isolation for configuration/logging and
float comparison helpers for payoff calculations.
"""

from __future__ import annotations

import logging
from itertools import count

import pytest

from debtinator.logging_config import ROOT_LOGGER_NAME
from debtinator.models import Debt

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config at a temporary data dir so tests never touch ./instance."""
    monkeypatch.setenv("DEBTINATOR_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DEBTINATOR_DEV_MODE", raising=False)
    monkeypatch.delenv("DEBTINATOR_DEFAULT_METHOD", raising=False)
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Debt Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for creating test debts with sequential ids.

    Returns:
        Callable: Function that builds Debt instances
    """
    ids = count(1)

    def _create_debt(
        name: str | None = None,
        balance: float = 1000.00,
        interest_rate: float = 18.0,
        minimum_payment: float = 25.00,
        type: str = "other",
        id: str | None = None,
    ) -> Debt:
        """Create a test debt with sensible defaults.

        Args:
            name: Debt name (defaults to "Debt <n>")
            balance: Current outstanding balance
            interest_rate: Annual percentage rate (e.g., 18.0 for 18%)
            minimum_payment: Minimum monthly payment
            type: credit_card, personal_loan or other
            id: Explicit id (defaults to "debt-<n>")
        """
        n = next(ids)
        return Debt(
            id=id or f"debt-{n}",
            name=name or f"Debt {n}",
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            type=type,
            created_at="2024-01-01T00:00:00+00:00",
        )

    return _create_debt


@pytest.fixture
def sample_records():
    """Persisted camelCase records, one of them missing its type."""
    return [
        {
            "id": "cc1",
            "name": "Visa",
            "type": "credit_card",
            "balance": 2500.0,
            "interestRate": 22.0,
            "minimumPayment": 75.0,
            "createdAt": "2024-01-05T10:00:00.000Z",
        },
        {
            "id": "car",
            "name": "Car Loan",
            "balance": 8000.0,
            "interestRate": 6.5,
            "minimumPayment": 200.0,
            "createdAt": "2024-02-01T10:00:00.000Z",
        },
    ]


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
