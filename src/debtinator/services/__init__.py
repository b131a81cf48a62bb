"""Service module exports."""

from . import debts, reports

__all__ = ["debts", "reports"]
