"""Monthly interest accrual.

Interest is capitalized before any payment in the same month
(interest-then-payment).
"""
from __future__ import annotations

from collections.abc import Iterable

from debtplan.engine.position import DebtPosition


def monthly_rate(apr: float) -> float:
    """Periodic rate for an APR given in percent."""
    if apr <= 0:
        return 0.0
    return apr / 100.0 / 12.0


def accrue(position: DebtPosition) -> float:
    """Apply one month of interest in place and return the interest amount."""
    if position.balance <= 0:
        return 0.0
    interest = position.balance * monthly_rate(position.apr)
    position.balance += interest
    return interest


def accrue_all(positions: Iterable[DebtPosition]) -> dict[str, float]:
    """Accrue every position; return interest keyed by debt id."""
    return {p.debt_id: accrue(p) for p in positions}
