"""Mutable per-run working copy of a debt."""
from __future__ import annotations

from dataclasses import dataclass

from debtplan.models.debt import Debt


@dataclass
class DebtPosition:
    """Running balance for one debt inside a single projection.

    Built fresh from an immutable Debt on every run and discarded afterwards,
    so callers' inputs are never touched.
    """
    debt_id: str
    balance: float
    apr: float
    min_payment: float

    @classmethod
    def from_debt(cls, debt: Debt) -> DebtPosition:
        return cls(
            debt_id=debt.id,
            balance=debt.balance,
            apr=debt.apr,
            min_payment=debt.min_payment,
        )

    def is_open(self, closure_epsilon: float) -> bool:
        return self.balance > closure_epsilon

    def pay(self, amount: float, closure_epsilon: float) -> float:
        """Reduce the balance by at most ``amount``; return what was applied.

        A residual at or below the epsilon is snapped to zero.
        """
        applied = min(amount, self.balance)
        if applied <= 0:
            return 0.0
        self.balance -= applied
        if self.balance <= closure_epsilon:
            self.balance = 0.0
        return applied
