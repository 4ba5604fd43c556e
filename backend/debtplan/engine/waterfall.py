"""Payment waterfall — splits a monthly budget across open debts.

Pass 1 covers minimums for every open debt. Pass 2 cascades whatever is left
down the strategy order, each debt absorbing up to its full balance.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from debtplan.engine.position import DebtPosition


@dataclass
class Allocation:
    """Per-debt amounts paid by one waterfall run."""
    min_applied: dict[str, float] = field(default_factory=dict)
    extra_applied: dict[str, float] = field(default_factory=dict)
    spent: float = 0.0

    def paid(self, debt_id: str) -> float:
        return self.min_applied.get(debt_id, 0.0) + self.extra_applied.get(debt_id, 0.0)


def cascade(
    order: Iterable[DebtPosition],
    amount: float,
    closure_epsilon: float,
) -> dict[str, float]:
    """Pour ``amount`` down ``order`` until it runs out or every debt closes.

    Shared by the monthly surplus pass and the plan-start lump sum.
    """
    applied: dict[str, float] = {}
    remaining = amount
    for position in order:
        if remaining <= 0:
            break
        if not position.is_open(closure_epsilon):
            continue
        paid = position.pay(remaining, closure_epsilon)
        if paid > 0:
            applied[position.debt_id] = applied.get(position.debt_id, 0.0) + paid
            remaining -= paid
    return applied


def allocate(
    positions: Sequence[DebtPosition],
    budget: float,
    order: Sequence[DebtPosition],
    closure_epsilon: float,
) -> Allocation:
    """Run both passes against ``positions`` in place.

    Never pays a debt past zero and never spends more than ``budget``.
    """
    allocation = Allocation()
    remaining = max(budget, 0.0)

    # Pass 1: minimums
    for position in positions:
        if remaining <= 0:
            break
        if not position.is_open(closure_epsilon):
            continue
        paid = position.pay(min(position.min_payment, remaining), closure_epsilon)
        if paid > 0:
            allocation.min_applied[position.debt_id] = paid
            remaining -= paid

    # Pass 2: surplus down the strategy order
    if remaining > 0:
        allocation.extra_applied = cascade(order, remaining, closure_epsilon)
        remaining -= sum(allocation.extra_applied.values())

    allocation.spent = max(budget, 0.0) - remaining
    return allocation
