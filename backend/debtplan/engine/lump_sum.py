"""One-time lump sum applied before the first plan month.

Uses the same cascade and the same strategy order as the monthly surplus
pass. Ad-hoc calendar payments in later months are not handled here; the
projection loop adds them to that month's surplus budget instead.
"""
from __future__ import annotations

import logging

from debtplan.engine.position import DebtPosition
from debtplan.engine.strategies import Strategy
from debtplan.engine.waterfall import cascade
from debtplan.models.debt import Debt

logger = logging.getLogger(__name__)


def apply_lump_sum(
    debts: list[Debt],
    amount: float,
    strategy: Strategy,
    closure_epsilon: float,
) -> tuple[list[Debt], dict[str, float]]:
    """Return new Debt values with ``amount`` cascaded onto included balances.

    The second element maps debt id to the amount applied. Any part of the
    lump sum exceeding the total included balance is not applied.
    """
    if amount <= 0:
        return list(debts), {}

    positions = {
        d.id: DebtPosition.from_debt(d)
        for d in debts
        if d.included and d.balance > closure_epsilon
    }
    order = strategy.order(positions.values())
    applied = cascade(order, amount, closure_epsilon)

    logger.debug(
        "Lump sum %.2f applied %.2f across %d debts (%s)",
        amount, sum(applied.values()), len(applied), strategy.kind.value,
    )

    updated = [
        d.model_copy(update={"balance": positions[d.id].balance}) if d.id in applied else d
        for d in debts
    ]
    return updated, applied
