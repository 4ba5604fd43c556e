"""Projection loop — the month-by-month payoff simulation.

Each month: snapshot starting balances, accrue interest on open debts, order
them by strategy, run the payment waterfall, record one entry per debt. The
loop stops when every balance is closed (converged) or the month cap is hit
(capped, i.e. minimums never outrun interest).

Values here are full precision; rounding to cents happens when the
aggregator builds the reported PlanResult.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date

from debtplan.engine.accrual import accrue_all
from debtplan.engine.limits import EngineLimits
from debtplan.engine.position import DebtPosition
from debtplan.engine.strategies import Strategy
from debtplan.engine.waterfall import allocate
from debtplan.models.debt import Debt
from debtplan.models.plan import PlanStatus

logger = logging.getLogger(__name__)


@dataclass
class PaymentEntry:
    debt_id: str
    starting_balance: float
    interest: float
    min_applied: float
    extra_applied: float
    ending_balance: float
    closed: bool

    @property
    def total_paid(self) -> float:
        return self.min_applied + self.extra_applied

    @property
    def principal(self) -> float:
        return self.total_paid - self.interest


@dataclass
class MonthEntry:
    month_index: int
    date: date
    payments: list[PaymentEntry]
    one_off: float = 0.0

    @property
    def interest(self) -> float:
        return sum(p.interest for p in self.payments)

    @property
    def principal(self) -> float:
        return sum(p.principal for p in self.payments)

    @property
    def outflow(self) -> float:
        return sum(p.total_paid for p in self.payments)


@dataclass
class ProjectionRun:
    months: list[MonthEntry]
    status: PlanStatus
    budget: float
    final_balances: dict[str, float] = field(default_factory=dict)


def month_date(start: date, month_index: int) -> date:
    """First day of plan month ``month_index`` (1-based) counted from ``start``."""
    months = start.year * 12 + (start.month - 1) + (month_index - 1)
    return date(months // 12, months % 12 + 1, 1)


def monthly_budget(debts: Sequence[Debt], extra_monthly: float, closure_epsilon: float) -> float:
    """Sum of minimums over included open debts plus the recurring extra."""
    minimums = sum(d.min_payment for d in debts if d.included and d.balance > closure_epsilon)
    return minimums + max(extra_monthly, 0.0)


def run_projection(
    debts: Sequence[Debt],
    strategy: Strategy,
    budget: float,
    start_date: date,
    limits: EngineLimits,
    *,
    extra_monthly: float = 0.0,
    roll_over_minimums: bool = True,
    one_offs: Mapping[int, float] | None = None,
) -> ProjectionRun:
    """Simulate included ``debts`` until converged or capped.

    With ``roll_over_minimums`` the locked ``budget`` is spent every month,
    so minimums freed by a closure join the surplus cascade. Without it the
    budget is recomputed each month from the still-open minimums plus
    ``extra_monthly``.
    """
    eps = limits.closure_epsilon
    one_offs = one_offs or {}
    positions = [DebtPosition.from_debt(d) for d in debts if d.included]

    months: list[MonthEntry] = []
    status = PlanStatus.converged
    month_index = 0

    while any(p.is_open(eps) for p in positions):
        if month_index >= limits.max_months:
            status = PlanStatus.capped
            logger.warning(
                "Projection capped at %d months with %d debts still open",
                limits.max_months, sum(1 for p in positions if p.is_open(eps)),
            )
            break
        month_index += 1

        open_positions = [p for p in positions if p.is_open(eps)]
        starting = {p.debt_id: p.balance for p in open_positions}
        interest = accrue_all(open_positions)
        order = strategy.order(open_positions)

        if roll_over_minimums:
            month_budget = budget
        else:
            month_budget = sum(p.min_payment for p in open_positions) + max(extra_monthly, 0.0)
        one_off = one_offs.get(month_index, 0.0)

        allocation = allocate(open_positions, month_budget + one_off, order, eps)

        payments = []
        for p in open_positions:
            if p.balance <= eps:
                p.balance = 0.0
            payments.append(PaymentEntry(
                debt_id=p.debt_id,
                starting_balance=starting[p.debt_id],
                interest=interest[p.debt_id],
                min_applied=allocation.min_applied.get(p.debt_id, 0.0),
                extra_applied=allocation.extra_applied.get(p.debt_id, 0.0),
                ending_balance=p.balance,
                closed=p.balance == 0.0,
            ))

        months.append(MonthEntry(
            month_index=month_index,
            date=month_date(start_date, month_index),
            payments=payments,
            one_off=min(max(allocation.spent - month_budget, 0.0), one_off),
        ))

    return ProjectionRun(
        months=months,
        status=status,
        budget=budget,
        final_balances={p.debt_id: p.balance for p in positions},
    )
