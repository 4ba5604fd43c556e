"""Reduce a projection run into the reported PlanResult.

This is the single rounding point: everything upstream is full precision,
everything produced here is rounded half-up to the cent.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from debtplan.engine.limits import EngineLimits
from debtplan.engine.projection import MonthEntry, ProjectionRun, month_date
from debtplan.engine.strategies import Strategy
from debtplan.models.debt import Debt
from debtplan.models.plan import (
    DebtSummary,
    MonthSnapshot,
    MonthTotals,
    PaymentRecord,
    PlanResult,
    PlanStatus,
    PlanTotals,
)

_CENT = Decimal("0.01")


def round_cents(value: float) -> float:
    """Round half-up to the cent."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)) + 0.0


def aggregate_totals(
    months: Sequence[MonthEntry],
    budget: float,
    status: PlanStatus,
    limits: EngineLimits,
    one_time_applied: float = 0.0,
) -> PlanTotals:
    """Sum interest, principal and outflow across every recorded month."""
    interest = sum(m.interest for m in months)
    principal = sum(m.principal for m in months)
    outflow = sum(m.outflow for m in months)
    months_to_debt_free = limits.max_months if status == PlanStatus.capped else len(months)
    return PlanTotals(
        interest=round_cents(interest),
        principal=round_cents(principal),
        outflow_monthly=round_cents(budget),
        months_to_debt_free=months_to_debt_free,
        one_time_applied=round_cents(one_time_applied),
        total_paid=round_cents(outflow + one_time_applied),
    )


def month_snapshot(entry: MonthEntry) -> MonthSnapshot:
    payments = [
        PaymentRecord(
            debt_id=p.debt_id,
            starting_balance=round_cents(p.starting_balance),
            interest_accrued=round_cents(p.interest),
            min_applied=round_cents(p.min_applied),
            extra_applied=round_cents(p.extra_applied),
            total_paid=round_cents(p.total_paid),
            principal=round_cents(p.principal),
            ending_balance=round_cents(p.ending_balance),
            closed_this_month=p.closed,
        )
        for p in entry.payments
    ]
    return MonthSnapshot(
        month_index=entry.month_index,
        date=entry.date,
        payments=payments,
        totals=MonthTotals(
            interest=round_cents(entry.interest),
            principal=round_cents(entry.principal),
            outflow=round_cents(entry.outflow),
        ),
        one_off_applied=round_cents(entry.one_off),
    )


def _payoff_date(month_start: date, due_day: int | None) -> date:
    if due_day is None:
        return month_start
    return month_start.replace(day=due_day)


def summarize_debts(
    debts: Sequence[Debt],
    run: ProjectionRun,
    strategy: Strategy,
    start_date: date,
    limits: EngineLimits,
    lump_applied: Mapping[str, float] | None = None,
) -> list[DebtSummary]:
    """Per-debt outcomes in eventual closure order.

    Included debts come first, ordered by payoff month with ties broken by the
    strategy comparator on the original balances. Debts still open at the end
    of a capped run follow, then excluded debts in input order. A debt that is
    already closed before month 1 (zero balance, or cleared by the plan-start
    lump sum) reports payoff month 0.
    """
    eps = limits.closure_epsilon
    lump_applied = lump_applied or {}

    payoff_month: dict[str, int] = {}
    interest: dict[str, float] = {}
    paid: dict[str, float] = {}
    for debt_id, amount in lump_applied.items():
        paid[debt_id] = amount
    for entry in run.months:
        for p in entry.payments:
            interest[p.debt_id] = interest.get(p.debt_id, 0.0) + p.interest
            paid[p.debt_id] = paid.get(p.debt_id, 0.0) + p.total_paid
            if p.closed and p.debt_id not in payoff_month:
                payoff_month[p.debt_id] = entry.month_index

    included: list[tuple[tuple, DebtSummary]] = []
    excluded: list[DebtSummary] = []
    for debt in debts:
        if not debt.included:
            excluded.append(DebtSummary(
                id=debt.id,
                name=debt.name,
                apr=debt.apr,
                original_balance=round_cents(debt.balance),
                min_payment=round_cents(debt.min_payment),
                included=False,
                remaining_balance=round_cents(debt.balance),
            ))
            continue

        remaining = run.final_balances.get(debt.id, debt.balance)
        if remaining <= eps:
            remaining = 0.0
        month = payoff_month.get(debt.id)
        if month is None and remaining == 0.0:
            month = 0
        when = None
        if month is not None:
            when = _payoff_date(month_date(start_date, max(month, 1)), debt.due_day)

        summary = DebtSummary(
            id=debt.id,
            name=debt.name,
            apr=debt.apr,
            original_balance=round_cents(debt.balance),
            min_payment=round_cents(debt.min_payment),
            included=True,
            payoff_month=month,
            payoff_date=when,
            total_interest=round_cents(interest.get(debt.id, 0.0)),
            total_paid=round_cents(paid.get(debt.id, 0.0)),
            remaining_balance=round_cents(remaining),
        )
        sort_key = (month is None, month or 0, *strategy.sort_key(debt))
        included.append((sort_key, summary))

    included.sort(key=lambda pair: pair[0])
    return [summary for _, summary in included] + excluded


def build_plan_result(
    debts: Sequence[Debt],
    run: ProjectionRun,
    strategy: Strategy,
    start_date: date,
    limits: EngineLimits,
    lump_applied: Mapping[str, float] | None = None,
) -> PlanResult:
    """Assemble the immutable PlanResult for one run."""
    one_time_applied = sum((lump_applied or {}).values())
    debt_free_date = None
    if run.status == PlanStatus.converged:
        debt_free_date = run.months[-1].date if run.months else start_date

    return PlanResult(
        strategy=strategy.kind,
        status=run.status,
        start_date=start_date,
        debt_free_date=debt_free_date,
        debts=summarize_debts(debts, run, strategy, start_date, limits, lump_applied),
        months=[month_snapshot(m) for m in run.months],
        totals=aggregate_totals(run.months, run.budget, run.status, limits, one_time_applied),
    )
