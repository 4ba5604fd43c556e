"""Read-only views over a PlanResult.

Charts, the payoff calendar, milestones, the printable summary and the
CSV/xlsx schedule exports all read the same PlanResult. Nothing here
re-simulates, so every view agrees with the schedule it was derived from.
"""
from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO

import pandas as pd

from debtplan.engine.aggregator import round_cents
from debtplan.models.debt import Debt
from debtplan.models.insights import (
    CalendarMonth,
    CalendarPayoff,
    CategoryRemainingPoint,
    DebtShare,
    Milestone,
    PayoffEvent,
    PlanInsights,
    PrintableDebtRow,
    RemainingPoint,
)
from debtplan.models.plan import PlanResult, PlanStatus
from debtplan.services.alerts import generate_alerts

SCHEDULE_COLUMNS = [
    "month", "date", "debt_id", "debt", "starting_balance", "interest",
    "min_applied", "extra_applied", "total_paid", "ending_balance", "closed",
]

_REMAINING_CHECKPOINTS = [
    ("75% Remaining", 0.75),
    ("50% Remaining", 0.50),
    ("25% Remaining", 0.25),
]


def remaining_by_month(plan: PlanResult) -> list[RemainingPoint]:
    """Total included balance left after each month's payments."""
    return [
        RemainingPoint(
            month_index=month.month_index,
            date=month.date,
            remaining=round_cents(sum(p.ending_balance for p in month.payments)),
        )
        for month in plan.months
    ]


def remaining_by_category(plan: PlanResult, debts: Sequence[Debt]) -> list[CategoryRemainingPoint]:
    """Remaining balance per month, grouped by debt category.

    Debts without a category are grouped under "other". A category only
    appears in a month while one of its debts is still being paid.
    """
    categories = {d.id: d.category or "other" for d in debts}
    points: list[CategoryRemainingPoint] = []
    for month in plan.months:
        totals: dict[str, float] = {}
        for p in month.payments:
            cat = categories.get(p.debt_id, "other")
            totals[cat] = totals.get(cat, 0.0) + p.ending_balance
        points.append(CategoryRemainingPoint(
            month_index=month.month_index,
            date=month.date,
            by_category={cat: round_cents(v) for cat, v in totals.items()},
        ))
    return points


def payoff_events(plan: PlanResult) -> list[PayoffEvent]:
    """One event per debt closed during the projection, in closure order."""
    names = {d.id: d.name for d in plan.debts}
    remaining = {r.month_index: r.remaining for r in remaining_by_month(plan)}
    events: list[PayoffEvent] = []
    for month in plan.months:
        for payment in month.payments:
            if not payment.closed_this_month:
                continue
            events.append(PayoffEvent(
                debt_id=payment.debt_id,
                debt_name=names.get(payment.debt_id, payment.debt_id),
                month_index=month.month_index,
                date=month.date,
                remaining=remaining[month.month_index],
            ))
    return events


def milestones(plan: PlanResult) -> list[Milestone]:
    """First payoff, remaining-balance checkpoints and the debt-free month.

    Checkpoints are measured against the total balance at the start of
    month 1. "Debt-Free!" only appears for converged plans.
    """
    if not plan.months:
        return []

    remaining = remaining_by_month(plan)
    initial = sum(p.starting_balance for p in plan.months[0].payments)
    out: list[Milestone] = []

    events = payoff_events(plan)
    if events:
        first = events[0]
        out.append(Milestone(
            label="First Debt Paid",
            month_index=first.month_index,
            date=first.date,
            remaining=first.remaining,
        ))

    for label, pct in _REMAINING_CHECKPOINTS:
        target = initial * pct
        hit = next((r for r in remaining if r.remaining <= target), None)
        if hit is None:
            continue
        out.append(Milestone(
            label=label,
            month_index=hit.month_index,
            date=hit.date,
            remaining=hit.remaining,
        ))

    if plan.status == PlanStatus.converged:
        last = plan.months[-1]
        out.append(Milestone(
            label="Debt-Free!",
            month_index=last.month_index,
            date=last.date,
            remaining=0.0,
        ))

    return sorted(out, key=lambda m: m.month_index)


def calendar(plan: PlanResult) -> list[CalendarMonth]:
    names = {d.id: d.name for d in plan.debts}
    return [
        CalendarMonth(
            month_index=month.month_index,
            date=month.date,
            total_outflow=month.totals.outflow,
            total_interest=month.totals.interest,
            total_principal=month.totals.principal,
            one_off_applied=month.one_off_applied,
            payoffs=[
                CalendarPayoff(debt_id=p.debt_id, name=names.get(p.debt_id, p.debt_id))
                for p in month.payments
                if p.closed_this_month
            ],
        )
        for month in plan.months
    ]


def printable_rows(plan: PlanResult) -> list[PrintableDebtRow]:
    """Summary table rows for the printable/exported plan."""
    return [
        PrintableDebtRow(
            creditor=d.name,
            apr=d.apr,
            min_payment=d.min_payment,
            starting_balance=d.original_balance,
            payoff_date=d.payoff_date,
            total_interest=d.total_interest,
            total_paid=d.total_paid,
            included=d.included,
        )
        for d in plan.debts
    ]


def balance_shares(plan: PlanResult) -> list[DebtShare]:
    """Each included debt's share of the total starting balance."""
    included = [d for d in plan.debts if d.included]
    total = sum(d.original_balance for d in included)
    return [
        DebtShare(
            debt_id=d.id,
            name=d.name,
            balance=d.original_balance,
            share=round(d.original_balance / total, 4) if total > 0 else 0.0,
        )
        for d in included
    ]


def schedule_frame(plan: PlanResult) -> pd.DataFrame:
    """Flatten a plan's months into one row per debt per month."""
    names = {d.id: d.name for d in plan.debts}
    records = [
        {
            "month": month.month_index,
            "date": month.date.isoformat(),
            "debt_id": p.debt_id,
            "debt": names.get(p.debt_id, p.debt_id),
            "starting_balance": p.starting_balance,
            "interest": p.interest_accrued,
            "min_applied": p.min_applied,
            "extra_applied": p.extra_applied,
            "total_paid": p.total_paid,
            "ending_balance": p.ending_balance,
            "closed": p.closed_this_month,
        }
        for month in plan.months
        for p in month.payments
    ]
    return pd.DataFrame.from_records(records, columns=SCHEDULE_COLUMNS)


def summary_frame(plan: PlanResult) -> pd.DataFrame:
    return pd.DataFrame.from_records([row.model_dump() for row in printable_rows(plan)])


def schedule_csv(plan: PlanResult) -> bytes:
    return schedule_frame(plan).to_csv(index=False).encode("utf-8")


def schedule_xlsx(plan: PlanResult) -> bytes:
    """Workbook with a "Summary" sheet (one row per debt) and a "Schedule" sheet."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        summary_frame(plan).to_excel(writer, sheet_name="Summary", index=False)
        schedule_frame(plan).to_excel(writer, sheet_name="Schedule", index=False)
    return buf.getvalue()


def build_insights(plan: PlanResult, debts: Sequence[Debt]) -> PlanInsights:
    """Every derived view for one plan, plus its risk alerts."""
    return PlanInsights(
        remaining=remaining_by_month(plan),
        remaining_by_category=remaining_by_category(plan, debts),
        payoff_events=payoff_events(plan),
        milestones=milestones(plan),
        calendar=calendar(plan),
        printable=printable_rows(plan),
        balance_shares=balance_shares(plan),
        alerts=generate_alerts(plan, debts),
    )
