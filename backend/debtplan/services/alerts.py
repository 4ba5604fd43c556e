"""Health-check alerts for a debt plan."""
from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from debtplan.models.debt import Debt
from debtplan.models.insights import AlertItem, AlertLevel
from debtplan.models.plan import PlanResult, PlanStatus

HIGH_APR = 25.0
LOW_MIN_MARGIN = 1.1
CLUSTER_SIZE = 3
DRIFT_RATIO = 0.8
LARGE_BALANCE = 50_000.0


def generate_alerts(plan: PlanResult, debts: Sequence[Debt]) -> list[AlertItem]:
    """Alerts for the included debts of ``plan``.

    Checks, in order: due-day clusters, high APR, minimums that barely cover
    interest, slowing principal progress over the final three months (the
    closing month of a converged plan excluded), a large total balance and a
    plan that never converges.
    """
    active = [d for d in debts if d.included and d.balance > 0]
    out: list[AlertItem] = []

    counts = Counter(d.due_day for d in active if d.due_day)
    for day, count in sorted(counts.items()):
        if count >= CLUSTER_SIZE:
            out.append(AlertItem(
                id=f"cluster-{day}",
                level=AlertLevel.info,
                message=f"{count} payments due around day {day} of the month",
            ))

    for d in active:
        if d.apr >= HIGH_APR:
            out.append(AlertItem(
                id=f"apr-{d.id}",
                level=AlertLevel.risk,
                message=f"High APR on {d.name} ({d.apr:.1f}%) - prioritize this debt",
            ))

    for d in active:
        monthly_interest = d.balance * d.apr / 100 / 12
        if d.apr > 0 and d.min_payment < monthly_interest * LOW_MIN_MARGIN:
            out.append(AlertItem(
                id=f"lowmin-{d.id}",
                level=AlertLevel.warn,
                message=f"{d.name} minimum payment barely covers interest - consider increasing payments",
            ))

    # a converged plan closes on a partial payment; leave that month out
    window = plan.months[:-1] if plan.status == PlanStatus.converged else plan.months
    if len(window) >= 3:
        first, _, last = (m.totals.principal for m in window[-3:])
        if last < first * DRIFT_RATIO:
            out.append(AlertItem(
                id="drift",
                level=AlertLevel.warn,
                message="Progress appears to be slowing - review your extra payments",
            ))

    total_balance = sum(d.balance for d in active)
    if total_balance > LARGE_BALANCE:
        out.append(AlertItem(
            id="largebalance",
            level=AlertLevel.info,
            message=f"Total debt is ${total_balance:,.0f} - consider debt consolidation options",
        ))

    if plan.status == PlanStatus.capped:
        out.append(AlertItem(
            id="capped",
            level=AlertLevel.risk,
            message=(
                f"Debts are not paid off within {plan.totals.months_to_debt_free} months "
                "- payments do not outpace interest"
            ),
        ))

    return out
