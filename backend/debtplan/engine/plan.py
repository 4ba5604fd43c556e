"""Primary entry point: raw debts + settings -> PlanResult.

normalize -> lump sum -> projection loop -> aggregate. Every call works on
its own normalized copies, so the same inputs always give the same result.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from debtplan.engine.aggregator import build_plan_result
from debtplan.engine.limits import EngineLimits
from debtplan.engine.lump_sum import apply_lump_sum
from debtplan.engine.normalizer import has_active_debts, normalize_debts
from debtplan.engine.projection import ProjectionRun, monthly_budget, run_projection
from debtplan.engine.strategies import get_strategy
from debtplan.models.debt import Debt, DebtInput
from debtplan.models.plan import PlanResult, PlanStatus
from debtplan.models.settings import OneOffPayment, PlanRequest, PlanSettings

logger = logging.getLogger(__name__)

RawDebt = Debt | DebtInput | Mapping[str, Any]


def plan_start(settings: PlanSettings, today: date | None = None) -> date:
    """First day of the month the plan starts in."""
    start = settings.start_date or today or date.today()
    return start.replace(day=1)


def one_offs_by_month(one_offs: Iterable[OneOffPayment]) -> dict[int, float]:
    """Sum scheduled one-off payments per plan month."""
    by_month: dict[int, float] = {}
    for item in one_offs:
        by_month[item.month_index] = by_month.get(item.month_index, 0.0) + item.amount
    return by_month


def compute_plan(
    debts: Iterable[RawDebt],
    settings: PlanSettings,
    limits: EngineLimits | None = None,
) -> PlanResult:
    """Run one complete projection for ``debts`` under ``settings``.

    An empty or fully excluded debt set yields a converged plan with zero
    months rather than an error.
    """
    limits = (limits or EngineLimits()).with_max_months(settings.max_months)
    strategy = get_strategy(settings.strategy)
    start = plan_start(settings)
    eps = limits.closure_epsilon

    normalized = normalize_debts(debts)

    if not has_active_debts(normalized, eps):
        run = ProjectionRun(months=[], status=PlanStatus.converged, budget=0.0)
        return build_plan_result(normalized, run, strategy, start, limits)

    budget = monthly_budget(normalized, settings.extra_monthly, eps)
    working, lump_applied = apply_lump_sum(normalized, settings.one_time_extra, strategy, eps)

    run = run_projection(
        working,
        strategy,
        budget,
        start,
        limits,
        extra_monthly=settings.extra_monthly,
        roll_over_minimums=settings.roll_over_minimums,
        one_offs=one_offs_by_month(settings.one_offs),
    )
    logger.debug(
        "Plan %s: %d months, status=%s, budget=%.2f",
        strategy.kind.value, len(run.months), run.status.value, budget,
    )
    return build_plan_result(normalized, run, strategy, start, limits, lump_applied)


def compute_debt_plan(request: PlanRequest, limits: EngineLimits | None = None) -> PlanResult:
    """Compute the plan described by a single request payload."""
    return compute_plan(request.debts, request.plan_settings(), limits)
