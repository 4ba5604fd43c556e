"""Side-by-side plan runs.

Each run normalizes its own copy of the debts and shares no state with the
other runs.
"""
from __future__ import annotations

from collections.abc import Sequence

from debtplan.engine.aggregator import round_cents
from debtplan.engine.limits import EngineLimits
from debtplan.engine.plan import RawDebt, compute_plan
from debtplan.models.plan import PlanResult
from debtplan.models.scenario import ScenarioComparison, StrategyComparison
from debtplan.models.settings import PlanSettings, StrategyKind


def minimum_only(settings: PlanSettings) -> PlanSettings:
    """Baseline settings: pay each open debt its minimum and nothing else."""
    return settings.model_copy(update={
        "extra_monthly": 0.0,
        "one_time_extra": 0.0,
        "one_offs": [],
        "roll_over_minimums": False,
    })


def with_strategy(settings: PlanSettings, kind: StrategyKind) -> PlanSettings:
    return settings.model_copy(update={"strategy": kind})


def _deltas(a: PlanResult, b: PlanResult) -> tuple[int, float]:
    months = b.totals.months_to_debt_free - a.totals.months_to_debt_free
    interest = round_cents(b.totals.interest - a.totals.interest)
    return months, interest


def compare(
    debts: Sequence[RawDebt],
    settings_a: PlanSettings,
    settings_b: PlanSettings,
    limits: EngineLimits | None = None,
) -> ScenarioComparison:
    """Run two independent plans and report b minus a."""
    a = compute_plan(debts, settings_a, limits)
    b = compute_plan(debts, settings_b, limits)
    delta_months, delta_interest = _deltas(a, b)
    return ScenarioComparison(a=a, b=b, delta_months=delta_months, delta_interest=delta_interest)


def compare_strategies(
    debts: Sequence[RawDebt],
    settings: PlanSettings,
    limits: EngineLimits | None = None,
) -> StrategyComparison:
    """Snowball vs avalanche vs minimum-only for the same debts and amounts.

    The recommendation is the strategy with less total interest; snowball
    wins exact ties since it closes accounts sooner.
    """
    snowball = compute_plan(debts, with_strategy(settings, StrategyKind.snowball), limits)
    avalanche = compute_plan(debts, with_strategy(settings, StrategyKind.avalanche), limits)
    baseline = compute_plan(debts, minimum_only(settings), limits)

    months_saved: dict[str, int] = {}
    interest_saved: dict[str, float] = {}
    for plan in (snowball, avalanche):
        delta_months, delta_interest = _deltas(plan, baseline)
        months_saved[plan.strategy.value] = delta_months
        interest_saved[plan.strategy.value] = delta_interest

    recommended = StrategyKind.snowball
    if avalanche.totals.interest < snowball.totals.interest:
        recommended = StrategyKind.avalanche

    return StrategyComparison(
        snowball=snowball,
        avalanche=avalanche,
        minimum_only=baseline,
        recommended=recommended,
        months_saved=months_saved,
        interest_saved=interest_saved,
    )
