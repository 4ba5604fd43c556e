"""Plan orchestration service.

Routes and scripts call these functions rather than the engine directly.
Each call builds EngineLimits from application settings.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from debtplan.config import settings
from debtplan.engine.comparator import compare, compare_strategies
from debtplan.engine.limits import EngineLimits
from debtplan.engine.normalizer import has_active_debts, normalize_debts
from debtplan.engine.plan import RawDebt, compute_plan
from debtplan.models.plan import PlanResult
from debtplan.models.scenario import ScenarioComparison, StrategyComparison
from debtplan.models.settings import PlanSettings, StrategyKind

logger = logging.getLogger(__name__)


class NoActiveDebtsError(ValueError):
    """Raised when an operation needs at least one included, open debt."""

    def __init__(self, message: str = "No active debts found"):
        super().__init__(message)


def engine_limits() -> EngineLimits:
    """EngineLimits built from application settings."""
    return EngineLimits(
        closure_epsilon=settings.CLOSURE_EPSILON,
        max_months=settings.MAX_MONTHS,
    )


def _require_active(debts: Sequence[RawDebt], limits: EngineLimits) -> None:
    if not has_active_debts(normalize_debts(debts), limits.closure_epsilon):
        raise NoActiveDebtsError()


def run_plan(debts: Sequence[RawDebt], plan_settings: PlanSettings) -> PlanResult:
    """Compute one plan with configured limits."""
    result = compute_plan(debts, plan_settings, engine_limits())
    logger.info(
        "Plan computed: strategy=%s, months=%d, status=%s, interest=%.2f",
        result.strategy.value, result.totals.months_to_debt_free,
        result.status.value, result.totals.interest,
    )
    return result


def run_comparison(
    debts: Sequence[RawDebt],
    settings_a: PlanSettings,
    settings_b: PlanSettings,
) -> ScenarioComparison:
    comparison = compare(debts, settings_a, settings_b, engine_limits())
    logger.info(
        "Scenario comparison: delta_months=%d, delta_interest=%.2f",
        comparison.delta_months, comparison.delta_interest,
    )
    return comparison


def run_strategy_comparison(
    debts: Sequence[RawDebt],
    plan_settings: PlanSettings,
) -> StrategyComparison:
    comparison = compare_strategies(debts, plan_settings, engine_limits())
    logger.info("Strategy comparison: recommended=%s", comparison.recommended.value)
    return comparison


def run_what_if(
    debts: Sequence[RawDebt],
    plan_settings: PlanSettings,
    monthly_extra: float | None = None,
    lump_sum: float | None = None,
) -> ScenarioComparison:
    """Configured plan (a) against the same plan with overridden amounts (b).

    ``monthly_extra`` replaces the recurring extra; ``lump_sum`` replaces the
    plan-start one-time payment. Omitted overrides keep the configured value.
    """
    limits = engine_limits()
    _require_active(debts, limits)

    update: dict[str, float] = {}
    if monthly_extra is not None:
        update["extra_monthly"] = max(monthly_extra, 0.0)
    if lump_sum is not None:
        update["one_time_extra"] = max(lump_sum, 0.0)
    scenario = plan_settings.model_copy(update=update)

    comparison = compare(debts, plan_settings, scenario, limits)
    logger.info(
        "What-if: monthly_extra=%s, lump_sum=%s, months saved=%d",
        monthly_extra, lump_sum, -comparison.delta_months,
    )
    return comparison


def run_projection_comparison(
    debts: Sequence[RawDebt],
    plan_settings: PlanSettings,
) -> ScenarioComparison:
    """Snowball (a) against avalanche (b) with otherwise identical settings."""
    limits = engine_limits()
    _require_active(debts, limits)
    snowball = plan_settings.model_copy(update={"strategy": StrategyKind.snowball})
    avalanche = plan_settings.model_copy(update={"strategy": StrategyKind.avalanche})
    return compare(debts, snowball, avalanche, limits)
