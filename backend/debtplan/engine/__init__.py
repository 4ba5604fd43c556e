"""Debt payoff projection engine."""
from debtplan.engine.limits import CLOSURE_EPSILON, DEFAULT_MAX_MONTHS, EngineLimits
from debtplan.engine.normalizer import normalize_debts, has_active_debts
from debtplan.engine.strategies import Strategy, SNOWBALL, AVALANCHE, get_strategy, list_strategy_names
from debtplan.engine.lump_sum import apply_lump_sum
from debtplan.engine.projection import run_projection, monthly_budget
from debtplan.engine.aggregator import aggregate_totals, round_cents
from debtplan.engine.plan import compute_plan, compute_debt_plan
from debtplan.engine.comparator import compare, compare_strategies, minimum_only

__all__ = [
    "CLOSURE_EPSILON",
    "DEFAULT_MAX_MONTHS",
    "EngineLimits",
    "normalize_debts",
    "has_active_debts",
    "Strategy",
    "SNOWBALL",
    "AVALANCHE",
    "get_strategy",
    "list_strategy_names",
    "apply_lump_sum",
    "run_projection",
    "monthly_budget",
    "aggregate_totals",
    "round_cents",
    "compute_plan",
    "compute_debt_plan",
    "compare",
    "compare_strategies",
    "minimum_only",
]
