"""Pydantic response models for scenario comparisons."""
from pydantic import BaseModel

from debtplan.models.plan import PlanResult
from debtplan.models.settings import StrategyKind


class ScenarioComparison(BaseModel):
    """Two independent plan runs and their deltas (b minus a)."""
    a: PlanResult
    b: PlanResult
    delta_months: int
    delta_interest: float


class StrategyComparison(BaseModel):
    """Snowball, avalanche and minimum-only runs over the same debts."""
    snowball: PlanResult
    avalanche: PlanResult
    minimum_only: PlanResult
    recommended: StrategyKind
    months_saved: dict[str, int]
    interest_saved: dict[str, float]
