from typing import Optional

from pydantic import BaseModel

from debtplan.models.debt import DebtInput
from debtplan.models.settings import PlanSettings, StrategyKind


class ProfileSummary(BaseModel):
    profile_id: str
    name: str
    debt_count: int
    total_balance: float
    strategy: Optional[StrategyKind] = None


class DebtProfile(BaseModel):
    """Persisted source of truth: raw debts and settings, never a plan."""
    profile_id: str
    name: str
    debts: list[DebtInput] = []
    settings: PlanSettings = PlanSettings()
