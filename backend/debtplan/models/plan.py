from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from debtplan.models.settings import StrategyKind


class PlanStatus(str, Enum):
    """Terminal state of a projection run."""
    converged = "converged"  # every included balance reached zero
    capped = "capped"        # month cap hit with balances outstanding


class PaymentRecord(BaseModel):
    """What happened to one debt in one month."""
    debt_id: str
    starting_balance: float
    interest_accrued: float
    min_applied: float
    extra_applied: float
    total_paid: float
    principal: float
    ending_balance: float
    closed_this_month: bool


class MonthTotals(BaseModel):
    interest: float
    principal: float
    outflow: float


class MonthSnapshot(BaseModel):
    """Projected state for a single plan month."""
    month_index: int
    date: date
    payments: list[PaymentRecord]
    totals: MonthTotals
    one_off_applied: float = 0.0


class DebtSummary(BaseModel):
    """Per-debt outcome of a plan, including excluded debts for context."""
    id: str
    name: str
    apr: float
    original_balance: float
    min_payment: float
    included: bool
    payoff_month: Optional[int] = None
    payoff_date: Optional[date] = None
    total_interest: float = 0.0
    total_paid: float = 0.0
    remaining_balance: float = 0.0


class PlanTotals(BaseModel):
    interest: float
    principal: float
    outflow_monthly: float
    months_to_debt_free: int
    one_time_applied: float
    total_paid: float


class PlanResult(BaseModel):
    """Complete payoff schedule for one strategy and one set of settings."""
    strategy: StrategyKind
    status: PlanStatus
    start_date: date
    debt_free_date: Optional[date] = None
    debts: list[DebtSummary]
    months: list[MonthSnapshot]
    totals: PlanTotals
