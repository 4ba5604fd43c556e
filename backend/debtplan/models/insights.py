"""Pydantic models for read-only views derived from a PlanResult."""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RemainingPoint(BaseModel):
    month_index: int
    date: date
    remaining: float


class CategoryRemainingPoint(BaseModel):
    """Balance left after one month, split by debt category."""
    month_index: int
    date: date
    by_category: dict[str, float]


class PayoffEvent(BaseModel):
    debt_id: str
    debt_name: str
    month_index: int
    date: date
    remaining: float


class Milestone(BaseModel):
    label: str
    month_index: int
    date: date
    remaining: float


class CalendarPayoff(BaseModel):
    debt_id: str
    name: str


class CalendarMonth(BaseModel):
    month_index: int
    date: date
    total_outflow: float
    total_interest: float
    total_principal: float
    one_off_applied: float
    payoffs: list[CalendarPayoff]


class PrintableDebtRow(BaseModel):
    creditor: str
    apr: float
    min_payment: float
    starting_balance: float
    payoff_date: Optional[date] = None
    total_interest: float
    total_paid: float
    included: bool


class DebtShare(BaseModel):
    debt_id: str
    name: str
    balance: float
    share: float


class AlertLevel(str, Enum):
    info = "info"
    warn = "warn"
    risk = "risk"


class AlertItem(BaseModel):
    id: str
    level: AlertLevel
    message: str


class PlanInsights(BaseModel):
    remaining: list[RemainingPoint]
    remaining_by_category: list[CategoryRemainingPoint]
    payoff_events: list[PayoffEvent]
    milestones: list[Milestone]
    calendar: list[CalendarMonth]
    printable: list[PrintableDebtRow]
    balance_shares: list[DebtShare]
    alerts: list[AlertItem]
