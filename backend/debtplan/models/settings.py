from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from debtplan.models.debt import DebtInput, parse_number


class StrategyKind(str, Enum):
    """Which surplus-ordering strategy to run."""
    snowball = "snowball"    # smallest balance first
    avalanche = "avalanche"  # highest APR first


class ExportFormat(str, Enum):
    csv = "csv"
    xlsx = "xlsx"


class OneOffPayment(BaseModel):
    """Ad-hoc extra payment scheduled for a specific plan month (1-based)."""
    month_index: int = Field(ge=1, validation_alias=AliasChoices("month_index", "monthIndex"))
    amount: float = Field(gt=0)
    note: Optional[str] = None


class PlanSettings(BaseModel):
    """User-controlled plan parameters; persisted alongside the debts."""
    strategy: StrategyKind = StrategyKind.snowball
    extra_monthly: float = Field(
        default=0.0, validation_alias=AliasChoices("extra_monthly", "extraMonthly"),
    )
    one_time_extra: float = Field(
        default=0.0, validation_alias=AliasChoices("one_time_extra", "oneTimeExtra"),
    )
    start_date: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("start_date", "startDate"),
    )
    max_months: Optional[int] = Field(
        default=None, ge=1, validation_alias=AliasChoices("max_months", "maxMonths"),
    )
    roll_over_minimums: bool = Field(
        default=True, validation_alias=AliasChoices("roll_over_minimums", "rollOverMinimums"),
    )
    one_offs: list[OneOffPayment] = Field(
        default=[], validation_alias=AliasChoices("one_offs", "oneOffs"),
    )

    @field_validator("extra_monthly", "one_time_extra", mode="before")
    @classmethod
    def _lenient_amount(cls, value: Any) -> float:
        number = parse_number(value)
        return max(number, 0.0) if number is not None else 0.0


class PlanRequest(PlanSettings):
    """Primary entry point input: debts plus settings."""
    debts: list[DebtInput] = []

    def plan_settings(self) -> PlanSettings:
        return PlanSettings(**self.model_dump(exclude={"debts"}))


class CompareRequest(BaseModel):
    """Two independent setting sets run against the same debts."""
    debts: list[DebtInput]
    a: PlanSettings
    b: PlanSettings


class WhatIfRequest(BaseModel):
    """Configured plan versus overridden monthly extra and/or lump sum."""
    debts: list[DebtInput]
    settings: PlanSettings = PlanSettings()
    monthly_extra: Optional[float] = None
    lump_sum: Optional[float] = None

    @field_validator("monthly_extra", "lump_sum", mode="before")
    @classmethod
    def _lenient_override(cls, value: Any) -> Optional[float]:
        return parse_number(value)
