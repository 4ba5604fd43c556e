import math
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def parse_number(value: Any) -> Optional[float]:
    """Best-effort numeric parse for user-entered values.

    Returns None for anything that is not a finite number ("", "abc", NaN,
    inf, None). Strings may carry currency symbols, thousands separators and a
    trailing percent sign.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "").replace("$", "").rstrip("%").strip()
        if not cleaned:
            return None
        value = cleaned
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class DebtInput(BaseModel):
    """Raw debt as typed into a form, stored in a profile, or read from a sheet.

    Numeric fields are lenient: junk becomes None and is settled by the
    normalizer, so half-typed form values never fail validation.
    """
    id: Optional[str] = None
    name: str = ""
    balance: Optional[float] = None
    apr: Optional[float] = None
    min_payment: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("min_payment", "minPayment"),
    )
    included: bool = Field(default=True, validation_alias=AliasChoices("included", "include"))
    due_day: Optional[int] = Field(default=None, validation_alias=AliasChoices("due_day", "dueDay"))
    category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("balance", "apr", "min_payment", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> Optional[float]:
        return parse_number(value)

    @field_validator("due_day", mode="before")
    @classmethod
    def _lenient_day(cls, value: Any) -> Optional[int]:
        number = parse_number(value)
        return int(number) if number is not None else None

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class Debt(BaseModel):
    """Normalized debt, the engine's simulation unit."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    balance: float
    apr: float
    min_payment: float
    included: bool = True
    due_day: Optional[int] = None
    category: Optional[str] = None


class DebtSheet(BaseModel):
    """Debts parsed from an uploaded spreadsheet."""
    name: str
    debt_count: int
    total_balance: float
    debts: list[Debt] = []
