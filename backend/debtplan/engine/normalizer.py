"""Turn raw debt records into engine-ready Debt values.

Nothing here raises on bad numbers. Junk coerces to 0, negatives clamp to 0
and an APR stored as percent-times-100 (e.g. 1999 for 19.99 %) is scaled back down.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from debtplan.models.debt import Debt, DebtInput, parse_number

logger = logging.getLogger(__name__)

_MAX_APR = 100.0


def _to_amount(value: Any) -> float:
    number = parse_number(value)
    if number is None or number < 0:
        return 0.0
    return number


def normalize_apr(value: Any) -> float:
    """Clamp to >= 0 and undo the x100 encoding for implausible rates."""
    apr = _to_amount(value)
    if apr > _MAX_APR:
        apr = apr / 100.0
    return apr


def _clamp_due_day(value: Any) -> int | None:
    day = parse_number(value)
    if day is None or day < 1:
        return None
    return min(int(day), 28)


def normalize_debt(raw: Debt | DebtInput | Mapping[str, Any], position: int = 0) -> Debt:
    """Normalize one raw debt. ``position`` feeds the fallback id."""
    if isinstance(raw, Debt):
        raw = DebtInput.model_validate(raw.model_dump())
    elif not isinstance(raw, DebtInput):
        raw = DebtInput.model_validate(dict(raw))

    apr = normalize_apr(raw.apr)
    if raw.apr is not None and raw.apr > _MAX_APR:
        logger.debug("Rescaled APR %s -> %s for debt %r", raw.apr, apr, raw.name)

    return Debt(
        id=raw.id or f"debt-{position + 1}",
        name=raw.name.strip() or f"Debt {position + 1}",
        balance=_to_amount(raw.balance),
        apr=apr,
        min_payment=_to_amount(raw.min_payment),
        included=raw.included,
        due_day=_clamp_due_day(raw.due_day),
        category=raw.category or None,
    )


def normalize_debts(raw_debts: Iterable[Debt | DebtInput | Mapping[str, Any]]) -> list[Debt]:
    """Normalize a batch of raw debts, preserving order and excluded debts.

    Ids must be unique within a run; a repeated id gets a positional suffix,
    bumped until it matches no id already seen.
    """
    debts: list[Debt] = []
    seen: set[str] = set()
    for i, raw in enumerate(raw_debts):
        debt = normalize_debt(raw, i)
        if debt.id in seen:
            suffix = i + 1
            while f"{debt.id}-{suffix}" in seen:
                suffix += 1
            debt = debt.model_copy(update={"id": f"{debt.id}-{suffix}"})
        seen.add(debt.id)
        debts.append(debt)
    return debts


def has_active_debts(debts: Iterable[Debt], closure_epsilon: float) -> bool:
    """True when at least one included debt has a balance above the epsilon."""
    return any(d.included and d.balance > closure_epsilon for d in debts)
