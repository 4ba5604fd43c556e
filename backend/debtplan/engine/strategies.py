"""Named surplus-ordering strategies.

Each strategy is a value carrying its own sort key. New strategies are
registered in ``_STRATEGIES``.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from debtplan.models.settings import StrategyKind


class Orderable(Protocol):
    balance: float
    apr: float


T = TypeVar("T", bound=Orderable)


@dataclass(frozen=True)
class Strategy:
    """A total order over open debts used for surplus allocation."""
    kind: StrategyKind
    sort_key: Callable[[Orderable], tuple[float, ...]]
    description: str = ""

    def order(self, debts: Iterable[T]) -> list[T]:
        """Return debts in payoff priority. Full ties keep input order."""
        return sorted(debts, key=self.sort_key)


SNOWBALL = Strategy(
    kind=StrategyKind.snowball,
    sort_key=lambda d: (d.balance, -d.apr),
    description="Smallest balance first; higher APR breaks ties.",
)

AVALANCHE = Strategy(
    kind=StrategyKind.avalanche,
    sort_key=lambda d: (-d.apr, d.balance),
    description="Highest APR first; smaller balance breaks ties.",
)

_STRATEGIES: dict[StrategyKind, Strategy] = {
    StrategyKind.snowball: SNOWBALL,
    StrategyKind.avalanche: AVALANCHE,
}


def get_strategy(kind: StrategyKind | str) -> Strategy:
    """Return the strategy registered for ``kind``.

    Raises ValueError for an unknown name.
    """
    return _STRATEGIES[StrategyKind(kind)]


def list_strategy_names() -> list[str]:
    """Return all registered strategy names."""
    return [kind.value for kind in _STRATEGIES]
