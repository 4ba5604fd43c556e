"""Tests for strategy ordering and the strategy registry."""
import pytest

from debtplan.engine.position import DebtPosition
from debtplan.engine.strategies import AVALANCHE, SNOWBALL, get_strategy, list_strategy_names
from debtplan.models.settings import StrategyKind


def _pos(debt_id, balance, apr, min_payment=10.0):
    return DebtPosition(debt_id=debt_id, balance=balance, apr=apr, min_payment=min_payment)


POSITIONS = [
    _pos("big-high", 5000, 24),
    _pos("small-low", 300, 5),
    _pos("mid-mid", 1500, 15),
    _pos("small-high", 300, 22),
    _pos("mid-mid-twin", 1500, 15),
]


def test_snowball_non_decreasing_balance():
    ordered = SNOWBALL.order(POSITIONS)
    balances = [p.balance for p in ordered]
    assert balances == sorted(balances)


def test_snowball_breaks_balance_ties_by_higher_apr():
    ordered = SNOWBALL.order(POSITIONS)
    assert [p.debt_id for p in ordered[:2]] == ["small-high", "small-low"]


def test_avalanche_non_increasing_apr():
    ordered = AVALANCHE.order(POSITIONS)
    aprs = [p.apr for p in ordered]
    assert aprs == sorted(aprs, reverse=True)


def test_full_ties_keep_input_order():
    for strategy in (SNOWBALL, AVALANCHE):
        ids = [p.debt_id for p in strategy.order(POSITIONS)]
        assert ids.index("mid-mid") < ids.index("mid-mid-twin")


def test_order_is_deterministic():
    for strategy in (SNOWBALL, AVALANCHE):
        first = [p.debt_id for p in strategy.order(POSITIONS)]
        second = [p.debt_id for p in strategy.order(list(POSITIONS))]
        assert first == second


def test_registry_lookup():
    assert get_strategy("snowball") is SNOWBALL
    assert get_strategy(StrategyKind.avalanche) is AVALANCHE
    assert list_strategy_names() == ["snowball", "avalanche"]


def test_unknown_strategy_raises():
    with pytest.raises(ValueError):
        get_strategy("highest-balance")
