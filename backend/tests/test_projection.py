"""Tests for the projection loop and the aggregated PlanResult."""
from datetime import date

import pytest

from debtplan.engine.aggregator import round_cents
from debtplan.engine.plan import compute_debt_plan, compute_plan, plan_start
from debtplan.models.plan import PlanStatus
from debtplan.models.settings import OneOffPayment, PlanRequest, PlanSettings, StrategyKind

START = date(2025, 1, 1)


def _settings(**overrides) -> PlanSettings:
    defaults = dict(strategy=StrategyKind.snowball, extra_monthly=100, start_date=START)
    defaults.update(overrides)
    return PlanSettings(**defaults)


def _payment(month, debt_id):
    return next(p for p in month.payments if p.debt_id == debt_id)


class TestConcreteScenario:
    def test_payoff_order(self, abc_debts):
        plan = compute_plan(abc_debts, _settings())
        assert [d.id for d in plan.debts] == ["A", "C", "B"]
        months = [d.payoff_month for d in plan.debts]
        assert months == sorted(months)

    def test_first_month_record_for_a(self, abc_debts):
        plan = compute_plan(abc_debts, _settings())
        a = _payment(plan.months[0], "A")
        assert a.starting_balance == 500
        assert a.interest_accrued == 0
        assert a.min_applied == 25
        assert a.extra_applied == 100
        assert a.total_paid == 125
        assert a.ending_balance == 375
        assert a.closed_this_month is False

    def test_first_month_interest_on_others(self, abc_debts):
        plan = compute_plan(abc_debts, _settings())
        assert _payment(plan.months[0], "B").interest_accrued == pytest.approx(33.33)
        assert _payment(plan.months[0], "C").interest_accrued == pytest.approx(8.33)

    def test_a_closes_in_month_four(self, abc_debts):
        plan = compute_plan(abc_debts, _settings())
        summary = plan.debts[0]
        assert summary.payoff_month == 4
        assert summary.payoff_date == date(2025, 4, 1)
        assert _payment(plan.months[3], "A").closed_this_month is True
        assert all(p.debt_id != "A" for p in plan.months[4].payments)


class TestPlanShape:
    def test_budget_locked_and_spent(self, abc_debts):
        plan = compute_plan(abc_debts, _settings())
        assert plan.totals.outflow_monthly == 225
        for month in plan.months[:-1]:
            assert month.totals.outflow == pytest.approx(225, abs=0.02)
        assert plan.months[-1].totals.outflow <= 225

    def test_minimums_not_rolled_over(self, abc_debts):
        plan = compute_plan(abc_debts, _settings(roll_over_minimums=False))
        assert plan.months[3].totals.outflow == pytest.approx(225, abs=0.02)
        assert plan.months[4].totals.outflow == pytest.approx(200, abs=0.02)

    def test_month_dates(self, abc_debts):
        plan = compute_plan(abc_debts, _settings(start_date=date(2025, 11, 20)))
        assert plan.start_date == date(2025, 11, 1)
        assert plan.months[0].date == date(2025, 11, 1)
        assert plan.months[2].date == date(2026, 1, 1)
        assert plan.debt_free_date == plan.months[-1].date

    def test_due_day_moves_payoff_date(self, abc_debts):
        abc_debts[0]["due_day"] = 15
        plan = compute_plan(abc_debts, _settings())
        assert plan.debts[0].payoff_date == date(2025, 4, 15)

    def test_each_debt_closes_once(self, abc_debts):
        plan = compute_plan(abc_debts, _settings())
        closes = [p.debt_id for m in plan.months for p in m.payments if p.closed_this_month]
        assert sorted(closes) == ["A", "B", "C"]

    def test_record_identities(self, abc_debts):
        plan = compute_plan(abc_debts, _settings(strategy=StrategyKind.avalanche))
        for month in plan.months:
            for p in month.payments:
                assert p.total_paid == pytest.approx(p.min_applied + p.extra_applied, abs=0.011)
                assert p.principal == pytest.approx(p.total_paid - p.interest_accrued, abs=0.011)
                assert p.ending_balance >= 0

    def test_excluded_debt_reported_last(self, abc_debts):
        abc_debts[0]["included"] = False
        plan = compute_plan(abc_debts, _settings())
        last = plan.debts[-1]
        assert last.id == "A"
        assert last.included is False
        assert last.payoff_month is None
        assert last.remaining_balance == 500
        assert all(p.debt_id != "A" for m in plan.months for p in m.payments)
        assert plan.totals.outflow_monthly == 200

    def test_compute_debt_plan_matches(self, abc_debts):
        request = PlanRequest(debts=abc_debts, extra_monthly=100, start_date=START)
        assert compute_debt_plan(request) == compute_plan(abc_debts, _settings())


class TestLumpSumAndOneOffs:
    def test_lump_closed_debt_reports_month_zero(self, abc_debts):
        plan = compute_plan(abc_debts, _settings(one_time_extra=600))
        a = next(d for d in plan.debts if d.id == "A")
        assert a.payoff_month == 0
        assert a.payoff_date == START
        assert a.total_paid == 500
        assert plan.debts[0].id == "A"
        assert all(p.debt_id != "A" for m in plan.months for p in m.payments)

    def test_lump_totals(self, abc_debts):
        plan = compute_plan(abc_debts, _settings(one_time_extra=600))
        assert plan.totals.one_time_applied == 600
        outflow = sum(m.totals.outflow for m in plan.months)
        assert plan.totals.total_paid == pytest.approx(outflow + 600, abs=0.1)
        assert _payment(plan.months[0], "C").starting_balance == 900

    def test_lump_shortens_plan(self, abc_debts):
        base = compute_plan(abc_debts, _settings())
        lump = compute_plan(abc_debts, _settings(one_time_extra=600))
        assert lump.totals.months_to_debt_free < base.totals.months_to_debt_free
        assert lump.totals.interest < base.totals.interest

    def test_lump_clearing_everything(self, abc_debts):
        plan = compute_plan(abc_debts, _settings(one_time_extra=10_000))
        assert plan.months == []
        assert plan.status == PlanStatus.converged
        assert plan.totals.one_time_applied == 3500
        assert all(d.payoff_month == 0 for d in plan.debts)

    def test_one_off_added_to_month_budget(self, abc_debts):
        one_offs = [OneOffPayment(month_index=2, amount=50, note="bonus")]
        plan = compute_plan(abc_debts, _settings(one_offs=one_offs))
        assert plan.months[1].one_off_applied == 50
        assert plan.months[1].totals.outflow == pytest.approx(275, abs=0.02)
        assert plan.months[0].one_off_applied == 0


class TestDegenerateInputs:
    def test_empty_debts(self):
        plan = compute_plan([], _settings())
        assert plan.status == PlanStatus.converged
        assert plan.months == []
        assert plan.debts == []
        assert plan.totals.months_to_debt_free == 0
        assert plan.totals.outflow_monthly == 0
        assert plan.debt_free_date == START

    def test_all_excluded(self, abc_debts):
        for d in abc_debts:
            d["included"] = False
        plan = compute_plan(abc_debts, _settings())
        assert plan.months == []
        assert len(plan.debts) == 3

    def test_zero_balance_debt_closed_at_start(self):
        plan = compute_plan(
            [{"id": "z", "name": "Paid", "balance": 0, "apr": 10, "min_payment": 20},
             {"id": "y", "name": "Open", "balance": 100, "apr": 0, "min_payment": 50}],
            _settings(extra_monthly=0),
        )
        z = next(d for d in plan.debts if d.id == "z")
        assert z.payoff_month == 0
        assert plan.totals.months_to_debt_free == 2
        assert plan.totals.outflow_monthly == 50


class TestCapped:
    def test_negative_amortization_caps(self):
        debts = [{"id": "x", "name": "Payday", "balance": 10_000, "apr": 24, "min_payment": 50}]
        plan = compute_plan(debts, _settings(extra_monthly=0, max_months=36))
        assert plan.status == PlanStatus.capped
        assert len(plan.months) == 36
        assert plan.totals.months_to_debt_free == 36
        assert plan.debt_free_date is None
        assert plan.debts[0].payoff_month is None
        assert plan.debts[0].remaining_balance > 10_000

    def test_default_cap(self):
        debts = [{"id": "x", "name": "Payday", "balance": 10_000, "apr": 24, "min_payment": 50}]
        plan = compute_plan(debts, _settings(extra_monthly=0))
        assert plan.status == PlanStatus.capped
        assert plan.totals.months_to_debt_free == 600


def test_plan_start_defaults_to_current_month():
    assert plan_start(PlanSettings(), today=date(2026, 3, 17)) == date(2026, 3, 1)


def test_round_cents_half_up():
    assert round_cents(0.125) == 0.13
    assert round_cents(2.675) == 2.68
    assert round_cents(-0.001) == 0.0
