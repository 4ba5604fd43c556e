"""Tests for the /plans endpoints."""
import io

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from debtplan.main import app

client = TestClient(app)

DEBTS = [
    {"id": "A", "name": "Store Card", "balance": 500, "apr": 0, "minPayment": 25},
    {"id": "B", "name": "Visa", "balance": 2000, "apr": 20, "minPayment": 60},
    {"id": "C", "name": "Car Loan", "balance": 1000, "apr": 10, "minPayment": 40},
]


def _body(**overrides):
    body = {"debts": DEBTS, "strategy": "snowball", "extraMonthly": 100, "startDate": "2025-01-01"}
    body.update(overrides)
    return body


class TestCompute:
    def test_compute_plan(self):
        response = client.post("/api/plans/compute", json=_body())
        assert response.status_code == 200
        plan = response.json()
        assert plan["status"] == "converged"
        assert [d["id"] for d in plan["debts"]] == ["A", "C", "B"]
        first = next(p for p in plan["months"][0]["payments"] if p["debt_id"] == "A")
        assert first["extra_applied"] == 100
        assert first["ending_balance"] == 375
        assert plan["totals"]["outflow_monthly"] == 225

    def test_empty_debts_degenerate_plan(self):
        response = client.post("/api/plans/compute", json=_body(debts=[]))
        assert response.status_code == 200
        assert response.json()["months"] == []
        assert response.json()["totals"]["months_to_debt_free"] == 0

    def test_junk_numbers_accepted(self):
        debts = [{"name": "Card", "balance": "1,000", "apr": "abc", "minPayment": ""}]
        response = client.post("/api/plans/compute", json=_body(debts=debts, extraMonthly="50"))
        assert response.status_code == 200
        assert response.json()["totals"]["months_to_debt_free"] == 20

    def test_capped_plan(self):
        debts = [{"name": "Payday", "balance": 10000, "apr": 24, "minPayment": 50}]
        response = client.post("/api/plans/compute", json=_body(debts=debts, extraMonthly=0, maxMonths=12))
        assert response.status_code == 200
        plan = response.json()
        assert plan["status"] == "capped"
        assert plan["debt_free_date"] is None

    def test_roll_over_minimums_camel_case(self):
        locked = client.post("/api/plans/compute", json=_body()).json()
        response = client.post("/api/plans/compute", json=_body(rollOverMinimums=False))
        assert response.status_code == 200
        months = response.json()["totals"]["months_to_debt_free"]
        assert months > locked["totals"]["months_to_debt_free"]

    def test_unknown_strategy_422(self):
        response = client.post("/api/plans/compute", json=_body(strategy="biggest-first"))
        assert response.status_code == 422

    def test_invalid_max_months_422(self):
        response = client.post("/api/plans/compute", json=_body(maxMonths=0))
        assert response.status_code == 422

    def test_no_body_422(self):
        response = client.post("/api/plans/compute")
        assert response.status_code == 422


def test_compare():
    response = client.post("/api/plans/compare", json={
        "debts": DEBTS,
        "a": {"extraMonthly": 0, "startDate": "2025-01-01"},
        "b": {"extraMonthly": 200, "startDate": "2025-01-01"},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["delta_months"] < 0
    assert data["delta_interest"] < 0


def test_strategies():
    response = client.post("/api/plans/strategies", json=_body())
    assert response.status_code == 200
    data = response.json()
    assert data["recommended"] in ("snowball", "avalanche")
    assert data["minimum_only"]["totals"]["outflow_monthly"] == 125
    assert data["months_saved"]["snowball"] > 0


class TestWhatIf:
    def test_monthly_extra_override(self):
        response = client.post("/api/plans/what-if", json={
            "debts": DEBTS,
            "settings": {"extraMonthly": 100, "startDate": "2025-01-01"},
            "monthly_extra": 300,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["a"]["totals"]["outflow_monthly"] == 225
        assert data["b"]["totals"]["outflow_monthly"] == 425
        assert data["delta_months"] < 0

    def test_lump_sum_override(self):
        response = client.post("/api/plans/what-if", json={
            "debts": DEBTS,
            "settings": {"startDate": "2025-01-01"},
            "lump_sum": 500,
        })
        assert response.status_code == 200
        assert response.json()["b"]["totals"]["one_time_applied"] == 500

    def test_no_active_debts_400(self):
        response = client.post("/api/plans/what-if", json={"debts": [], "monthly_extra": 100})
        assert response.status_code == 400
        assert response.json()["detail"] == "No active debts found"


class TestProjection:
    def test_snowball_vs_avalanche(self):
        response = client.post("/api/plans/projection", json=_body())
        assert response.status_code == 200
        data = response.json()
        assert data["a"]["strategy"] == "snowball"
        assert data["b"]["strategy"] == "avalanche"

    def test_all_excluded_400(self):
        debts = [dict(d, included=False) for d in DEBTS]
        response = client.post("/api/plans/projection", json=_body(debts=debts))
        assert response.status_code == 400


def test_insights():
    response = client.post("/api/plans/insights", json=_body())
    assert response.status_code == 200
    data = response.json()
    for key in ("remaining", "payoff_events", "milestones", "calendar", "printable", "balance_shares", "alerts",
                "remaining_by_category"):
        assert key in data
    assert [e["debt_id"] for e in data["payoff_events"]] == ["A", "C", "B"]


class TestExport:
    def test_csv_is_default(self):
        response = client.post("/api/plans/export", json=_body())
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="debt-plan-snowball.csv"' in response.headers["content-disposition"]
        lines = response.text.splitlines()
        assert lines[0].startswith("month,date,debt_id")
        assert lines[1].startswith("1,2025-01-01,A,Store Card,500")

    def test_xlsx(self):
        response = client.post("/api/plans/export?format=xlsx", json=_body(strategy="avalanche"))
        assert response.status_code == 200
        assert "debt-plan-avalanche.xlsx" in response.headers["content-disposition"]
        wb = load_workbook(io.BytesIO(response.content))
        assert wb.sheetnames == ["Summary", "Schedule"]
        assert wb["Schedule"].cell(row=1, column=1).value == "month"

    def test_unknown_format_422(self):
        response = client.post("/api/plans/export?format=pdf", json=_body())
        assert response.status_code == 422
