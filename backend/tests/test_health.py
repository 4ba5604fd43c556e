from fastapi.testclient import TestClient

from debtplan.main import app

client = TestClient(app)


def test_health_returns_200():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"]["status"] in ("not_configured", "unavailable", "connected", "error")


def test_health_reports_engine_limits():
    data = client.get("/api/health").json()
    assert data["engine"]["closure_epsilon"] == 0.01
    assert data["engine"]["max_months"] == 600
    assert data["engine"]["strategies"] == ["snowball", "avalanche"]
