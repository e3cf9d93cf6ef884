from __future__ import annotations

from fastapi.testclient import TestClient

from src.api import app

client = TestClient(app)

COMPANIES = [
    {"name": "Alpha", "total_emissions": 1000.0, "portfolio_intensity": 0.01},
    {"name": "Beta", "total_emissions": 2000.0, "portfolio_intensity": 0.02},
    {"name": "Gamma", "total_emissions": 3000.0, "portfolio_intensity": 0.03},
]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_scenarios_endpoint():
    resp = client.get("/scenarios")
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"orderly", "disorderly", "hothouse"}
    assert len(body["disorderly"]) == 16
    assert body["disorderly"][8]["year"] == 2033
    assert body["disorderly"][8]["price"] == 56.0
    assert body["orderly"][0] == {"year": 2025, "price": 50.0, "intensity_factor": 1.0}


def test_trajectory_endpoint():
    resp = client.post("/trajectory", json={"companies": COMPANIES, "scenario": "orderly"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["scenario"] == "orderly"
    assert len(body["points"]) == 16
    assert abs(body["points"][0]["total_cost"] - 300000.0) < 1e-6


def test_simulate_endpoint():
    """VaR per scenario and yearly bands."""
    resp = client.post(
        "/simulate",
        json={"companies": COMPANIES, "horizon_year": 2030, "n_paths": 25, "seed": 42},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["horizon_year"] == 2030
    assert [m["scenario"] for m in body["var_metrics"]] == ["orderly", "disorderly", "hothouse"]
    for m in body["var_metrics"]:
        assert m["year"] == 2030
        assert m["var"] <= m["cvar"]
    assert len(body["bands"]["hothouse"]) == 16


def test_simulate_is_reproducible():
    payload = {"companies": COMPANIES, "n_paths": 10, "seed": 3, "scenarios": ["hothouse"]}
    first = client.post("/simulate", json=payload).json()
    second = client.post("/simulate", json=payload).json()
    assert first == second
    assert [m["scenario"] for m in first["var_metrics"]] == ["hothouse"]


def test_simulate_empty_cohort():
    resp = client.post("/simulate", json={"companies": [], "n_paths": 10})
    assert resp.status_code == 200
    for m in resp.json()["var_metrics"]:
        assert m["var"] == 0.0 and m["cvar"] == 0.0 and m["mean"] == 0.0


def test_simulate_rejects_bad_horizon():
    resp = client.post("/simulate", json={"companies": COMPANIES, "horizon_year": 2050, "n_paths": 5})
    assert resp.status_code == 400


def test_unknown_scenario_rejected():
    resp = client.post("/trajectory", json={"companies": COMPANIES, "scenario": "net_zero"})
    assert resp.status_code == 422
