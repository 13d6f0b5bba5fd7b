from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from fincalc.app import create_app
from fincalc.app.api.routes import CALCULATORS


def amortization_payload() -> dict:
    return {
        "loan_amount": "250,000",
        "loan_term_years": "30",
        "interest_rate": "6.5",
        "start_month": "1",
        "start_year": "2025",
        "extra_monthly_payment": "",
    }


@pytest.mark.parametrize("name", sorted(CALCULATORS))
def test_every_calculator_runs_on_defaults(client: FlaskClient, name: str):
    resp = client.post(f"/api/calc/{name}", json={})

    assert resp.status_code == 200, resp.get_json()
    assert resp.get_json()


def test_amortization_endpoint_returns_schedule(client: FlaskClient):
    resp = client.post("/api/calc/amortization", json=amortization_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "converged"
    assert round(body["monthly_payment"], 2) == 1580.17
    assert len(body["schedule"]) == 360
    assert body["schedule"][0]["payment_date"] == "2025-01-01"
    assert body["payoff_date"] == "2054-12-01"


def test_rent_endpoint(client: FlaskClient):
    resp = client.post("/api/calc/rent", json={"income": "75000", "income_type": "annual", "monthly_debt": "500"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["monthly_income"] == pytest.approx(6250.0)
    assert body["max_rent_at_30_percent"] == pytest.approx(1875.0)
    assert body["debt_to_income_ratio"] == pytest.approx(8.0)
    assert body["debt_to_income_band"] == "healthy"


def test_debt_payoff_endpoint_orders_events(client: FlaskClient):
    resp = client.post(
        "/api/calc/debt-payoff",
        json={
            "debts": [
                {"name": "low", "balance": "2000", "min_payment": "80", "interest_rate": "10"},
                {"name": "high", "balance": "1000", "min_payment": "50", "interest_rate": "20"},
            ],
            "extra_monthly": "200",
            "extra_yearly": "0",
        },
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert [event["debt_name"] for event in body["events"]] == ["high", "low"]
    assert body["interest_saved"] > 0


def test_non_convergence_is_a_result_not_an_error(client: FlaskClient):
    resp = client.post("/api/calc/payment", json={"mode": "fixed_payment", "monthly_payment": 500})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "not_converged"
    assert body["reason"]
    assert body["total_interest"] is None


def test_invalid_input_returns_400(client: FlaskClient):
    resp = client.post("/api/calc/rent", json={"income": 0})

    assert resp.status_code == 400
    body = resp.get_json()
    assert any("income" in message for message in body["error"])


def test_retirement_age_validation_returns_400(client: FlaskClient):
    resp = client.post("/api/calc/ira", json={"current_age": 60, "retirement_age": 55})

    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_bad_choice_returns_422(client: FlaskClient):
    resp = client.post("/api/calc/payment", json={"mode": "weekly"})

    assert resp.status_code == 422
    body = resp.get_json()
    assert "detail" in body
    assert body["detail"][0]["loc"] == ["mode"]


def test_non_object_payload_returns_422(client: FlaskClient):
    resp = client.post("/api/calc/savings", json=[1, 2, 3])

    assert resp.status_code == 422


def test_unknown_calculator_returns_404(client: FlaskClient):
    resp = client.post("/api/calc/mortgage-refinance", json={})

    assert resp.status_code == 404


def test_max_periods_comes_from_config():
    app = create_app({"TESTING": True, "MAX_PERIODS": 120})

    with app.test_client() as client:
        resp = client.post("/api/calc/amortization", json=amortization_payload())

    assert resp.status_code == 400
    assert "limit of 120" in resp.get_json()["error"][0]


def test_max_periods_from_environment(monkeypatch):
    monkeypatch.setenv("FINCALC_MAX_PERIODS", "240")

    app = create_app({"TESTING": True})

    assert app.config["MAX_PERIODS"] == 240


def test_wsgi_entry_point_serves_the_api():
    from fincalc.wsgi import app

    with app.test_client() as client:
        resp = client.get("/api/ping")

    assert resp.status_code == 200


@pytest.mark.parametrize("start_year", [9999, 20000])
def test_schedule_past_the_calendar_returns_400(client: FlaskClient, start_year: int):
    resp = client.post("/api/calc/amortization", json={"start_year": start_year})

    assert resp.status_code == 400
    assert "9999" in resp.get_json()["error"][0]


def test_fractional_term_uses_the_default(client: FlaskClient):
    resp = client.post("/api/calc/payment", json={"loan_term": "0.5"})

    assert resp.status_code == 200
    assert resp.get_json()["years_to_payoff"] == 15
