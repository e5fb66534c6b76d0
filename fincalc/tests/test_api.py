from __future__ import annotations

import json

import pytest
from flask.testing import FlaskClient

from fincalc.app import create_app


def test_amortization_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/calc/amortization",
        json={"loan_amount": 200000, "annual_rate_pct": 6, "term_years": 15, "row_limit": 3},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["base_payment"] == 1687.71
    assert body["months"] == 180
    assert len(body["monthly"]) == 3
    assert body["monthly"][0]["period"] == 1
    assert body["monthly"][0]["interest"] == 1000.0
    assert len(body["annual"]) == 15


def test_payment_endpoint_reports_shortfall_as_a_status(client: FlaskClient):
    resp = client.post(
        "/api/calc/payment",
        json={"mode": "fixed_payment", "loan_amount": 120000, "annual_rate_pct": 6, "monthly_payment": 500},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "payment_too_low"
    assert body["message"].startswith("Payment is too low")


def test_investment_endpoint_defaults(client: FlaskClient):
    resp = client.post("/api/calc/investment", json={})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["mode"] == "end"
    assert body["totals"]["end_balance"] == pytest.approx(198290.4, abs=1.0)


def test_investment_endpoint_solves_rate(client: FlaskClient):
    resp = client.post("/api/calc/investment", json={"mode": "rate", "target_end_amount": 1000})

    body = resp.get_json()
    assert body["status"] == "no_solution_in_range"
    assert body["solved_bound"] == "low"


@pytest.mark.parametrize(
    "path",
    [
        "/api/calc/retirement/nest-egg",
        "/api/calc/retirement/savings-needed",
        "/api/calc/retirement/withdrawal",
        "/api/calc/retirement/payout",
        "/api/calc/loan",
        "/api/calc/mortgage",
        "/api/calc/auto-loan",
        "/api/calc/interest",
    ],
)
def test_calculators_accept_defaults(client: FlaskClient, path):
    resp = client.post(path, json={})
    assert resp.status_code == 200
    assert resp.get_json()


def test_payout_never_depletes_serializes_nulls(client: FlaskClient):
    resp = client.post("/api/calc/retirement/payout", json={"withdraw_monthly": 2500})

    body = resp.get_json()
    assert body["status"] == "never_depletes"
    assert body["months"] is None
    assert body["monthly"] == []


def test_invalid_payload_returns_422(client: FlaskClient):
    resp = client.post("/api/calc/amortization", json={"loan_amount": -5, "annual_rate_pct": 6})

    assert resp.status_code == 422
    body = resp.get_json()
    assert "detail" in body
    assert body["detail"][0]["loc"] == ["loan_amount"]


def test_unknown_field_is_rejected(client: FlaskClient):
    resp = client.post("/api/calc/loan", json={"loan_amount": 1000, "apr": 5})
    assert resp.status_code == 422


def test_missing_mode_input_is_rejected(client: FlaskClient):
    resp = client.post("/api/calc/payment", json={"mode": "fixed_payment", "loan_amount": 1000, "annual_rate_pct": 5})
    assert resp.status_code == 422


def test_non_json_body_is_a_bad_request(client: FlaskClient):
    resp = client.post("/api/calc/loan", data="not json", content_type="application/json")
    assert resp.status_code == 400


def test_configured_cap_reaches_the_calculator():
    app = create_app({"TESTING": True, "PAYOFF_MAX_PERIODS": 12})
    with app.test_client() as client:
        resp = client.post(
            "/api/calc/payment",
            json={"mode": "fixed_payment", "loan_amount": 120000, "annual_rate_pct": 6, "monthly_payment": 700},
        )

    body = resp.get_json()
    assert body["status"] == "period_cap_exceeded"
    assert body["message"] == "Payoff exceeded 12 months. Increase payment to pay off sooner."


def test_cors_headers_for_allowed_origin(client: FlaskClient):
    resp = client.get("/api/ping", headers={"Origin": "http://localhost:5173"})
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


@pytest.mark.parametrize(
    "path, payload",
    [
        ("/api/calc/interest", {"principal": 0, "annual_rate_pct": 1000, "years": 200, "compound": "daily"}),
        ("/api/calc/interest", {"principal": 5, "annual_rate_pct": 1000, "years": 200, "compound": "daily"}),
        (
            "/api/calc/investment",
            {"return_rate_pct": 1000, "years": 200, "compound": "daily", "contribution_frequency": "annually"},
        ),
        ("/api/calc/investment", {"mode": "start", "return_rate_pct": 1000, "years": 200, "compound": "daily"}),
    ],
)
def test_extreme_inputs_produce_strict_json(client: FlaskClient, path, payload):
    resp = client.post(path, json=payload)

    assert resp.status_code == 200
    body = json.loads(resp.get_data(as_text=True), parse_constant=_reject_constant)
    assert body["status"] in ("ok", "no_solution_in_range")
