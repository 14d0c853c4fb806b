import gc
from datetime import date, timedelta

import pytest

from config.settings import TestingConfig
from cashflow_forecast.database.models import Transaction, db


def _seed(app, incomes, start=date(2024, 1, 1), expense=50):
    with app.app_context():
        for i, income in enumerate(incomes):
            day = start + timedelta(days=i)
            db.session.add(Transaction(transaction_date=day, type="income", amount=income))
            db.session.add(Transaction(transaction_date=day, type="expense", amount=expense))
        db.session.commit()


RANGE = "start_date=2024-01-01&end_date=2024-01-10"


def test_revenue_forecast(app, client):
    _seed(app, [100 + 10 * i for i in range(10)])

    resp = client.get(f"/api/forecast/revenue?days=3&{RANGE}")

    assert resp.status_code == 200
    forecast = resp.get_json()["forecast"]
    assert forecast["metric"] == "revenue"
    assert forecast["forecast"] == [200, 210, 220]
    assert forecast["accuracy_score"] == 1.0
    assert len(forecast["dates"]) == len(forecast["confidence"]) == 3


def test_cashflow_forecast_with_method(app, client):
    _seed(app, [100 + 10 * i for i in range(10)])

    resp = client.get(f"/api/forecast/cashflow?days=2&method=moving_average&moving_window=2&{RANGE}")

    assert resp.status_code == 200
    # net cashflow tail is 180 - 50 and 190 - 50
    assert resp.get_json()["forecast"]["forecast"] == [135, 135]


def test_default_window_uses_recent_history(app, client):
    _seed(app, [100] * 10, start=date.today() - timedelta(days=10))

    resp = client.get("/api/forecast/expense?days=5")

    assert resp.status_code == 200
    data = resp.get_json()["forecast"]
    assert len(data["forecast"]) == 5
    assert data["dates"][0] == (date.today() + timedelta(days=1)).isoformat()


@pytest.mark.parametrize("query,error", [
    ("days=0", "Forecast days must be between 1 and 90"),
    ("days=91", "Forecast days must be between 1 and 90"),
    ("days=abc", "Forecast days must be between 1 and 90"),
    ("method=arima", "Invalid forecasting method"),
    ("start_date=2024-02-01&end_date=2024-01-01", "Start date must be before end date"),
])
def test_validation_errors(client, query, error):
    resp = client.get(f"/api/forecast/cashflow?{query}")

    assert resp.status_code == 400
    assert error in resp.get_json()["errors"]


def test_insufficient_history(app, client):
    _seed(app, [100] * 3)

    resp = client.get("/api/forecast/cashflow?days=5&start_date=2024-01-01&end_date=2024-01-03")

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["minimum"] == 7
    assert body["actual"] == 3


def test_no_history_at_all(client):
    resp = client.get("/api/forecast/revenue")
    assert resp.status_code == 422
    assert resp.get_json()["actual"] == 0


def test_unknown_metric(client):
    assert client.get("/api/forecast/profit").status_code == 404


def test_accuracy_endpoint(client):
    resp = client.post("/api/forecast/accuracy", json={"actual": [100, 200], "predicted": [90, 220]})
    assert resp.status_code == 200
    assert resp.get_json() == {"accuracy": 90.0}

    assert client.post("/api/forecast/accuracy", json={"actual": [1]}).status_code == 400
    assert client.post("/api/forecast/accuracy", json={"actual": ["x"], "predicted": [1]}).status_code == 400
    assert client.post("/api/forecast/accuracy", json={"actual": ["100"], "predicted": [90]}).status_code == 400
    assert client.post("/api/forecast/accuracy", json={"actual": [True], "predicted": [1]}).status_code == 400


def test_create_transaction(app, client):
    resp = client.post("/api/transactions", json={
        "transaction_date": "2024-01-05",
        "type": "income",
        "amount": 120.5,
        "category": "sales"
    })

    assert resp.status_code == 201
    assert resp.get_json()["transaction"]["amount"] == 120.5
    with app.app_context():
        assert Transaction.query.count() == 1


def test_create_transaction_rejects_bad_payload(client):
    resp = client.post("/api/transactions", json={"transaction_date": "05/01/2024", "type": "income", "amount": 1})
    assert resp.status_code == 400
    assert client.post("/api/transactions", json={"transaction_date": "2024-01-05"}).status_code == 400


def test_trend_endpoint(app, client):
    _seed(app, [100, 110])

    resp = client.get("/api/trend?interval=month&start_date=2024-01-01&end_date=2024-01-31")

    assert resp.status_code == 200
    assert resp.get_json()["periods"] == [
        {"period": "2024-01", "income": 210.0, "expense": 100.0, "count": 4}
    ]
    assert client.get("/api/trend?interval=hour").status_code == 400


class RateLimitedConfig(TestingConfig):
    RATELIMIT_ENABLED = True
    FORECAST_RATE_LIMIT = "2 per hour"


def test_forecast_rate_limit():
    from web.app import create_app

    app = create_app(RateLimitedConfig)
    client = app.test_client()

    statuses = [client.get("/api/forecast/cashflow").status_code for _ in range(3)]

    assert statuses == [422, 422, 429]
    assert client.get("/api/forecast/cashflow").get_json()["error"] == "Forecast limit reached"

    with app.app_context():
        db.drop_all()


def test_forecast_route_survives_garbage_collection():
    from web.app import create_app

    app = create_app(TestingConfig)
    gc.collect()

    resp = app.test_client().get("/api/forecast/cashflow?days=3")

    assert resp.status_code == 422

    with app.app_context():
        db.drop_all()
