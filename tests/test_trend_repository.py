from datetime import date

import pytest

from cashflow_forecast.database.models import Transaction, db
from cashflow_forecast.database.trend_repository import TrendDataRepository
from cashflow_forecast.demo_data import DemoDataGenerator, load_demo_data_to_db


@pytest.fixture
def session(app):
    with app.app_context():
        entries = [
            (date(2024, 1, 1), "income", 100, "approved", "sales"),
            (date(2024, 1, 1), "income", 50, "approved", "services"),
            (date(2024, 1, 1), "expense", 30, "approved", "rent"),
            (date(2024, 1, 2), "expense", 20, "approved", "utilities"),
            (date(2024, 1, 2), "income", 1000, "pending", "sales"),
            (date(2024, 1, 3), "receivable", 10, "approved", "sales"),
        ]
        for day, kind, amount, status, category in entries:
            db.session.add(Transaction(
                transaction_date=day, type=kind, amount=amount, status=status, category=category
            ))
        db.session.commit()
        yield db.session


def test_daily_totals_exclude_unapproved(session):
    rows = TrendDataRepository(session).get_trend_data({}, "day")

    assert rows == [
        {"period": "2024-01-01", "income": 150.0, "expense": 30.0, "count": 3},
        {"period": "2024-01-02", "income": 0.0, "expense": 20.0, "count": 1},
        {"period": "2024-01-03", "income": 10.0, "expense": 0.0, "count": 1},
    ]


def test_monthly_rollup(session):
    rows = TrendDataRepository(session).get_trend_data({}, "month")
    assert rows == [{"period": "2024-01", "income": 160.0, "expense": 50.0, "count": 5}]


def test_date_and_category_filters(session):
    repository = TrendDataRepository(session)

    rows = repository.get_trend_data({"start_date": "2024-01-02"}, "day")
    assert [r["period"] for r in rows] == ["2024-01-02", "2024-01-03"]

    rows = repository.get_trend_data({"endDate": "2024-01-01", "category": "sales"}, "day")
    assert rows == [{"period": "2024-01-01", "income": 100.0, "expense": 0.0, "count": 1}]


def test_custom_transaction_types(session):
    repository = TrendDataRepository(session, income_types=("income",))
    rows = repository.get_trend_data({}, "day")
    assert rows[-1]["income"] == 0.0


def test_unsupported_interval(session):
    with pytest.raises(ValueError):
        TrendDataRepository(session).get_trend_data({}, "hour")


def test_demo_generator_is_reproducible():
    first = DemoDataGenerator(seed=7).generate_transactions("food_service", days=30, end_date=date(2024, 3, 31))
    second = DemoDataGenerator(seed=7).generate_transactions("food_service", days=30, end_date=date(2024, 3, 31))

    assert [(t["transaction_date"], t["amount"]) for t in first] == \
           [(t["transaction_date"], t["amount"]) for t in second]
    assert all("2024-03-02" <= t["transaction_date"] <= "2024-03-31" for t in first)
    assert {t["type"] for t in first} == {"income", "expense"}


def test_demo_data_loads_into_database(app):
    with app.app_context():
        created = load_demo_data_to_db(db.session, profile_name="retail", days=30)

        assert created == Transaction.query.count()
        rows = TrendDataRepository(db.session).get_trend_data({}, "day")
        assert 0 < len(rows) <= 30


def test_demo_transaction_ids_are_seeded():
    first = DemoDataGenerator(seed=3).generate_transactions("retail", days=5, end_date=date(2024, 3, 31))
    second = DemoDataGenerator(seed=3).generate_transactions("retail", days=5, end_date=date(2024, 3, 31))

    assert [t["id"] for t in first] == [t["id"] for t in second]
    assert len({t["id"] for t in first}) == len(first)
