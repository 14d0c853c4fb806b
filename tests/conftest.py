import os
import sys
from datetime import date, timedelta

import pytest

# ensure workspace root is on sys.path so config/ and web/ import without installation
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config.settings import TestingConfig


class StaticProvider:
    """Historical data provider returning canned rows and recording calls"""

    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    def get_trend_data(self, filters, interval="day"):
        self.calls.append((filters, interval))
        return [dict(r) for r in self.rows]


def make_rows(incomes, expenses=None, start=date(2024, 1, 1)):
    """Daily rows starting at ``start``, one per income value"""
    expenses = expenses if expenses is not None else [0] * len(incomes)
    return [
        {
            "period": (start + timedelta(days=i)).isoformat(),
            "income": income,
            "expense": expense,
            "count": 1,
        }
        for i, (income, expense) in enumerate(zip(incomes, expenses))
    ]


@pytest.fixture
def fixed_clock():
    return lambda: date(2024, 6, 1)


@pytest.fixture
def app():
    from web.app import create_app

    app = create_app(TestingConfig)
    yield app

    from cashflow_forecast.database.models import db
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
