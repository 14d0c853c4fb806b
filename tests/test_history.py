from datetime import date

import pytest

from cashflow_forecast.forecasting.history import extract_series, fill_daily_gaps, filter_bounds
from cashflow_forecast.forecasting.models import ForecastMetric


def test_fill_daily_gaps_inserts_zero_rows():
    rows = [
        {"period": "2024-01-01", "income": 100, "expense": 40},
        {"period": "2024-01-04", "income": 70, "expense": 10},
    ]
    filled = fill_daily_gaps(rows)

    assert [r["period"] for r in filled] == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"]
    assert filled[1]["income"] == 0 and filled[1]["expense"] == 0
    assert filled[3]["income"] == 70


def test_fill_daily_gaps_extends_to_bounds():
    rows = [{"period": "2024-01-02", "income": 5, "expense": 0}]
    filled = fill_daily_gaps(rows, "2023-12-30", date(2024, 1, 3))

    assert len(filled) == 5
    assert filled[0]["period"] == "2023-12-30"
    assert [r["income"] for r in filled] == [0, 0, 0, 5, 0]


def test_fill_daily_gaps_keeps_empty_history_empty():
    assert fill_daily_gaps([], "2024-01-01", "2024-01-31") == []


def test_fill_daily_gaps_rejects_bad_period():
    with pytest.raises(ValueError):
        fill_daily_gaps([{"period": "2024-W01", "income": 1, "expense": 0}])


def test_extract_series_per_metric():
    rows = [
        {"period": "2024-01-01", "income": "100.5", "expense": 40},
        {"period": "2024-01-02", "income": None, "expense": 10},
    ]
    assert extract_series(rows, ForecastMetric.CASHFLOW) == [60.5, -10.0]
    assert extract_series(rows, ForecastMetric.REVENUE) == [100.5, 0.0]
    assert extract_series(rows, ForecastMetric.EXPENSE) == [40.0, 10.0]


def test_filter_bounds():
    assert filter_bounds(None) == (None, None)
    assert filter_bounds({"startDate": "2024-01-01", "end_date": "2024-02-01"}) == ("2024-01-01", "2024-02-01")
