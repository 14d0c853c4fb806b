"""
Historical series preparation.

The forecasting core assumes one observation per calendar day with no gaps.
Providers may return only the days that saw activity; ``fill_daily_gaps``
inserts explicit zero rows before a series is extracted.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from .models import ForecastMetric
from .validator import parse_date


class HistoricalDataProvider(Protocol):
    """Source of daily income/expense aggregates"""

    def get_trend_data(
        self,
        filters: Mapping[str, Any],
        interval: str = "day"
    ) -> List[Dict[str, Any]]:
        """Ascending rows of ``{period, income, expense}``"""
        ...


def _to_date(value: Any) -> Optional[date]:
    parsed = parse_date(value)
    return parsed.date() if parsed is not None else None


def fill_daily_gaps(
    rows: Sequence[Mapping[str, Any]],
    start: Optional[Any] = None,
    end: Optional[Any] = None
) -> List[Dict[str, Any]]:
    """
    Return one row per day from ``start`` to ``end`` inclusive.

    Days without a row get ``income = expense = 0``. Bounds default to the
    first and last period present. An empty input stays empty.
    """
    if not rows:
        return []

    by_day: Dict[date, Dict[str, Any]] = {}
    for row in rows:
        day = _to_date(row['period'])
        if day is None:
            raise ValueError(f"Invalid period in historical data: {row['period']!r}")
        by_day[day] = dict(row, period=day.isoformat())

    first = _to_date(start) or min(by_day)
    last = _to_date(end) or max(by_day)

    filled = []
    day = first
    while day <= last:
        filled.append(by_day.get(day) or {
            "period": day.isoformat(),
            "income": 0.0,
            "expense": 0.0,
            "count": 0
        })
        day += timedelta(days=1)

    return filled


def extract_series(rows: Sequence[Mapping[str, Any]], metric: ForecastMetric) -> List[float]:
    """Pull the numeric series for ``metric`` out of daily rows"""
    series = []
    for row in rows:
        income = float(row.get('income') or 0)
        expense = float(row.get('expense') or 0)

        if metric is ForecastMetric.CASHFLOW:
            series.append(income - expense)
        elif metric is ForecastMetric.REVENUE:
            series.append(income)
        elif metric is ForecastMetric.EXPENSE:
            series.append(expense)
        else:
            raise ValueError(f"Unsupported forecast metric: {metric!r}")

    return series


def last_period(rows: Sequence[Mapping[str, Any]]) -> Optional[date]:
    """Date of the final row, if any"""
    if not rows:
        return None
    return _to_date(rows[-1]['period'])


def filter_bounds(filters: Optional[Mapping[str, Any]]) -> Tuple[Any, Any]:
    """``(start, end)`` from a filter mapping, accepting snake or camel case"""
    if not filters:
        return None, None
    start = filters.get('start_date', filters.get('startDate'))
    end = filters.get('end_date', filters.get('endDate'))
    return start, end
