"""
Forecast date generation
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union


def generate_forecast_dates(
    horizon_days: int,
    start: Optional[Union[date, datetime]] = None
) -> Iterator[str]:
    """
    Yield ``horizon_days`` ISO dates (YYYY-MM-DD) following ``start``.

    Date ``i`` is ``start + (i + 1)`` days. ``start`` defaults to today, so
    forecasts are anchored to the moment of invocation.
    """
    if start is None:
        start = date.today()
    if isinstance(start, datetime):
        start = start.date()

    for i in range(horizon_days):
        yield (start + timedelta(days=i + 1)).isoformat()
