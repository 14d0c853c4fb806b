"""
Confidence Interval Calculator

Symmetric bands around each forecast value, sized from the population
standard deviation of the history and a fixed z-score.
"""

from typing import Sequence, Tuple

import numpy as np

from .models import ForecastConfig, ForecastPoint
from .strategies import round_half_up


def historical_volatility(series: Sequence[float]) -> float:
    """Population standard deviation (divisor n); 0.0 for an empty series"""
    if len(series) == 0:
        return 0.0
    return float(np.std(np.asarray(series, dtype=float), ddof=0))


def calculate_confidence_intervals(
    historical: Sequence[float],
    forecast: Sequence[int],
    config: ForecastConfig = ForecastConfig()
) -> Tuple[ForecastPoint, ...]:
    """
    Wrap each forecast value with a lower and upper bound.

    Args:
        historical: Historical series the volatility is measured on
        forecast: Integer point forecasts
        config: Supplies ``z_score`` and ``confidence_percent``

    Returns:
        One ForecastPoint per forecast value, in order
    """
    margin = config.z_score * historical_volatility(historical)

    return tuple(
        ForecastPoint(
            index=i,
            predicted_value=value,
            lower_bound=round_half_up(value - margin),
            upper_bound=round_half_up(value + margin),
            confidence_percent=config.confidence_percent
        )
        for i, value in enumerate(forecast)
    )
