"""
Forecast Strategies

Three interchangeable point-forecast algorithms sharing one contract:
``strategy(series, horizon, ...) -> StrategyOutput(values, fit_quality)``.

Forecast values are whole numbers rounded half-up, so ``2.5`` becomes ``3``
and ``-2.5`` becomes ``-2``.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .models import ForecastConfig, ForecastMethod, ForecastRequest


@dataclass(frozen=True)
class StrategyOutput:
    """Point forecasts and a 0-1 fit-quality score"""
    values: Tuple[int, ...]
    fit_quality: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity"""
    return int(math.floor(value + 0.5))


def linear_regression_fit(series: Sequence[float]) -> Tuple[float, float]:
    """
    Ordinary least squares over x = 0..n-1 via the normal equations.

    Returns:
        (slope, intercept)
    """
    n = len(series)
    x = np.arange(n, dtype=float)
    y = np.asarray(series, dtype=float)

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))

    denominator = n * sum_xx - sum_x ** 2
    if denominator == 0:
        # Single observation: flat line through it
        return 0.0, sum_y / n if n else 0.0

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def r_squared(series: Sequence[float], slope: float, intercept: float) -> float:
    """Coefficient of determination of the fitted line, clamped into [0, 1]"""
    y = np.asarray(series, dtype=float)
    x = np.arange(len(y), dtype=float)
    y_pred = slope * x + intercept

    ss_res = float(np.sum((y - y_pred) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))

    if ss_tot == 0:
        # Constant series
        return 1.0 if ss_res == 0 else 0.0

    return min(1.0, max(0.0, 1.0 - ss_res / ss_tot))


def linear_regression_forecast(series: Sequence[float], horizon: int) -> StrategyOutput:
    """Extend the OLS line ``horizon`` steps past the last observation"""
    n = len(series)
    slope, intercept = linear_regression_fit(series)

    values = tuple(
        round_half_up(slope * (n + i) + intercept)
        for i in range(horizon)
    )
    return StrategyOutput(values=values, fit_quality=r_squared(series, slope, intercept))


def moving_average_forecast(
    series: Sequence[float],
    horizon: int,
    window: int = 7,
    fit_quality: float = 0.70
) -> StrategyOutput:
    """Flat forecast at the mean of the last ``window`` observations"""
    w = min(window, len(series))
    average = float(np.mean(np.asarray(series[-w:], dtype=float)))
    return StrategyOutput(values=(round_half_up(average),) * horizon, fit_quality=fit_quality)


def exponential_smoothing(series: Sequence[float], alpha: float = 0.3) -> List[float]:
    """Simple exponential smoothing seeded with the first observation"""
    smoothed = [float(series[0])]
    for value in series[1:]:
        smoothed.append(alpha * float(value) + (1 - alpha) * smoothed[-1])
    return smoothed


def exponential_smoothing_forecast(
    series: Sequence[float],
    horizon: int,
    alpha: float = 0.3,
    fit_quality: float = 0.75
) -> StrategyOutput:
    """Last smoothed level plus the average per-step drift of the smoothed curve"""
    smoothed = exponential_smoothing(series, alpha)
    level = smoothed[-1]
    trend = (level - smoothed[0]) / len(smoothed)

    values = tuple(
        round_half_up(level + trend * (i + 1))
        for i in range(horizon)
    )
    return StrategyOutput(values=values, fit_quality=fit_quality)


def run_strategy(
    request: ForecastRequest,
    series: Sequence[float],
    config: ForecastConfig
) -> StrategyOutput:
    """Dispatch to the strategy named by ``request.method``"""
    method = request.method
    horizon = request.horizon_days

    if method is ForecastMethod.LINEAR:
        return linear_regression_forecast(series, horizon)
    elif method is ForecastMethod.MOVING_AVERAGE:
        return moving_average_forecast(
            series, horizon,
            window=request.moving_window,
            fit_quality=config.moving_average_fit
        )
    elif method is ForecastMethod.EXPONENTIAL:
        return exponential_smoothing_forecast(
            series, horizon,
            alpha=request.smoothing_alpha,
            fit_quality=config.exponential_fit
        )

    raise ValueError(f"Unsupported forecast method: {method!r}")
