"""
Cash Flow Forecaster

Daily forecasting of net cashflow, revenue and expenses from transaction
history. Validates the request, resolves the historical series through a data
provider, runs the selected strategy and assembles confidence intervals,
trend assessment and forecast dates into a single result.
"""

import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional, Sequence

from .confidence import calculate_confidence_intervals
from .dates import generate_forecast_dates
from .errors import InsufficientDataFailure, ValidationFailure
from .history import (
    HistoricalDataProvider,
    extract_series,
    fill_daily_gaps,
    filter_bounds,
    last_period
)
from .models import ForecastConfig, ForecastMetric, ForecastRequest, ForecastResult
from .strategies import run_strategy
from .trend_analyzer import TrendAnalyzer
from .validator import validate_forecast_request

logger = logging.getLogger(__name__)


class CashFlowForecaster:
    """
    Forecasting engine for daily financial activity.

    Provides:
    - Linear regression, moving average and exponential smoothing forecasts
    - 95% confidence bands from historical volatility
    - Trend classification of forecast vs history

    Example:
    ```python
    forecaster = CashFlowForecaster(TrendDataRepository(db.session))

    result = forecaster.forecast_cashflow(
        {"start_date": "2024-01-01", "end_date": "2024-03-01"},
        horizon_days=30,
        options={"method": "exponential"}
    )
    print(f"Trend: {result.trend.direction.value}")
    ```
    """

    def __init__(
        self,
        provider: HistoricalDataProvider,
        config: Optional[ForecastConfig] = None,
        trend_analyzer: Optional[TrendAnalyzer] = None,
        clock: Callable[[], date] = date.today
    ):
        """
        Initialize forecaster.

        Args:
            provider: Supplies daily ``{period, income, expense}`` rows
            config: Engine constants (z-score, smoothing alpha, window, ...)
            trend_analyzer: Trend classification rules
            clock: Returns the date forecasts are anchored to
        """
        self.provider = provider
        self.config = config or ForecastConfig()
        self.trend_analyzer = trend_analyzer or TrendAnalyzer()
        self.clock = clock

    def forecast_cashflow(
        self,
        filters: Mapping[str, Any],
        horizon_days: int = 30,
        options: Optional[Mapping[str, Any]] = None
    ) -> ForecastResult:
        """Forecast daily net cashflow (income - expense)"""
        return self.forecast(ForecastMetric.CASHFLOW, filters, horizon_days, options)

    def forecast_revenue(
        self,
        filters: Mapping[str, Any],
        horizon_days: int = 30,
        options: Optional[Mapping[str, Any]] = None
    ) -> ForecastResult:
        """Forecast daily revenue"""
        return self.forecast(ForecastMetric.REVENUE, filters, horizon_days, options)

    def forecast_expenses(
        self,
        filters: Mapping[str, Any],
        horizon_days: int = 30,
        options: Optional[Mapping[str, Any]] = None
    ) -> ForecastResult:
        """Forecast daily expenses"""
        return self.forecast(ForecastMetric.EXPENSE, filters, horizon_days, options)

    def forecast(
        self,
        metric: ForecastMetric,
        filters: Mapping[str, Any],
        horizon_days: int = 30,
        options: Optional[Mapping[str, Any]] = None
    ) -> ForecastResult:
        """
        Generate a forecast for one metric.

        Args:
            metric: Which daily aggregate to forecast
            filters: Historical range filter, passed through to the provider
            horizon_days: Days to forecast (1-90)
            options: ``method``, ``smoothing_alpha``, ``moving_window``

        Returns:
            ForecastResult

        Raises:
            ValidationFailure: malformed horizon, date range or method
            InsufficientDataFailure: fewer than ``min_history`` days of history
        """
        validation = validate_forecast_request(filters, horizon_days, options, self.config)
        if not validation.valid:
            raise ValidationFailure(validation.errors)

        request = ForecastRequest.from_options(horizon_days, options, self.config)

        try:
            rows = self.provider.get_trend_data(filters, 'day')
            rows = fill_daily_gaps(rows, *filter_bounds(filters))
            series = extract_series(rows, metric)

            anchor = None
            if self.config.anchor_dates_to_history:
                anchor = last_period(rows)

            result = self.forecast_series(series, request, metric=metric, anchor=anchor)
        except Exception as e:
            logger.error(f"Error forecasting {metric.value}: {e}")
            raise

        logger.info(
            f"{metric.value} forecast generated: {horizon_days} days, "
            f"method={request.method.value}, data_points={len(series)}"
        )
        return result

    def forecast_series(
        self,
        series: Sequence[float],
        request: ForecastRequest,
        metric: ForecastMetric = ForecastMetric.CASHFLOW,
        anchor: Optional[date] = None
    ) -> ForecastResult:
        """
        Run the compute phase on an already-resolved daily series.

        Args:
            series: Gap-free daily observations, oldest first
            request: Validated request
            metric: Label for the result
            anchor: Date the forecast dates follow (defaults to the clock)

        Returns:
            ForecastResult
        """
        if len(series) < self.config.min_history:
            raise InsufficientDataFailure(len(series), self.config.min_history)

        values = [float(v) for v in series]

        output = run_strategy(request, values, self.config)
        confidence = calculate_confidence_intervals(values, output.values, self.config)
        trend = self.trend_analyzer.analyze(values, output.values)
        dates = tuple(generate_forecast_dates(
            request.horizon_days,
            anchor if anchor is not None else self.clock()
        ))

        return ForecastResult(
            forecast_values=output.values,
            confidence_intervals=confidence,
            trend=trend,
            method=request.method,
            forecast_dates=dates,
            accuracy_score=output.fit_quality,
            metric=metric,
            historical_values=tuple(values),
            historical_direction=self.trend_analyzer.direction(values),
            historical_periods=len(values)
        )
