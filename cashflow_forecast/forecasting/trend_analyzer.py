"""
Trend Analyzer for Cash Flow Forecast

Classifies how the forecast average moves against the historical average,
and the direction of the history itself.
"""

from typing import Sequence, Tuple

import numpy as np

from .models import HistoricalDirection, TrendAssessment, TrendDirection, TrendStrength
from .strategies import round_half_up


class TrendAnalyzer:
    """
    Rule-based trend classification.

    Thresholds on the percentage change of the forecast average versus the
    historical average:

        change %        |  direction       |  strength
        ----------------|------------------|----------
        > +10           |  strong_growth   |  high
        (+5, +10]       |  growth          |  moderate
        [-5, +5]        |  stable          |  low
        [-10, -5)       |  decline         |  moderate
        < -10           |  strong_decline  |  high

    Example:
    ```python
    analyzer = TrendAnalyzer()

    trend = analyzer.assess(historical_average=100, forecast_average=115)
    print(trend.direction.value)  # strong_growth
    ```
    """

    def __init__(
        self,
        strong_threshold: float = 10.0,
        moderate_threshold: float = 5.0,
        direction_ratio: float = 0.1
    ):
        """
        Initialize analyzer.

        Args:
            strong_threshold: % change beyond which a trend is strong
            moderate_threshold: % change beyond which a trend is no longer stable
            direction_ratio: Relative half-over-half move counted as a direction
        """
        self.strong_threshold = strong_threshold
        self.moderate_threshold = moderate_threshold
        self.direction_ratio = direction_ratio

    def analyze(
        self,
        historical: Sequence[float],
        forecast: Sequence[float]
    ) -> TrendAssessment:
        """Compare the mean of the history with the mean of the forecast"""
        historical_average = float(np.mean(historical)) if len(historical) else 0.0
        forecast_average = float(np.mean(forecast)) if len(forecast) else 0.0
        return self.assess(historical_average, forecast_average)

    def assess(self, historical_average: float, forecast_average: float) -> TrendAssessment:
        """Classify the change between two averages"""
        change = self.change_percent(historical_average, forecast_average)
        direction, strength = self.classify(change)

        return TrendAssessment(
            direction=direction,
            strength=strength,
            change_percent=round(change, 2),
            historical_average=round_half_up(historical_average),
            forecast_average=round_half_up(forecast_average)
        )

    @staticmethod
    def change_percent(historical_average: float, forecast_average: float) -> float:
        """Percentage change; 0.0 when the historical average is zero"""
        if historical_average == 0:
            return 0.0
        return (forecast_average - historical_average) / historical_average * 100

    def classify(self, change: float) -> Tuple[TrendDirection, TrendStrength]:
        """Map a percentage change onto the threshold ladder"""
        if change > self.strong_threshold:
            return TrendDirection.STRONG_GROWTH, TrendStrength.HIGH
        elif change > self.moderate_threshold:
            return TrendDirection.GROWTH, TrendStrength.MODERATE
        elif change >= -self.moderate_threshold:
            return TrendDirection.STABLE, TrendStrength.LOW
        elif change >= -self.strong_threshold:
            return TrendDirection.DECLINE, TrendStrength.MODERATE
        else:
            return TrendDirection.STRONG_DECLINE, TrendStrength.HIGH

    def direction(self, values: Sequence[float]) -> HistoricalDirection:
        """Compare the second half of a series with the first half"""
        if len(values) < 2:
            return HistoricalDirection.STABLE

        middle = len(values) // 2
        first_avg = float(np.mean(values[:middle]))
        second_avg = float(np.mean(values[middle:]))

        if second_avg > first_avg * (1 + self.direction_ratio):
            return HistoricalDirection.INCREASING
        if second_avg < first_avg * (1 - self.direction_ratio):
            return HistoricalDirection.DECREASING
        return HistoricalDirection.STABLE
