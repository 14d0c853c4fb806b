"""
Forecast Data Models

Enums and immutable dataclasses shared by the forecasting core.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class ForecastMethod(Enum):
    """Supported forecasting strategies"""
    LINEAR = "linear"
    MOVING_AVERAGE = "moving_average"
    EXPONENTIAL = "exponential"


class ForecastMetric(Enum):
    """Which daily aggregate is forecast"""
    CASHFLOW = "cashflow"   # income - expense
    REVENUE = "revenue"     # income
    EXPENSE = "expense"     # expense


class TrendDirection(Enum):
    """Forecast vs historical direction"""
    STRONG_GROWTH = "strong_growth"
    GROWTH = "growth"
    STABLE = "stable"
    DECLINE = "decline"
    STRONG_DECLINE = "strong_decline"


class TrendStrength(Enum):
    """Qualitative magnitude of a trend"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class HistoricalDirection(Enum):
    """Direction of the history itself (second half vs first half)"""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


def _as_bool(value: Any) -> bool:
    """Settings flags may arrive as strings such as 'false'"""
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes')
    return bool(value)


@dataclass(frozen=True)
class ForecastConfig:
    """
    Tunable constants of the forecasting engine.

    Passed explicitly into every component so tests can inject alternatives.
    """
    z_score: float = 1.96
    confidence_percent: int = 95
    smoothing_alpha: float = 0.3
    moving_window: int = 7
    moving_average_fit: float = 0.70
    exponential_fit: float = 0.75
    min_history: int = 7
    max_horizon: int = 90
    anchor_dates_to_history: bool = False

    @classmethod
    def from_settings(cls, settings: Any) -> "ForecastConfig":
        """Build from a config class or Flask config mapping"""
        def get(key: str, default: Any) -> Any:
            if isinstance(settings, Mapping):
                return settings.get(key, default)
            return getattr(settings, key, default)

        defaults = cls()
        return cls(
            z_score=float(get('FORECAST_Z_SCORE', defaults.z_score)),
            confidence_percent=int(get('FORECAST_CONFIDENCE_PERCENT', defaults.confidence_percent)),
            smoothing_alpha=float(get('FORECAST_SMOOTHING_ALPHA', defaults.smoothing_alpha)),
            moving_window=int(get('FORECAST_MOVING_WINDOW', defaults.moving_window)),
            moving_average_fit=float(get('FORECAST_MOVING_AVERAGE_FIT', defaults.moving_average_fit)),
            exponential_fit=float(get('FORECAST_EXPONENTIAL_FIT', defaults.exponential_fit)),
            min_history=int(get('FORECAST_MIN_HISTORY', defaults.min_history)),
            max_horizon=int(get('FORECAST_MAX_HORIZON', defaults.max_horizon)),
            anchor_dates_to_history=_as_bool(
                get('FORECAST_ANCHOR_TO_HISTORY', defaults.anchor_dates_to_history)
            ),
        )


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of request validation"""
    valid: bool
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ForecastRequest:
    """A validated forecast request"""
    horizon_days: int
    method: ForecastMethod = ForecastMethod.LINEAR
    smoothing_alpha: float = 0.3
    moving_window: int = 7

    @classmethod
    def from_options(
        cls,
        horizon_days: int,
        options: Optional[Mapping[str, Any]] = None,
        config: Optional[ForecastConfig] = None
    ) -> "ForecastRequest":
        """Build from an options mapping; assumes the options were validated"""
        options = options or {}
        config = config or ForecastConfig()
        method = options.get('method') or ForecastMethod.LINEAR
        return cls(
            horizon_days=horizon_days,
            method=ForecastMethod(method),
            smoothing_alpha=float(options.get('smoothing_alpha', config.smoothing_alpha)),
            moving_window=int(options.get('moving_window', config.moving_window)),
        )


@dataclass(frozen=True)
class ForecastPoint:
    """A forecast value with its confidence band"""
    index: int
    predicted_value: int
    lower_bound: int
    upper_bound: int
    confidence_percent: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "predicted": self.predicted_value,
            "lower": self.lower_bound,
            "upper": self.upper_bound,
            "confidence": self.confidence_percent
        }


@dataclass(frozen=True)
class TrendAssessment:
    """Comparison of historical and forecast averages"""
    direction: TrendDirection
    strength: TrendStrength
    change_percent: float
    historical_average: int
    forecast_average: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "strength": self.strength.value,
            "change_percent": self.change_percent,
            "historical_average": self.historical_average,
            "forecast_average": self.forecast_average
        }


@dataclass(frozen=True)
class ForecastResult:
    """Result of a forecast"""
    forecast_values: Tuple[int, ...]
    confidence_intervals: Tuple[ForecastPoint, ...]
    trend: TrendAssessment
    method: ForecastMethod
    forecast_dates: Tuple[str, ...]
    accuracy_score: float
    metric: ForecastMetric = ForecastMetric.CASHFLOW
    historical_values: Tuple[float, ...] = ()
    historical_direction: HistoricalDirection = HistoricalDirection.STABLE
    historical_periods: int = 0

    @property
    def horizon_days(self) -> int:
        return len(self.forecast_values)

    @property
    def metadata(self) -> Dict[str, Any]:
        return {
            "historical_periods": self.historical_periods,
            "forecast_periods": self.horizon_days
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric.value,
            "method": self.method.value,
            "forecast": list(self.forecast_values),
            "confidence": [p.to_dict() for p in self.confidence_intervals],
            "trend": self.trend.to_dict(),
            "dates": list(self.forecast_dates),
            "accuracy_score": self.accuracy_score,
            "historical_data": list(self.historical_values),
            "historical_direction": self.historical_direction.value,
            "metadata": self.metadata
        }
