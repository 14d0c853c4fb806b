"""
Forecasting Module for Cash Flow Forecast

Daily forecasting of cashflow, revenue and expenses with confidence
intervals, trend classification and back-test scoring.
"""

from .accuracy import calculate_accuracy
from .cash_flow_forecaster import CashFlowForecaster
from .confidence import calculate_confidence_intervals
from .dates import generate_forecast_dates
from .errors import ForecastError, InsufficientDataFailure, ValidationFailure
from .history import HistoricalDataProvider, fill_daily_gaps
from .models import (
    ForecastConfig,
    ForecastMethod,
    ForecastMetric,
    ForecastPoint,
    ForecastRequest,
    ForecastResult,
    HistoricalDirection,
    TrendAssessment,
    TrendDirection,
    TrendStrength,
    ValidationResult
)
from .strategies import run_strategy
from .trend_analyzer import TrendAnalyzer
from .validator import validate_forecast_request

__all__ = [
    'CashFlowForecaster',
    'ForecastConfig',
    'ForecastError',
    'ForecastMethod',
    'ForecastMetric',
    'ForecastPoint',
    'ForecastRequest',
    'ForecastResult',
    'HistoricalDataProvider',
    'HistoricalDirection',
    'InsufficientDataFailure',
    'TrendAnalyzer',
    'TrendAssessment',
    'TrendDirection',
    'TrendStrength',
    'ValidationFailure',
    'ValidationResult',
    'calculate_accuracy',
    'calculate_confidence_intervals',
    'fill_daily_gaps',
    'generate_forecast_dates',
    'run_strategy',
    'validate_forecast_request',
]
