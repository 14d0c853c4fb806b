"""
Forecast request validation.

All rules are evaluated and every violation is reported, so callers can
surface the complete list at once.
"""

from datetime import date, datetime
from numbers import Real
from typing import Any, List, Mapping, Optional

from .models import ForecastConfig, ForecastMethod, ValidationResult

SUPPORTED_METHODS = frozenset(m.value for m in ForecastMethod)


def _filter_value(filters: Mapping[str, Any], snake: str, camel: str) -> Any:
    value = filters.get(snake)
    if value is None:
        value = filters.get(camel)
    return value


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a date, datetime or ISO string; None when it cannot be parsed"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def validate_forecast_request(
    filters: Optional[Mapping[str, Any]],
    horizon_days: Any,
    options: Optional[Mapping[str, Any]] = None,
    config: Optional[ForecastConfig] = None
) -> ValidationResult:
    """
    Validate a forecast request.

    Args:
        filters: Historical range filter (``start_date``/``end_date`` or camelCase)
        horizon_days: Number of days to forecast
        options: Optional ``method``, ``smoothing_alpha`` and ``moving_window``
        config: Engine configuration (horizon cap)

    Returns:
        ValidationResult listing every violated rule
    """
    config = config or ForecastConfig()
    options = options or {}
    errors: List[str] = []

    if (
        isinstance(horizon_days, bool)
        or not isinstance(horizon_days, int)
        or horizon_days < 1
        or horizon_days > config.max_horizon
    ):
        errors.append(f"Forecast days must be between 1 and {config.max_horizon}")

    if not isinstance(filters, Mapping):
        errors.append("Filters must be provided")
    else:
        raw_start = _filter_value(filters, 'start_date', 'startDate')
        raw_end = _filter_value(filters, 'end_date', 'endDate')

        if raw_start is not None and raw_end is not None:
            start = parse_date(raw_start)
            end = parse_date(raw_end)

            if start is None:
                errors.append("Invalid start date")
            if end is None:
                errors.append("Invalid end date")
            if start is not None and end is not None:
                # Naive and aware datetimes cannot be compared
                if (start.tzinfo is None) != (end.tzinfo is None):
                    start = start.replace(tzinfo=None)
                    end = end.replace(tzinfo=None)
                if start >= end:
                    errors.append("Start date must be before end date")

    # An empty method falls back to the default
    method = options.get('method')
    if method:
        value = method.value if isinstance(method, ForecastMethod) else method
        if not isinstance(value, str) or value not in SUPPORTED_METHODS:
            errors.append("Invalid forecasting method")

    alpha = options.get('smoothing_alpha')
    if alpha is not None:
        if isinstance(alpha, bool) or not isinstance(alpha, Real) or not 0 < alpha <= 1:
            errors.append("Smoothing alpha must be a number greater than 0 and at most 1")

    window = options.get('moving_window')
    if window is not None:
        if isinstance(window, bool) or not isinstance(window, int) or window < 1:
            errors.append("Moving window must be a positive integer")

    return ValidationResult(valid=not errors, errors=tuple(errors))
