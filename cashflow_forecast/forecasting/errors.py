"""
Forecasting errors
"""

from typing import Iterable


class ForecastError(ValueError):
    """Base class for forecast failures"""


class ValidationFailure(ForecastError):
    """Raised when a forecast request breaks one or more validation rules"""

    def __init__(self, errors: Iterable[str]):
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class InsufficientDataFailure(ForecastError):
    """Raised when the historical series is shorter than the required minimum"""

    def __init__(self, actual: int, minimum: int = 7):
        self.actual = actual
        self.minimum = minimum
        super().__init__(
            f"Insufficient historical data (minimum {minimum} days required, got {actual})"
        )
