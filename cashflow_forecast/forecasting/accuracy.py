"""
Forecast accuracy scoring for back-testing.
"""

from typing import Sequence

import numpy as np


def calculate_accuracy(actual: Sequence[float], predicted: Sequence[float]) -> float:
    """
    Score predictions against actuals as ``100 - MAPE``, floored at 0.

    The per-point error is ``|actual - predicted| / max(actual, 1)``, so
    actuals below 1 (including zero and negatives) are measured against 1.

    Returns:
        Accuracy between 0 and 100; 0 when the series are empty or differ in length
    """
    if len(actual) != len(predicted) or len(actual) == 0:
        return 0.0

    a = np.asarray(actual, dtype=float)
    p = np.asarray(predicted, dtype=float)

    errors = np.abs(a - p) / np.maximum(a, 1.0)
    mape = float(np.mean(errors)) * 100

    return max(0.0, 100.0 - mape)
