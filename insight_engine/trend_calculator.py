"""
Trend Calculator

Least-squares linear trend over a numeric series with an implicit
x-index 0..n-1. Pure functions, no side effects.
"""

from typing import Sequence

PREDICTION_MIN = 0.0
PREDICTION_MAX = 100.0


class TrendCalculator:
    """Linear trend fitting and next-value prediction."""

    @staticmethod
    def slope(values: Sequence[float]) -> float:
        """
        Ordinary least-squares slope of values against their index.

        slope = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)

        Returns 0.0 for fewer than 2 samples.
        """
        n = len(values)
        if n < 2:
            return 0.0

        sum_x = sum(range(n))
        sum_y = sum(values)
        sum_xy = sum(x * y for x, y in enumerate(values))
        sum_xx = sum(x * x for x in range(n))

        return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)

    @classmethod
    def predict_next(cls, values: Sequence[float]) -> float:
        """
        Predict the next value as last + slope, clamped to [0, 100].

        Only meaningful for percentage-scale series such as health scores.
        """
        if not values:
            return 0.0
        predicted = values[-1] + cls.slope(values)
        return max(PREDICTION_MIN, min(PREDICTION_MAX, predicted))
