"""Ordinary least squares trend fitting over daily costs."""

import math
import statistics
from dataclasses import dataclass
from typing import Sequence

from costforecast.errors import InsufficientDataError
from costforecast.models.forecast import TrendDirection

MIN_TREND_SAMPLES = 2


@dataclass(frozen=True)
class LinearTrend:
    """Fitted line ``predicted(i) = slope * i + intercept``.

    The x-coordinate is the zero-based position in the series, not the
    calendar date, so gaps between dates are not modeled.
    """

    slope: float
    intercept: float

    def predict(self, index: int | float) -> float:
        """Evaluate the line at a series position."""
        return self.slope * index + self.intercept


def fit_linear_trend(values: Sequence[float]) -> LinearTrend:
    """Fit a line to a series with ordinary least squares.

    Args:
        values: Daily costs in date order

    Returns:
        The fitted slope and intercept

    Raises:
        InsufficientDataError: If fewer than two values are supplied
    """
    n = len(values)
    if n < MIN_TREND_SAMPLES:
        raise InsufficientDataError(MIN_TREND_SAMPLES, n, what="observations")

    slope, intercept = statistics.linear_regression(range(n), values)
    return LinearTrend(slope=slope, intercept=intercept)


def compute_confidence(values: Sequence[float], trend: LinearTrend) -> float:
    """Goodness of fit of a trend as a 0-100 confidence score.

    Confidence is R-squared times 100, clamped to [0, 100]. A series with
    no variance has no R-squared; it scores 100 when the line reproduces it
    exactly and 0 otherwise.
    """
    n = len(values)
    if n == 0:
        return 0.0

    mean = math.fsum(values) / n
    ss_res = math.fsum((y - trend.predict(i)) ** 2 for i, y in enumerate(values))
    ss_tot = math.fsum((y - mean) ** 2 for y in values)

    if ss_tot == 0:
        tolerance = 1e-9 * max(1.0, mean * mean) * n
        return 100.0 if ss_res <= tolerance else 0.0

    r_squared = 1 - ss_res / ss_tot
    return max(0.0, min(100.0, r_squared * 100))


def classify_trend(
    slope: float,
    mean: float,
    threshold_ratio: float = 0.01,
) -> TrendDirection:
    """Classify a slope relative to the series mean.

    The slope must strictly exceed ``mean * threshold_ratio`` in either
    direction; the boundary itself is stable.
    """
    threshold = mean * threshold_ratio
    if slope > threshold:
        return TrendDirection.INCREASING
    if slope < -threshold:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE
