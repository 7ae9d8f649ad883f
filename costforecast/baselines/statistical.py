"""Statistical baseline calculator implementation."""

import math
import statistics
from typing import Sequence

from costforecast.baselines.interface import BaselineCalculator
from costforecast.errors import InsufficientDataError
from costforecast.models.baseline import BaselineMetrics


class StatisticalBaselineCalculator(BaselineCalculator):
    """Computes baseline metrics using standard statistical methods.

    - Mean: Arithmetic average
    - Standard deviation: Population standard deviation

    DESIGN: Uses population stdev (not sample), matching the confidence
    bounds of the forecast. A single prior day is a legal baseline; it
    simply has zero variance.
    """

    _MIN_SAMPLES = 1

    def compute(self, values: Sequence[float]) -> BaselineMetrics:
        """Compute baseline metrics from a sequence of values.

        Args:
            values: Sequence of numeric values to compute baseline from

        Returns:
            Computed baseline metrics

        Raises:
            InsufficientDataError: If the sequence is empty
        """
        values_list = [float(v) for v in values]
        n = len(values_list)

        if n < self._MIN_SAMPLES:
            raise InsufficientDataError(self._MIN_SAMPLES, n)

        return BaselineMetrics(
            mean=statistics.fmean(values_list),
            std=statistics.pstdev(values_list),
            min_value=min(values_list),
            max_value=max(values_list),
            sample_count=n,
        )


def compute_z_score(value: float, mean: float, std: float) -> float:
    """Compute the signed z-score for a value given mean and standard deviation.

    Args:
        value: The value to compute z-score for
        mean: Population mean
        std: Population standard deviation

    Returns:
        Z-score (signed, can be negative or infinite)
    """
    if std == 0:
        return 0.0 if value == mean else math.inf if value > mean else -math.inf
    return (value - mean) / std


def compute_deviation_percentage(value: float, mean: float) -> float:
    """Signed percentage difference of a value from the mean."""
    if mean == 0:
        return 0.0 if value == 0 else math.copysign(math.inf, value)
    return (value - mean) / mean * 100
