"""Trend estimation module."""

from costforecast.trend.estimator import (
    LinearTrend,
    classify_trend,
    compute_confidence,
    fit_linear_trend,
)

__all__ = [
    "LinearTrend",
    "classify_trend",
    "compute_confidence",
    "fit_linear_trend",
]
