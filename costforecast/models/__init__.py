"""Forecast models module."""

from costforecast.models.anomaly_result import AnomalyResult, Severity
from costforecast.models.baseline import BaselineMetrics
from costforecast.models.forecast import ForecastResult, TrendAnalysis, TrendDirection
from costforecast.models.observation import ForecastPoint, Observation, parse_date

__all__ = [
    # Anomaly results
    "AnomalyResult",
    "Severity",
    # Baselines
    "BaselineMetrics",
    # Forecasts
    "ForecastPoint",
    "ForecastResult",
    "Observation",
    "TrendAnalysis",
    "TrendDirection",
    "parse_date",
]
