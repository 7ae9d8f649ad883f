"""Cost forecasting and anomaly detection for FinOps daily cost series."""

from costforecast.detectors import detect_anomaly
from costforecast.errors import ForecastError, InsufficientDataError, MalformedInputError
from costforecast.forecasting import analyze_cost_trends, generate_forecast
from costforecast.models import (
    AnomalyResult,
    ForecastPoint,
    ForecastResult,
    Observation,
    Severity,
    TrendAnalysis,
    TrendDirection,
)

__version__ = "0.1.0"

__all__ = [
    "AnomalyResult",
    "ForecastError",
    "ForecastPoint",
    "ForecastResult",
    "InsufficientDataError",
    "MalformedInputError",
    "Observation",
    "Severity",
    "TrendAnalysis",
    "TrendDirection",
    "analyze_cost_trends",
    "detect_anomaly",
    "generate_forecast",
]
