"""Forecast generation and trend analysis module."""

from costforecast.forecasting.generator import (
    ForecastGenerator,
    generate_forecast,
    normalize_history,
)
from costforecast.forecasting.trend_analyzer import (
    TrendAnalyzer,
    analyze_cost_trends,
    period_change,
)

__all__ = [
    "ForecastGenerator",
    "TrendAnalyzer",
    "analyze_cost_trends",
    "generate_forecast",
    "normalize_history",
    "period_change",
]
