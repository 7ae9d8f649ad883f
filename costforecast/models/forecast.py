"""Forecast and trend analysis result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from costforecast.models.observation import ForecastPoint


class TrendDirection(str, Enum):
    """Direction of the fitted cost trend."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class ForecastResult:
    """Forecast series plus summary figures for the cost panel.

    ``forecast`` holds the historical reconstruction followed by the
    forecast horizon. ``total_predicted`` only sums the horizon.
    """

    forecast: list[ForecastPoint]
    trend: TrendDirection
    confidence: float  # 0-100, from R-squared
    total_predicted: float
    anomalies: list[ForecastPoint] = field(default_factory=list)
    slope: float = 0.0
    intercept: float = 0.0
    insufficient_data: bool = False

    def __post_init__(self) -> None:
        """Validate forecast result constraints."""
        if not 0.0 <= self.confidence <= 100.0:
            raise ValueError("Confidence must be between 0 and 100")

    @property
    def history(self) -> list[ForecastPoint]:
        """Get the historical reconstruction part of the series."""
        return [p for p in self.forecast if not p.is_forecast]

    @property
    def horizon(self) -> list[ForecastPoint]:
        """Get the future part of the series."""
        return [p for p in self.forecast if p.is_forecast]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "forecast": [p.to_dict() for p in self.forecast],
            "trend": self.trend.value,
            "confidence": self.confidence,
            "total_predicted": self.total_predicted,
            "anomalies": [p.to_dict() for p in self.anomalies],
            "slope": self.slope,
            "intercept": self.intercept,
            "insufficient_data": self.insufficient_data,
        }


@dataclass(frozen=True)
class TrendAnalysis:
    """Period-over-period cost movement with readable insights.

    A change is None when there is not enough history to compare two full
    periods.
    """

    average_daily_cost: float
    week_over_week_change: float | None
    month_over_month_change: float | None
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "average_daily_cost": self.average_daily_cost,
            "week_over_week_change": self.week_over_week_change,
            "month_over_month_change": self.month_over_month_change,
            "insights": list(self.insights),
        }
