"""Period-over-period cost trend analysis with readable insights."""

import logging
import math
from typing import Sequence

from costforecast.config.settings import Settings, get_settings
from costforecast.detectors.interface import AnomalyDetector
from costforecast.detectors.zscore_detector import ZScoreAnomalyDetector
from costforecast.forecasting.generator import HistoryInput, normalize_history
from costforecast.models.forecast import TrendAnalysis

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MONTH_DAYS = 30

# Baseline for the latest-day check: the days before the most recent week
_RECENT_BASELINE = slice(-MONTH_DAYS, -WEEK_DAYS)

# Leading markers: ⚠️ warning, ✅ improvement, 📈 monthly growth, 🔍 anomaly
NORMAL_INSIGHT = "✨ Costs are trending normally"
NO_DATA_INSIGHT = "Not enough cost history to analyze trends"


def period_change(values: Sequence[float], period: int) -> float | None:
    """Percent change of the last ``period`` values against the ones before.

    Returns None unless two full periods are available and the earlier
    period has a non-zero average.
    """
    if len(values) < 2 * period:
        return None
    current = math.fsum(values[-period:]) / period
    previous = math.fsum(values[-2 * period:-period]) / period
    if previous == 0:
        return None
    return (current - previous) / previous * 100


class TrendAnalyzer:
    """Summarizes how daily costs moved over the last week and month."""

    def __init__(
        self,
        detector: AnomalyDetector | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._detector = detector or ZScoreAnomalyDetector(
            threshold=self._settings.anomaly.z_score_threshold
        )

    def analyze(self, historical_data: HistoryInput) -> TrendAnalysis:
        """Analyze cost history.

        Args:
            historical_data: Daily costs sorted ascending by date; 60 days
                give every figure, shorter histories leave changes as None

        Returns:
            Average cost, week/month changes and insights
        """
        values = [float(o.actual) for o in normalize_history(historical_data)]
        if not values:
            return TrendAnalysis(
                average_daily_cost=0.0,
                week_over_week_change=None,
                month_over_month_change=None,
                insights=[NO_DATA_INSIGHT],
            )

        average = math.fsum(values) / len(values)
        week_change = period_change(values, WEEK_DAYS)
        month_change = period_change(values, MONTH_DAYS)

        config = self._settings.forecast
        insights: list[str] = []

        if week_change is not None:
            if week_change > config.week_change_alert:
                insights.append(f"⚠️ Costs increased {week_change:.1f}% this week")
            elif week_change < -config.week_change_alert:
                insights.append(f"✅ Costs decreased {abs(week_change):.1f}% this week")

        if month_change is not None and month_change > config.month_change_alert:
            insights.append(f"📈 Significant monthly increase: {month_change:.1f}%")

        baseline = values[_RECENT_BASELINE]
        if baseline:
            latest = self._detector.detect(values[-1], baseline)
            if latest.is_anomaly:
                insights.append(f"🔍 {latest.reason}")
        else:
            logger.debug("Skipping latest-day anomaly check, %d days of history", len(values))

        if not insights:
            insights.append(NORMAL_INSIGHT)

        return TrendAnalysis(
            average_daily_cost=average,
            week_over_week_change=week_change,
            month_over_month_change=month_change,
            insights=insights,
        )


def analyze_cost_trends(
    historical_data: HistoryInput,
    detector: AnomalyDetector | None = None,
    settings: Settings | None = None,
) -> TrendAnalysis:
    """Analyze week-over-week and month-over-month cost movement."""
    return TrendAnalyzer(detector=detector, settings=settings).analyze(historical_data)
