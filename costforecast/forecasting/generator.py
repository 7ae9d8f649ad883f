"""Cost forecast generation.

Fits a linear trend over the full history, reconstructs the historical
series with confidence bounds, flags anomalous days against a rolling
window of prior days, and extrapolates the trend over a forecast horizon.
"""

import logging
import math
import statistics
from datetime import date, timedelta
from typing import Any, Sequence

from costforecast.config.settings import Settings, get_settings
from costforecast.detectors.interface import AnomalyDetector
from costforecast.detectors.zscore_detector import ZScoreAnomalyDetector
from costforecast.errors import MalformedInputError
from costforecast.models.anomaly_result import AnomalyResult
from costforecast.models.forecast import ForecastResult, TrendDirection
from costforecast.models.observation import ForecastPoint, Observation
from costforecast.trend.estimator import (
    MIN_TREND_SAMPLES,
    classify_trend,
    compute_confidence,
    fit_linear_trend,
)

logger = logging.getLogger(__name__)

HistoryInput = Sequence[Observation | dict[str, Any]]


def normalize_history(historical_data: HistoryInput) -> list[Observation]:
    """Coerce caller input to observations and check date ordering.

    Args:
        historical_data: Observations or ``{"date", "actual"}`` mappings

    Returns:
        Observations in the given order

    Raises:
        MalformedInputError: If a point is invalid or dates are not
            strictly ascending
    """
    observations = [
        point if isinstance(point, Observation) else Observation.from_dict(point)
        for point in historical_data
    ]
    for previous, current in zip(observations, observations[1:]):
        if current.date <= previous.date:
            raise MalformedInputError(
                f"Observations must be sorted by date without duplicates: "
                f"{current.date} follows {previous.date}"
            )
    return observations


class ForecastGenerator:
    """Produces a cost forecast from daily cost history.

    The generator holds configuration only; every call is independent and
    safe to run concurrently.
    """

    def __init__(
        self,
        detector: AnomalyDetector | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the forecast generator.

        Args:
            detector: Detector for the historical anomaly pass
            settings: Settings to use instead of the global ones
        """
        self._settings = settings or get_settings()
        self._detector = detector or ZScoreAnomalyDetector(
            threshold=self._settings.anomaly.z_score_threshold
        )

    def generate(
        self,
        historical_data: HistoryInput,
        days_to_forecast: int | None = None,
        start_date: date | None = None,
    ) -> ForecastResult:
        """Generate a forecast for the next ``days_to_forecast`` days.

        Args:
            historical_data: Daily costs sorted ascending by date
            days_to_forecast: Horizon length; defaults to the configured one
            start_date: Date of the first forecast point; defaults to the
                day after the last observation

        Returns:
            The forecast result. With fewer than two observations the
            result is flagged ``insufficient_data`` and has no horizon.

        Raises:
            MalformedInputError: On invalid observations or a negative horizon
        """
        if days_to_forecast is None:
            days_to_forecast = self._settings.forecast.days_to_forecast
        if days_to_forecast < 0:
            raise MalformedInputError(
                f"days_to_forecast cannot be negative, got {days_to_forecast}"
            )

        observations = normalize_history(historical_data)
        if len(observations) < MIN_TREND_SAMPLES:
            logger.warning(
                "Not enough history to forecast (%d observations)", len(observations)
            )
            return self._insufficient(observations)

        values = [float(o.actual) for o in observations]
        n = len(values)

        trend = fit_linear_trend(values)
        mean = math.fsum(values) / n
        confidence = compute_confidence(values, trend)
        direction = classify_trend(
            trend.slope, mean, self._settings.forecast.trend_threshold_ratio
        )
        interval = self._settings.forecast.interval_z * statistics.pstdev(values)

        detections = self._detect_anomalies(values)

        forecast: list[ForecastPoint] = []
        anomalies: list[ForecastPoint] = []
        for index, observation in enumerate(observations):
            predicted = trend.predict(index)
            detection = detections.get(index)
            point = ForecastPoint(
                date=observation.date,
                actual=observation.actual,
                predicted=predicted,
                lower_bound=max(0.0, predicted - interval),
                upper_bound=max(0.0, predicted + interval),
                is_anomaly=detection is not None,
                detection=detection,
            )
            forecast.append(point)
            if detection is not None:
                anomalies.append(point)

        first_day = start_date or observations[-1].date + timedelta(days=1)
        horizon: list[ForecastPoint] = []
        for offset in range(days_to_forecast):
            raw = trend.predict(n + offset)
            horizon.append(ForecastPoint(
                date=first_day + timedelta(days=offset),
                actual=None,
                predicted=max(0.0, raw),
                lower_bound=max(0.0, raw - interval),
                upper_bound=max(0.0, raw + interval),
            ))

        total_predicted = math.fsum(p.predicted or 0.0 for p in horizon)

        logger.info(
            "Forecast generated: %d history days, %d horizon days, trend=%s, "
            "confidence=%.1f, anomalies=%d",
            n, days_to_forecast, direction.value, confidence, len(anomalies),
        )

        return ForecastResult(
            forecast=forecast + horizon,
            trend=direction,
            confidence=confidence,
            total_predicted=total_predicted,
            anomalies=anomalies,
            slope=trend.slope,
            intercept=trend.intercept,
        )

    def _detect_anomalies(self, values: list[float]) -> dict[int, AnomalyResult]:
        """Run the rolling anomaly pass and keep flagged days by index."""
        config = self._settings.anomaly
        return {
            index: result
            for index, result in self._detector.detect_series(
                values,
                min_history=config.min_history_days,
                window_size=config.window_days,
            )
            if result.is_anomaly
        }

    @staticmethod
    def _insufficient(observations: list[Observation]) -> ForecastResult:
        return ForecastResult(
            forecast=[ForecastPoint(date=o.date, actual=o.actual) for o in observations],
            trend=TrendDirection.STABLE,
            confidence=0.0,
            total_predicted=0.0,
            anomalies=[],
            insufficient_data=True,
        )


def generate_forecast(
    historical_data: HistoryInput,
    days_to_forecast: int = 30,
    start_date: date | None = None,
    detector: AnomalyDetector | None = None,
    settings: Settings | None = None,
) -> ForecastResult:
    """Generate a cost forecast from daily history.

    See ``ForecastGenerator.generate``.
    """
    generator = ForecastGenerator(detector=detector, settings=settings)
    return generator.generate(historical_data, days_to_forecast, start_date)
