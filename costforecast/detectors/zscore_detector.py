"""Z-score cost anomaly detector implementation."""

from typing import Sequence

from costforecast.baselines.statistical import (
    StatisticalBaselineCalculator,
    compute_deviation_percentage,
    compute_z_score,
)
from costforecast.detectors.interface import AnomalyDetector
from costforecast.models.anomaly_result import AnomalyResult, Severity

DEFAULT_THRESHOLD = 2.5

# Evaluated high to low, first match wins
_SEVERITY_LEVELS = (
    (4.0, Severity.CRITICAL),
    (3.0, Severity.HIGH),
    (2.5, Severity.MEDIUM),
)


def classify_severity(score: float) -> Severity:
    """Map an absolute z-score to a severity level."""
    for bound, severity in _SEVERITY_LEVELS:
        if score > bound:
            return severity
    return Severity.LOW


class ZScoreAnomalyDetector(AnomalyDetector):
    """Detects anomalous daily costs using the z-score of a prior window.

    Algorithm:
    1. Compute mean and population stdev of the window
    2. score = |value - mean| / stdev
    3. Flag the value when score > threshold

    A window without variance is handled explicitly: a value equal to the
    window is normal, any other value is a critical anomaly.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        """Initialize the z-score detector.

        Args:
            threshold: Number of standard deviations for an anomaly
        """
        self._threshold = threshold
        self._calculator = StatisticalBaselineCalculator()

    @property
    def threshold(self) -> float:
        """Get the score above which a value is anomalous."""
        return self._threshold

    def detect(self, value: float, window: Sequence[float]) -> AnomalyResult:
        """Judge a single value against a historical window.

        Args:
            value: The value under test
            window: Prior values forming the baseline (excludes ``value``)

        Returns:
            The anomaly result

        Raises:
            InsufficientDataError: If the window is empty
        """
        baseline = self._calculator.compute(window)
        mean = baseline.mean

        if baseline.is_constant:
            # Compare against the window itself, the float mean may be off by an ulp
            if value == baseline.min_value:
                score = 0.0
                deviation = 0.0
            else:
                score = float("inf")
                deviation = compute_deviation_percentage(value, mean)
        else:
            score = abs(compute_z_score(value, mean, baseline.std))
            deviation = compute_deviation_percentage(value, mean)

        is_anomaly = score > self._threshold
        severity = Severity.CRITICAL if score == float("inf") else classify_severity(score)

        return AnomalyResult(
            is_anomaly=is_anomaly,
            score=score,
            severity=severity,
            reason=self._describe(is_anomaly, value, mean, deviation),
            expected_value=mean,
            actual_value=float(value),
            deviation=deviation,
        )

    @staticmethod
    def _describe(is_anomaly: bool, value: float, mean: float, deviation: float) -> str:
        if not is_anomaly:
            return "Normal behavior"
        if value > mean:
            if mean == 0:
                return "Cost spike detected: spend appeared after a zero-cost baseline"
            return f"Cost spike detected: {abs(deviation):.1f}% above expected"
        return f"Unusual cost drop: {abs(deviation):.1f}% below expected"


def detect_anomaly(
    value: float,
    window: Sequence[float],
    threshold: float = DEFAULT_THRESHOLD,
) -> AnomalyResult:
    """Judge a value against a historical window with a z-score detector."""
    return ZScoreAnomalyDetector(threshold=threshold).detect(value, window)
