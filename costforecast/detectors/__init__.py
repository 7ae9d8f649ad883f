"""Anomaly detectors module."""

from costforecast.detectors.interface import AnomalyDetector
from costforecast.detectors.zscore_detector import (
    ZScoreAnomalyDetector,
    classify_severity,
    detect_anomaly,
)

__all__ = [
    "AnomalyDetector",
    "ZScoreAnomalyDetector",
    "classify_severity",
    "detect_anomaly",
]
