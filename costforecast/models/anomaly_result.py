"""Anomaly detection result models."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity of a cost deviation, derived from its z-score.

    - CRITICAL: more than 4 standard deviations
    - HIGH: more than 3
    - MEDIUM: more than 2.5
    - LOW: anything else
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class AnomalyResult:
    """Outcome of judging one value against a historical window.

    ``score`` is the absolute z-score and is ``inf`` when the window has no
    variance but the value differs from it. ``deviation`` is the signed
    percentage difference from the window mean.
    """

    is_anomaly: bool
    score: float
    severity: Severity
    reason: str
    expected_value: float
    actual_value: float
    deviation: float

    def __post_init__(self) -> None:
        """Validate anomaly result constraints."""
        if math.isnan(self.score) or self.score < 0:
            raise ValueError("Score must be a non-negative number")

    @property
    def is_spike(self) -> bool:
        """Check if the value lies above the expected value."""
        return self.actual_value > self.expected_value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.

        Unbounded scores and deviations are emitted as None.
        """
        return {
            "is_anomaly": self.is_anomaly,
            "score": _finite_or_none(self.score),
            "severity": self.severity.value,
            "reason": self.reason,
            "expected_value": self.expected_value,
            "actual_value": self.actual_value,
            "deviation": _finite_or_none(self.deviation),
        }
