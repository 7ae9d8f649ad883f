"""Daily cost observation and forecast point models."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from costforecast.errors import MalformedInputError
from costforecast.models.anomaly_result import AnomalyResult


def parse_date(value: Any) -> date:
    """Parse a calendar date from a date object or an ISO 8601 string.

    Longer ISO timestamps ("2024-05-01T00:00:00Z") are truncated to their
    date part.
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    raise MalformedInputError(f"Invalid calendar date: {value!r}")


@dataclass(frozen=True)
class Observation:
    """One day's total cost.

    Callers supply observations sorted ascending by date with no duplicate
    dates. Observations are never mutated by the core.
    """

    date: date
    actual: float

    def __post_init__(self) -> None:
        """Validate observation constraints."""
        if isinstance(self.actual, bool) or not isinstance(self.actual, (int, float)):
            raise MalformedInputError(
                f"Cost for {self.date} must be a number, got {type(self.actual).__name__}"
            )
        if not math.isfinite(self.actual):
            raise MalformedInputError(f"Cost for {self.date} must be finite")
        if self.actual < 0:
            raise MalformedInputError(f"Cost for {self.date} cannot be negative")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"date": self.date.isoformat(), "actual": self.actual}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Observation":
        """Create an Observation from a dictionary."""
        try:
            raw_date = data["date"]
            actual = data["actual"]
        except KeyError as e:
            raise MalformedInputError(f"Observation is missing field {e}") from e
        return cls(date=parse_date(raw_date), actual=actual)


@dataclass(frozen=True)
class ForecastPoint:
    """A point of the forecast series.

    Historical points carry the observed ``actual`` value. Points in the
    forecast horizon have ``actual=None``: there is no observation for them,
    which is not the same as a cost of zero.
    """

    date: date
    actual: float | None
    predicted: float | None = None
    lower_bound: float | None = None
    upper_bound: float | None = None
    is_anomaly: bool = False
    detection: AnomalyResult | None = None  # Set for flagged historical days

    @property
    def is_forecast(self) -> bool:
        """Check if this point lies in the forecast horizon."""
        return self.actual is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "actual": self.actual,
            "predicted": self.predicted,
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
            "is_anomaly": self.is_anomaly,
            "detection": self.detection.to_dict() if self.detection else None,
        }
