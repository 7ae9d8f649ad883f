"""Interface for cost anomaly detectors."""

from abc import ABC, abstractmethod
from typing import Iterator, Sequence

from costforecast.models.anomaly_result import AnomalyResult


class AnomalyDetector(ABC):
    """Abstract interface for anomaly detection algorithms.

    All implementations MUST be:
    - Deterministic: Same inputs produce identical outputs
    - Pure: No side effects, no external state
    - Explainable: Results include deviation context
    - Leak-free: The judged value is never part of its own baseline
    """

    @property
    @abstractmethod
    def threshold(self) -> float:
        """Get the score above which a value is anomalous."""
        ...

    @abstractmethod
    def detect(self, value: float, window: Sequence[float]) -> AnomalyResult:
        """Judge a single value against a historical window.

        Args:
            value: The value under test
            window: Prior values forming the baseline (excludes ``value``)

        Returns:
            The anomaly result, flagged or not
        """
        ...

    def detect_series(
        self,
        values: Sequence[float],
        min_history: int = 7,
        window_size: int = 30,
    ) -> Iterator[tuple[int, AnomalyResult]]:
        """Judge every value of a series against the values preceding it.

        Args:
            values: Chronologically ordered series
            min_history: Number of leading values that are never judged
            window_size: Maximum number of prior values in each baseline

        Yields:
            (index, result) for every judged value, flagged or not
        """
        start = max(min_history, 1)
        for index in range(start, len(values)):
            window = values[max(0, index - window_size):index]
            yield index, self.detect(values[index], window)
