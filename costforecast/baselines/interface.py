"""Interface for baseline calculators."""

from abc import ABC, abstractmethod
from typing import Sequence

from costforecast.models.baseline import BaselineMetrics


class BaselineCalculator(ABC):
    """Abstract interface for baseline computation strategies.

    Implementations must be:
    - Deterministic: Same inputs produce same outputs
    - Pure: No side effects
    """

    @abstractmethod
    def compute(self, values: Sequence[float]) -> BaselineMetrics:
        """Compute baseline metrics from a sequence of values.

        Args:
            values: Sequence of numeric values to compute baseline from

        Returns:
            Computed baseline metrics

        Raises:
            InsufficientDataError: If there are too few values
        """
        ...
