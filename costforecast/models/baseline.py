"""Baseline models for statistical computations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BaselineMetrics:
    """Statistical baseline of a window of daily costs.

    Used as the reference point when judging a single day.
    """

    mean: float
    std: float  # Population standard deviation
    min_value: float
    max_value: float
    sample_count: int

    def __post_init__(self) -> None:
        """Validate baseline metrics constraints."""
        if self.std < 0:
            raise ValueError("Standard deviation cannot be negative")
        if self.sample_count < 0:
            raise ValueError("Sample count cannot be negative")
        if self.min_value > self.max_value:
            raise ValueError("Min value cannot be greater than max value")

    @property
    def is_constant(self) -> bool:
        """Check if the window has no variance."""
        return self.std == 0
