"""Baseline computation module."""

from costforecast.baselines.interface import BaselineCalculator
from costforecast.baselines.statistical import (
    StatisticalBaselineCalculator,
    compute_deviation_percentage,
    compute_z_score,
)

__all__ = [
    "BaselineCalculator",
    "StatisticalBaselineCalculator",
    "compute_deviation_percentage",
    "compute_z_score",
]
