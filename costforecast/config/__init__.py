"""Forecast configuration module."""

from costforecast.config.settings import (
    AnomalyConfig,
    CostSourceConfig,
    ForecastConfig,
    Settings,
    configure,
    get_settings,
    reset_settings,
)

__all__ = [
    "AnomalyConfig",
    "CostSourceConfig",
    "ForecastConfig",
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",
]
