"""Cost forecast service configuration settings."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AnomalyConfig:
    """Thresholds for the rolling z-score anomaly pass."""

    z_score_threshold: float = 2.5  # Standard deviations to flag a day
    window_days: int = 30  # Prior days used as the baseline
    min_history_days: int = 7  # Days skipped before the first check


@dataclass(frozen=True)
class ForecastConfig:
    """Forecast horizon and trend classification parameters."""

    days_to_forecast: int = 30
    history_days: int = 60  # Days of history pulled for live forecasts
    trend_threshold_ratio: float = 0.01  # Slope relative to mean
    interval_z: float = 1.96  # 95% two-sided bound

    # Trend analyzer insight thresholds (percent)
    week_change_alert: float = 10.0
    month_change_alert: float = 15.0


@dataclass(frozen=True)
class CostSourceConfig:
    """Where live cost records are read from.

    DESIGN RULES:
    - HTTP GET only (read-only)
    - Fail-open: return empty on any error
    - Short timeout, no retries
    """

    enabled: bool = True
    base_url: str = "http://localhost:3000"
    endpoint: str = "/api/finops/costs"
    timeout_ms: int = 2000
    data_dir: str | None = None  # For file-based reading


@dataclass(frozen=True)
class Settings:
    """Global settings for the forecast service."""

    # Algorithm versioning - MUST be updated when forecasting logic changes
    algorithm_version: str = "1.0.0"

    service_name: str = "cost-forecast-service"
    service_version: str = "0.1.0"

    anomaly: AnomalyConfig = field(default_factory=AnomalyConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    cost_source: CostSourceConfig = field(default_factory=CostSourceConfig)

    # API settings
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            algorithm_version=os.getenv("ALGORITHM_VERSION", "1.0.0"),
            anomaly=AnomalyConfig(
                z_score_threshold=float(os.getenv("ANOMALY_Z_THRESHOLD", "2.5")),
                window_days=int(os.getenv("ANOMALY_WINDOW_DAYS", "30")),
                min_history_days=int(os.getenv("ANOMALY_MIN_HISTORY_DAYS", "7")),
            ),
            forecast=ForecastConfig(
                days_to_forecast=int(os.getenv("FORECAST_DAYS", "30")),
                history_days=int(os.getenv("FORECAST_HISTORY_DAYS", "60")),
            ),
            cost_source=CostSourceConfig(
                enabled=os.getenv("COST_SOURCE_ENABLED", "true").lower() == "true",
                base_url=os.getenv("COST_SOURCE_URL", "http://localhost:3000"),
                timeout_ms=int(os.getenv("COST_SOURCE_TIMEOUT_MS", "2000")),
                data_dir=os.getenv("COST_DATA_DIR"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Settings) -> None:
    """Configure the global settings (primarily for testing)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to None (for testing)."""
    global _settings
    _settings = None
