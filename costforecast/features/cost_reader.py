"""
Cost Record Reader

Read-only access to raw cost records from the operations console, and
aggregation of those records into the daily series the forecaster expects.

DESIGN RULES:
- READ-ONLY access only (HTTP GET)
- Fail-open: return empty on ANY error
- Short timeout, no retries, no backoff
"""

import copy
import json
import logging
import math
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date
from pathlib import Path
from typing import Any, Iterable

import requests

from costforecast.config.settings import get_settings
from costforecast.errors import MalformedInputError
from costforecast.models.observation import Observation, parse_date

logger = logging.getLogger(__name__)


class DataWindow:
    """Date range for cost record queries.

    ``limit`` caps the number of records kept, most recent first.
    """

    def __init__(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ):
        self.start_date = start_date
        self.end_date = end_date
        self.limit = limit


def _most_recent(
    records: list[dict[str, Any]], window: DataWindow | None
) -> list[dict[str, Any]]:
    """Keep the newest ``window.limit`` records, in date order."""
    if not window or not window.limit:
        return records
    # ISO date strings compare chronologically
    ordered = sorted(records, key=lambda r: str(r.get("date", ""))[:10])
    return ordered[-window.limit:]


class CostRecordReader(ABC):
    """
    Abstract base class for cost record readers.

    Records are plain mappings with at least ``date`` and ``cost_usd``.
    """

    @abstractmethod
    def read_cost_records(self, window: DataWindow | None = None) -> list[dict[str, Any]]:
        """Read raw per-resource cost records."""
        ...


class CostAPIReader(CostRecordReader):
    """
    Read cost records from the console's cost records endpoint.

    Returns an empty list when the source is disabled or on any
    network, HTTP or payload error.
    """

    def __init__(self, base_url: str | None = None, endpoint: str | None = None):
        source = get_settings().cost_source
        self.base_url = base_url or source.base_url
        self.endpoint = endpoint or source.endpoint

    @staticmethod
    def _build_params(window: DataWindow | None) -> dict[str, str]:
        """Build query parameters from DataWindow.

        The console filters on ``startDate`` and ``endDate`` only.
        """
        params: dict[str, str] = {}
        if window:
            if window.start_date:
                params["startDate"] = window.start_date.isoformat()
            if window.end_date:
                params["endDate"] = window.end_date.isoformat()
        return params

    def read_cost_records(self, window: DataWindow | None = None) -> list[dict[str, Any]]:
        source = get_settings().cost_source
        if not source.enabled:
            return []

        url = f"{self.base_url}{self.endpoint}"
        try:
            response = requests.get(
                url,
                params=self._build_params(window),
                timeout=source.timeout_ms / 1000.0,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("Cost source unavailable at %s: %s", url, e)
            return []
        except ValueError as e:
            # json.JSONDecodeError and requests' JSON errors subclass ValueError
            logger.warning("Cost source returned an invalid payload: %s", e)
            return []

        # Handle wrapped response format
        if isinstance(data, dict) and "data" in data:
            data = data["data"]
        if not isinstance(data, list):
            return []
        return _most_recent(data, window)


class CostFileReader(CostRecordReader):
    """
    Read cost records from an exported JSONL file.

    Useful for offline forecasting and testing.
    """

    FILENAME = "costs.jsonl"

    def __init__(self, data_dir: str | None = None):
        self.data_dir = Path(data_dir or get_settings().cost_source.data_dir or "data")

    def read_cost_records(self, window: DataWindow | None = None) -> list[dict[str, Any]]:
        filepath = self.data_dir / self.FILENAME
        if not filepath.exists():
            return []

        records: list[dict[str, Any]] = []
        try:
            with open(filepath, "r") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        records.append(json.loads(line))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", filepath, e)
            return []

        # ISO date strings compare chronologically
        if window and window.start_date:
            start = window.start_date.isoformat()
            records = [r for r in records if str(r.get("date", ""))[:10] >= start]
        if window and window.end_date:
            end = window.end_date.isoformat()
            records = [r for r in records if str(r.get("date", ""))[:10] <= end]
        return _most_recent(records, window)


class InMemoryCostReader(CostRecordReader):
    """
    In-memory reader for testing.

    Returns deep copies to ensure immutability.
    """

    def __init__(self, records: list[dict[str, Any]] | None = None):
        self._records = copy.deepcopy(records) if records else []

    def read_cost_records(self, window: DataWindow | None = None) -> list[dict[str, Any]]:
        return copy.deepcopy(self._records)


def aggregate_daily_costs(
    records: Iterable[dict[str, Any]],
    history_days: int | None = None,
) -> list[Observation]:
    """Sum raw cost records into one observation per calendar day.

    Records without a parseable date or a finite, non-negative
    ``cost_usd`` are skipped.

    Args:
        records: Raw cost records
        history_days: Keep only the most recent N days (all when None)

    Returns:
        Observations sorted ascending by date
    """
    totals: dict[date, float] = defaultdict(float)
    skipped = 0
    for record in records:
        try:
            day = parse_date(record.get("date"))
            amount = float(record.get("cost_usd"))
        except (MalformedInputError, TypeError, ValueError):
            skipped += 1
            continue
        if not math.isfinite(amount) or amount < 0:
            skipped += 1
            continue
        totals[day] += amount

    if skipped:
        logger.info("Skipped %d malformed cost records", skipped)

    observations = [Observation(date=day, actual=total) for day, total in sorted(totals.items())]
    if history_days is not None:
        observations = observations[-history_days:] if history_days > 0 else []
    return observations


def get_reader() -> CostRecordReader:
    """
    Get the appropriate reader based on configuration.

    Prefers file-based if COST_DATA_DIR is set, otherwise uses the API.
    """
    source = get_settings().cost_source
    if source.data_dir:
        return CostFileReader(source.data_dir)
    return CostAPIReader(source.base_url, source.endpoint)
