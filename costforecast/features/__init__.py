"""Cost record ingestion module."""

from costforecast.features.cost_reader import (
    CostAPIReader,
    CostFileReader,
    CostRecordReader,
    DataWindow,
    InMemoryCostReader,
    aggregate_daily_costs,
    get_reader,
)

__all__ = [
    "CostAPIReader",
    "CostFileReader",
    "CostRecordReader",
    "DataWindow",
    "InMemoryCostReader",
    "aggregate_daily_costs",
    "get_reader",
]
