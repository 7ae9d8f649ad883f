"""
Cost Record Reader Tests

Covers read-only access to the cost source:
1. Pull-only: No HTTP methods other than GET
2. Fail-open: Cost source unavailable -> empty result
3. Aggregation: Raw records -> one sorted observation per day
"""

import json
from datetime import date, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from costforecast.config import CostSourceConfig, Settings, configure, reset_settings
from costforecast.features import (
    CostAPIReader,
    CostFileReader,
    DataWindow,
    InMemoryCostReader,
    aggregate_daily_costs,
    get_reader,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Use default settings, independent of the environment."""
    configure(Settings())
    yield
    reset_settings()


class TestPullOnlyCompliance:
    """Verify the reader only uses HTTP GET."""

    def test_reader_uses_get_only(self):
        reader_path = (
            Path(__file__).parent.parent / "costforecast" / "features" / "cost_reader.py"
        )
        source = reader_path.read_text().lower()

        for pattern in ["requests.post", "requests.put", "requests.patch", "requests.delete"]:
            assert pattern not in source, f"Found forbidden pattern '{pattern}'"


class TestCostAPIReader:
    """Tests for CostAPIReader."""

    def test_reads_list_payload(self):
        records = [{"date": "2024-01-01", "cost_usd": 5.0}]
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_get.return_value.json.return_value = records

            reader = CostAPIReader("http://console:3000")
            window = DataWindow(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
            result = reader.read_cost_records(window)

        assert result == records
        url = mock_get.call_args.args[0]
        assert url == "http://console:3000/api/finops/costs"
        assert mock_get.call_args.kwargs["params"] == {
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
        }
        assert mock_get.call_args.kwargs["timeout"] == 2.0

    def test_limit_keeps_newest_records(self):
        records = [
            {"date": "2024-01-03", "cost_usd": 3.0},
            {"date": "2024-01-02", "cost_usd": 2.0},
            {"date": "2024-01-01", "cost_usd": 1.0},
        ]
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_get.return_value.json.return_value = {"success": True, "data": records}

            result = CostAPIReader("http://console:3000").read_cost_records(
                DataWindow(limit=2)
            )

        assert [r["date"] for r in result] == ["2024-01-02", "2024-01-03"]
        assert "limit" not in mock_get.call_args.kwargs["params"]

    def test_unwraps_data_envelope(self):
        records = [{"date": "2024-01-01", "cost_usd": 5.0}]
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_get.return_value.json.return_value = {"data": records}

            assert CostAPIReader("http://console:3000").read_cost_records() == records

    def test_non_list_payload_is_empty(self):
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_get.return_value.json.return_value = {"error": "nope"}

            assert CostAPIReader("http://console:3000").read_cost_records() == []

    @pytest.mark.parametrize(
        "error",
        [requests.exceptions.ConnectionError(), requests.exceptions.Timeout()],
    )
    def test_returns_empty_on_network_error(self, error):
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_get.side_effect = error

            assert CostAPIReader("http://nonexistent:9999").read_cost_records() == []

    def test_returns_empty_on_http_error(self):
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_response = MagicMock()
            mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                "500 Server Error"
            )
            mock_get.return_value = mock_response

            assert CostAPIReader("http://console:3000").read_cost_records() == []

    def test_returns_empty_on_invalid_json(self):
        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            mock_get.return_value.json.side_effect = json.JSONDecodeError("", "", 0)

            assert CostAPIReader("http://console:3000").read_cost_records() == []

    def test_disabled_source_makes_no_request(self):
        configure(Settings(cost_source=CostSourceConfig(enabled=False)))

        with patch("costforecast.features.cost_reader.requests.get") as mock_get:
            assert CostAPIReader("http://console:3000").read_cost_records() == []
            mock_get.assert_not_called()


class TestCostFileReader:
    """Tests for CostFileReader."""

    def test_missing_file_is_empty(self):
        assert CostFileReader("/nonexistent/directory").read_cost_records() == []

    def test_reads_and_filters_jsonl(self, tmp_path: Path):
        lines = [
            {"date": "2024-01-01", "cost_usd": 1.0},
            {"date": "2024-01-02T10:00:00Z", "cost_usd": 2.0},
            {"date": "2024-01-03", "cost_usd": 3.0},
        ]
        (tmp_path / "costs.jsonl").write_text(
            "\n".join(json.dumps(line) for line in lines) + "\n\n"
        )

        reader = CostFileReader(str(tmp_path))

        assert len(reader.read_cost_records()) == 3
        window = DataWindow(start_date=date(2024, 1, 2), end_date=date(2024, 1, 2))
        assert reader.read_cost_records(window) == [lines[1]]

    def test_limit_keeps_newest_records(self, tmp_path: Path):
        lines = [{"date": f"2024-01-{day:02d}", "cost_usd": float(day)} for day in (3, 1, 4, 2)]
        (tmp_path / "costs.jsonl").write_text("\n".join(json.dumps(line) for line in lines))

        records = CostFileReader(str(tmp_path)).read_cost_records(DataWindow(limit=2))

        assert [r["cost_usd"] for r in records] == [3.0, 4.0]

    def test_many_records_per_day_keep_latest_days(self, tmp_path: Path):
        """Test that a date-bounded read does not drop the most recent days."""
        start = date(2024, 1, 1)
        with open(tmp_path / "costs.jsonl", "w") as f:
            for offset in range(60):
                day = (start + timedelta(days=offset)).isoformat()
                for resource in range(200):
                    f.write(json.dumps({"date": day, "cost_usd": 1.0, "resource": resource}) + "\n")

        records = CostFileReader(str(tmp_path)).read_cost_records(DataWindow(start_date=start))
        observations = aggregate_daily_costs(records, history_days=60)

        assert len(observations) == 60
        assert observations[-1].date == date(2024, 2, 29)
        assert observations[-1].actual == pytest.approx(200.0)

    def test_invalid_file_is_empty(self, tmp_path: Path):
        (tmp_path / "costs.jsonl").write_text("{not json\n")

        assert CostFileReader(str(tmp_path)).read_cost_records() == []


class TestInMemoryCostReader:
    """Tests for InMemoryCostReader."""

    def test_returns_copies(self):
        records = [{"date": "2024-01-01", "cost_usd": 1.0}]
        reader = InMemoryCostReader(records)

        reader.read_cost_records()[0]["cost_usd"] = 999.0
        records[0]["cost_usd"] = 555.0

        assert reader.read_cost_records() == [{"date": "2024-01-01", "cost_usd": 1.0}]


class TestAggregateDailyCosts:
    """Tests for aggregate_daily_costs."""

    def test_sums_per_day_and_sorts(self):
        records = [
            {"date": "2024-01-02T08:00:00Z", "cost_usd": 4.0},
            {"date": "2024-01-01", "cost_usd": 1.5},
            {"date": "2024-01-02", "cost_usd": 6.0},
            {"date": "2024-01-01T23:59:59Z", "cost_usd": 0.5},
        ]

        observations = aggregate_daily_costs(records)

        assert [(o.date, o.actual) for o in observations] == [
            (date(2024, 1, 1), 2.0),
            (date(2024, 1, 2), 10.0),
        ]

    def test_skips_malformed_records(self):
        records = [
            {"date": "2024-01-01", "cost_usd": 1.0},
            {"date": "yesterday", "cost_usd": 1.0},
            {"cost_usd": 1.0},
            {"date": "2024-01-01", "cost_usd": None},
            {"date": "2024-01-01", "cost_usd": "abc"},
            {"date": "2024-01-01", "cost_usd": -3.0},
            {"date": "2024-01-01", "cost_usd": float("inf")},
        ]

        observations = aggregate_daily_costs(records)

        assert [(o.date, o.actual) for o in observations] == [(date(2024, 1, 1), 1.0)]

    def test_keeps_most_recent_days(self):
        records = [{"date": f"2024-01-{day:02d}", "cost_usd": float(day)} for day in range(1, 11)]

        observations = aggregate_daily_costs(records, history_days=3)

        assert [o.actual for o in observations] == [8.0, 9.0, 10.0]

    def test_zero_history_days(self):
        records = [{"date": "2024-01-01", "cost_usd": 1.0}]
        assert aggregate_daily_costs(records, history_days=0) == []


class TestGetReader:
    """Tests for reader selection."""

    def test_file_reader_when_data_dir_set(self, tmp_path: Path):
        configure(Settings(cost_source=CostSourceConfig(data_dir=str(tmp_path))))

        reader = get_reader()

        assert isinstance(reader, CostFileReader)
        assert reader.data_dir == tmp_path

    def test_api_reader_by_default(self):
        configure(Settings())

        reader = get_reader()

        assert isinstance(reader, CostAPIReader)
        assert reader.base_url == "http://localhost:3000"
