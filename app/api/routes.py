"""Forecast API routes."""

from datetime import date, datetime, timedelta, timezone
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from costforecast.config import get_settings
from costforecast.detectors import detect_anomaly
from costforecast.errors import ForecastError
from costforecast.features import (
    CostRecordReader,
    DataWindow,
    InMemoryCostReader,
    aggregate_daily_costs,
)
from costforecast.forecasting import analyze_cost_trends, generate_forecast
from costforecast.models import (
    AnomalyResult,
    ForecastPoint,
    ForecastResult,
    Observation,
    TrendAnalysis,
)

router = APIRouter(prefix="/forecast", tags=["Forecast"])

# Reader instance (will be configured in main.py)
_reader: CostRecordReader | None = None


def get_reader() -> CostRecordReader:
    """Get the cost record reader instance."""
    global _reader
    if _reader is None:
        _reader = InMemoryCostReader()
    return _reader


def set_reader(reader: CostRecordReader) -> None:
    """Set the cost record reader instance."""
    global _reader
    _reader = reader


def tomorrow() -> date:
    """First forecast day when anchoring to the wall clock (UTC)."""
    return datetime.now(timezone.utc).date() + timedelta(days=1)


# --- Request/Response Models ---


class HistoryPoint(BaseModel):
    """One day of cost history."""

    date: date
    actual: float = Field(..., ge=0, description="Total cost for the day")


class ForecastRequest(BaseModel):
    """Request model for a forecast."""

    history: list[HistoryPoint] = Field(..., description="Daily costs, ascending by date")
    days_to_forecast: int = Field(default=30, ge=0, le=365)
    anchor: Literal["today", "history"] = Field(
        default="today",
        description="Start the horizon tomorrow, or the day after the last observation",
    )


class TrendRequest(BaseModel):
    """Request model for trend analysis."""

    history: list[HistoryPoint]


class AnomalyCheckRequest(BaseModel):
    """Request model for a single anomaly check."""

    value: float
    window: list[float] = Field(..., min_length=1, description="Prior values, oldest first")
    threshold: float = Field(default=2.5, gt=0)


class AnomalyResultResponse(BaseModel):
    """Response model for an anomaly check."""

    is_anomaly: bool
    score: float | None  # None when unbounded
    severity: str
    reason: str
    expected_value: float
    actual_value: float
    deviation: float | None

    @classmethod
    def from_result(cls, result: AnomalyResult) -> "AnomalyResultResponse":
        """Create response from domain model."""
        return cls(**result.to_dict())


class ForecastPointResponse(BaseModel):
    """Response model for a point of the forecast series."""

    date: str
    actual: float | None
    predicted: float | None
    lower_bound: float | None
    upper_bound: float | None
    is_anomaly: bool
    detection: AnomalyResultResponse | None = None

    @classmethod
    def from_point(cls, point: ForecastPoint) -> "ForecastPointResponse":
        """Create response from domain model."""
        return cls(
            date=point.date.isoformat(),
            actual=point.actual,
            predicted=point.predicted,
            lower_bound=point.lower_bound,
            upper_bound=point.upper_bound,
            is_anomaly=point.is_anomaly,
            detection=(
                AnomalyResultResponse.from_result(point.detection)
                if point.detection else None
            ),
        )


class ForecastResponse(BaseModel):
    """Response model for a forecast."""

    forecast: list[ForecastPointResponse]
    trend: str
    confidence: float
    total_predicted: float
    anomalies: list[ForecastPointResponse]
    insufficient_data: bool

    @classmethod
    def from_result(cls, result: ForecastResult) -> "ForecastResponse":
        """Create response from domain model."""
        return cls(
            forecast=[ForecastPointResponse.from_point(p) for p in result.forecast],
            trend=result.trend.value,
            confidence=result.confidence,
            total_predicted=result.total_predicted,
            anomalies=[ForecastPointResponse.from_point(p) for p in result.anomalies],
            insufficient_data=result.insufficient_data,
        )


class TrendAnalysisResponse(BaseModel):
    """Response model for trend analysis."""

    average_daily_cost: float
    week_over_week_change: float | None
    month_over_month_change: float | None
    insights: list[str]

    @classmethod
    def from_analysis(cls, analysis: TrendAnalysis) -> "TrendAnalysisResponse":
        """Create response from domain model."""
        return cls(**analysis.to_dict())


class LiveForecastResponse(BaseModel):
    """Response model for a forecast over ingested cost records."""

    history_days: int
    forecast: ForecastResponse
    trends: TrendAnalysisResponse


def _observations(history: list[HistoryPoint]) -> list[Observation]:
    return [Observation(date=p.date, actual=p.actual) for p in history]


# --- Endpoints ---


@router.post("", response_model=ForecastResponse)
async def create_forecast(request: ForecastRequest) -> ForecastResponse:
    """Forecast daily costs over the requested horizon.

    Histories with fewer than two days return an ``insufficient_data``
    result instead of an error.
    """
    start_date = tomorrow() if request.anchor == "today" else None
    try:
        result = generate_forecast(
            _observations(request.history),
            days_to_forecast=request.days_to_forecast,
            start_date=start_date,
        )
    except ForecastError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ForecastResponse.from_result(result)


@router.post("/trends", response_model=TrendAnalysisResponse)
async def analyze_trends(request: TrendRequest) -> TrendAnalysisResponse:
    """Week-over-week and month-over-month cost movement with insights."""
    try:
        analysis = analyze_cost_trends(_observations(request.history))
    except ForecastError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TrendAnalysisResponse.from_analysis(analysis)


@router.post("/anomalies/check", response_model=AnomalyResultResponse)
async def check_anomaly(request: AnomalyCheckRequest) -> AnomalyResultResponse:
    """Judge a single value against a window of prior values."""
    try:
        result = detect_anomaly(request.value, request.window, request.threshold)
    except ForecastError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AnomalyResultResponse.from_result(result)


@router.get("/live", response_model=LiveForecastResponse)
async def live_forecast(
    days_to_forecast: int | None = Query(default=None, ge=0, le=365),
    reader: CostRecordReader = Depends(get_reader),
) -> LiveForecastResponse:
    """Forecast from cost records pulled from the configured cost source.

    Records are summed per day and the most recent configured number of
    days is used as history. An unavailable source yields an empty history.
    """
    settings = get_settings()
    history_days = settings.forecast.history_days
    horizon = (
        days_to_forecast if days_to_forecast is not None
        else settings.forecast.days_to_forecast
    )

    window = DataWindow(start_date=tomorrow() - timedelta(days=history_days + 1))
    history = aggregate_daily_costs(reader.read_cost_records(window), history_days)

    result = generate_forecast(history, days_to_forecast=horizon, start_date=tomorrow())
    analysis = analyze_cost_trends(history)

    return LiveForecastResponse(
        history_days=len(history),
        forecast=ForecastResponse.from_result(result),
        trends=TrendAnalysisResponse.from_analysis(analysis),
    )
