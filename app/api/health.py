"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from costforecast.config import get_settings

router = APIRouter(tags=["Health"])


def _status(status: str) -> dict:
    settings = get_settings()
    return {
        "status": status,
        "service": settings.service_name,
        "algorithm_version": settings.algorithm_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return _status("healthy")


@router.get("/ready")
async def readiness_check() -> dict:
    """Readiness probe endpoint.

    The forecaster is stateless, so it is ready as soon as it is alive.
    Reports whether live cost ingestion is switched on.
    """
    body = _status("ready")
    body["cost_source_enabled"] = get_settings().cost_source.enabled
    return body


@router.get("/live")
async def liveness_check() -> dict:
    """Liveness probe endpoint."""
    return _status("alive")
