"""API module."""

from app.api.health import router as health_router
from app.api.routes import router as forecast_router

__all__ = ["forecast_router", "health_router"]
