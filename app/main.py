"""Cost Forecast Service - FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from costforecast.config import get_settings
from costforecast.features import get_reader
from app.api import forecast_router, health_router
from app.api.routes import set_reader

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Selects the cost record reader on startup.
    """
    set_reader(get_reader())
    logger.info("Cost forecast service started")

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="Cost Forecast Service",
        description=(
            "Daily cost forecasting and anomaly detection for the FinOps cost panel. "
            "Fits a linear trend to daily costs, projects it forward with 95% "
            "bounds and flags days that deviate from their recent history."
        ),
        version=settings.service_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(forecast_router, prefix=settings.api_prefix)

    return app


# Application instance
app = create_app()


@app.get("/")
async def root() -> dict:
    """Root endpoint with service information."""
    settings = get_settings()
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "algorithm_version": settings.algorithm_version,
        "description": "Cost forecasting and anomaly detection",
        "status": "operational",
    }
