"""Health check and metrics endpoints."""
from datetime import datetime, timezone

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import BaseModel, Field

from mastergym import __version__
from mastergym.config.settings import get_settings
from mastergym.core.metrics import get_metrics
from mastergym.db.database import check_database

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="healthy or unhealthy")
    app: str
    version: str
    database: bool
    timestamp: str


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    database_ok = await check_database()
    return HealthCheckResponse(
        status="healthy" if database_ok else "unhealthy",
        app=get_settings().app_name,
        version=__version__,
        database=database_ok,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/metrics")
async def metrics():
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)
