"""Health check and metrics endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from intent_resolver import __version__
from intent_resolver.api.dependencies import SettingsDep

router = APIRouter()


@router.get("/health")
async def health_check(settings: SettingsDep) -> dict[str, str]:
    """Report that the service is up."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/metrics")
async def get_metrics() -> Response:
    """Get Prometheus metrics in text format for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
