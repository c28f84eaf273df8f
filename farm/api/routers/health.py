# farm/api/routers/health.py

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from farm.api.dependencies import get_metrics
from farm.config.settings import get_settings
from farm.observability.metrics import MetricsCollector

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check with correlation ID from request state."""
    settings = get_settings()
    return {
        "status": "ok",
        "correlation_id": request.state.correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }


@router.get("/metrics")
async def metrics(collector: Annotated[MetricsCollector, Depends(get_metrics)]):
    return collector.export_metrics()
