"""Prometheus metrics route."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ...core.metrics import METRICS_PATH

router = APIRouter(tags=["Metrics"])


@router.get(METRICS_PATH, include_in_schema=False)
async def metrics() -> Response:
    """Expose collected metrics in the Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
