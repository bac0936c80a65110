"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP resort_booking_submissions_total Booking form submissions by outcome
        # TYPE resort_booking_submissions_total counter
        resort_booking_submissions_total{outcome="created"} 12.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """Return metrics in Prometheus text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
