from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from arbbot_analytics.api.schemas.service import (
    EndpointMapResponse,
    HealthResponse,
    ServiceDescriptorResponse,
)

SERVICE_NAME = "Arbbot Analytics API"
SERVICE_VERSION = "1.0.0"

ENDPOINTS = EndpointMapResponse(
    health="/health",
    snapshots="/api/snapshots",
    snapshot="/api/snapshot/:id",
    latestSnapshot="/api/latest-snapshot",
    liquidityHeatmap="/api/liquidity/heatmap",
    topPairs="/api/liquidity/top-pairs",
    timeseries="/api/liquidity/timeseries",
    stats="/api/liquidity/stats",
)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/", response_model=ServiceDescriptorResponse)
def describe_service():
    return ServiceDescriptorResponse(
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        endpoints=ENDPOINTS,
    )
