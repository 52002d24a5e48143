from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class EndpointMapResponse(BaseModel):
    health: str
    snapshots: str
    snapshot: str
    latestSnapshot: str
    liquidityHeatmap: str
    topPairs: str
    timeseries: str
    stats: str


class ServiceDescriptorResponse(BaseModel):
    name: str
    version: str
    endpoints: EndpointMapResponse
