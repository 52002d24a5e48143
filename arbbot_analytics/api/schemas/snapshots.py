from __future__ import annotations

from pydantic import BaseModel, Field


class SnapshotSummaryResponse(BaseModel):
    snapshot_id: int
    token_count: int
    timestamp: str | None = Field(None, description="Earliest capture time in the snapshot.")


class SnapshotListResponse(BaseModel):
    snapshots: list[SnapshotSummaryResponse]
    total: int
    limit: int
    offset: int


class SnapshotStatisticsResponse(BaseModel):
    avg_price: float
    max_price: float
    min_price: float
    median_price: float


class SnapshotTokenResponse(BaseModel):
    token: str
    pool_id: str
    pool_type: str
    price: str = Field(..., description="Raw fixed-point price scaled by 10^18.")
    price_formatted: str = Field(..., description="Price divided by 10^18, 6 decimal places.")
    ref_token: str
    swap_amount: float | None = None


class SnapshotDetailResponse(BaseModel):
    snapshot_id: int
    timestamp: str | None
    token_count: int
    statistics: SnapshotStatisticsResponse
    tokens: list[SnapshotTokenResponse]
