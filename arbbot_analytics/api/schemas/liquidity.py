from __future__ import annotations

from pydantic import BaseModel, Field


class HeatmapPairResponse(BaseModel):
    source_avatar: str
    target_avatar: str
    observation_count: int
    avg_liquidity: float | None = None
    liquidity_variance: float | None = Field(None, description="Sample standard deviation.")
    max_liquidity: float | None = None
    min_liquidity: float | None = None
    success_rate: float | None = None
    avg_edge_score: float | None = None
    last_observation: str | None = None
    avg_source_price: float | None = None
    avg_target_price: float | None = None
    avg_price_ratio: float | None = None


class LiquidityHeatmapResponse(BaseModel):
    time_range_hours: int
    min_observations: int
    pair_count: int
    pairs: list[HeatmapPairResponse]


class TopPairResponse(BaseModel):
    source_avatar: str
    target_avatar: str
    observation_count: int
    avg_liquidity: float | None = None
    max_liquidity: float | None = None
    min_liquidity: float | None = None
    success_rate: float | None = None
    avg_edge_score: float | None = None
    last_successful_trade: str | None = Field(None, description="Latest observation of the pair.")
    avg_source_price: float | None = None
    avg_target_price: float | None = None
    avg_price_ratio: float | None = None


class TopPairsResponse(BaseModel):
    sort_by: str
    limit: int
    time_range_hours: int
    pairs: list[TopPairResponse]


class LiquidityObservationResponse(BaseModel):
    timestamp: str
    measured_liquidity: float
    required_amount: float | None = None
    success: bool
    edge_score: float | None = None
    failure_reason: str | None = None
    execution_time_ms: int | None = None
    ma10_liquidity: float = Field(..., description="Trailing mean of up to 10 observations.")
    source_token_price: float | None = None
    target_token_price: float | None = None
    price_ratio: float | None = None
    ref_token: str | None = None


class LiquidityTimeseriesResponse(BaseModel):
    source_avatar: str
    target_avatar: str
    time_range_hours: int
    observation_count: int
    observations: list[LiquidityObservationResponse]


class LiquidityStatsBodyResponse(BaseModel):
    total_observations: int
    unique_source_avatars: int
    unique_target_avatars: int
    unique_pairs: int
    avg_liquidity: float | None = None
    max_liquidity: float | None = None
    overall_success_rate: float | None = None
    zero_liquidity_rate: float | None = None


class LiquidityStatsResponse(BaseModel):
    time_range_hours: int
    stats: LiquidityStatsBodyResponse
