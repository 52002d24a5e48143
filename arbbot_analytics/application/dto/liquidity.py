from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from arbbot_analytics.domain.entities.liquidity import LiquidityPairAggregate, LiquidityStats


@dataclass(frozen=True)
class GetLiquidityHeatmapInput:
    hours: str | None = None
    min_observations: str | None = None


@dataclass(frozen=True)
class GetLiquidityHeatmapOutput:
    time_range_hours: int
    min_observations: int
    pair_count: int
    pairs: list[LiquidityPairAggregate]


@dataclass(frozen=True)
class GetTopPairsInput:
    limit: str | None = None
    sort: str | None = None
    hours: str | None = None


@dataclass(frozen=True)
class GetTopPairsOutput:
    sort_by: str
    limit: int
    time_range_hours: int
    pairs: list[LiquidityPairAggregate]


@dataclass(frozen=True)
class GetLiquidityTimeseriesInput:
    source: str | None = None
    target: str | None = None
    hours: str | None = None


@dataclass(frozen=True)
class LiquidityObservationPointOutput:
    timestamp: datetime
    measured_liquidity: Decimal
    required_amount: Decimal | None
    success: bool
    edge_score: Decimal | None
    failure_reason: str | None
    execution_time_ms: int | None
    ma10_liquidity: float
    source_token_price: Decimal | None
    target_token_price: Decimal | None
    price_ratio: float | None
    ref_token: str | None


@dataclass(frozen=True)
class GetLiquidityTimeseriesOutput:
    source_avatar: str
    target_avatar: str
    time_range_hours: int
    observation_count: int
    observations: list[LiquidityObservationPointOutput]


@dataclass(frozen=True)
class GetLiquidityStatsInput:
    hours: str | None = None


@dataclass(frozen=True)
class GetLiquidityStatsOutput:
    time_range_hours: int
    stats: LiquidityStats
