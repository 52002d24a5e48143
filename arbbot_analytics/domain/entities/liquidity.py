from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class LiquidityPairAggregate:
    source_avatar: str
    target_avatar: str
    observation_count: int
    avg_liquidity: Decimal | None
    max_liquidity: Decimal | None
    min_liquidity: Decimal | None
    success_rate: float | None
    avg_edge_score: Decimal | None
    last_observation: datetime | None
    avg_source_price: Decimal | None
    avg_target_price: Decimal | None
    avg_price_ratio: Decimal | None
    liquidity_variance: Decimal | None = None


@dataclass(frozen=True)
class LiquidityObservation:
    timestamp: datetime
    measured_liquidity: Decimal
    required_amount: Decimal | None
    success: bool
    edge_score: Decimal | None
    failure_reason: str | None
    execution_time_ms: int | None
    source_token_price: Decimal | None
    target_token_price: Decimal | None
    ref_token: str | None


@dataclass(frozen=True)
class LiquidityStats:
    total_observations: int
    unique_source_avatars: int
    unique_target_avatars: int
    unique_pairs: int
    avg_liquidity: Decimal | None
    max_liquidity: Decimal | None
    overall_success_rate: float | None
    zero_liquidity_rate: float | None
