from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from arbbot_analytics.domain.entities.liquidity import (
    LiquidityObservation,
    LiquidityPairAggregate,
    LiquidityStats,
)
from arbbot_analytics.infrastructure.db.mappers.coercion import (
    to_bool,
    to_datetime_or_none,
    to_decimal,
    to_decimal_or_none,
    to_float_or_none,
    to_int,
    to_int_or_none,
)


def map_row_to_pair_aggregate(row: Mapping[str, Any]) -> LiquidityPairAggregate:
    return LiquidityPairAggregate(
        source_avatar=row["source_avatar"],
        target_avatar=row["target_avatar"],
        observation_count=to_int(row["observation_count"]),
        avg_liquidity=to_decimal_or_none(row["avg_liquidity"]),
        max_liquidity=to_decimal_or_none(row["max_liquidity"]),
        min_liquidity=to_decimal_or_none(row["min_liquidity"]),
        success_rate=to_float_or_none(row["success_rate"]),
        avg_edge_score=to_decimal_or_none(row["avg_edge_score"]),
        last_observation=to_datetime_or_none(row["last_observation"]),
        avg_source_price=to_decimal_or_none(row["avg_source_price"]),
        avg_target_price=to_decimal_or_none(row["avg_target_price"]),
        avg_price_ratio=to_decimal_or_none(row["avg_price_ratio"]),
        liquidity_variance=to_decimal_or_none(row.get("liquidity_variance")),
    )


def map_row_to_liquidity_observation(row: Mapping[str, Any]) -> LiquidityObservation:
    return LiquidityObservation(
        timestamp=to_datetime_or_none(row["timestamp"]),
        measured_liquidity=to_decimal(row["measured_liquidity"]),
        required_amount=to_decimal_or_none(row["required_amount"]),
        success=to_bool(row["success"]),
        edge_score=to_decimal_or_none(row["edge_score"]),
        failure_reason=row["failure_reason"],
        execution_time_ms=to_int_or_none(row["execution_time_ms"]),
        source_token_price=to_decimal_or_none(row["source_token_price"]),
        target_token_price=to_decimal_or_none(row["target_token_price"]),
        ref_token=row["ref_token"],
    )


def map_row_to_liquidity_stats(row: Mapping[str, Any]) -> LiquidityStats:
    return LiquidityStats(
        total_observations=to_int(row["total_observations"]),
        unique_source_avatars=to_int(row["unique_source_avatars"]),
        unique_target_avatars=to_int(row["unique_target_avatars"]),
        unique_pairs=to_int(row["unique_pairs"]),
        avg_liquidity=to_decimal_or_none(row["avg_liquidity"]),
        max_liquidity=to_decimal_or_none(row["max_liquidity"]),
        overall_success_rate=to_float_or_none(row["overall_success_rate"]),
        zero_liquidity_rate=to_float_or_none(row["zero_liquidity_rate"]),
    )
