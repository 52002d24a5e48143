from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from arbbot_analytics.api.deps import (
    get_liquidity_heatmap_use_case,
    get_liquidity_stats_use_case,
    get_liquidity_timeseries_use_case,
    get_top_pairs_use_case,
)
from arbbot_analytics.api.errors import FETCH_FAILURES
from arbbot_analytics.api.schemas.liquidity import (
    HeatmapPairResponse,
    LiquidityHeatmapResponse,
    LiquidityObservationResponse,
    LiquidityStatsBodyResponse,
    LiquidityStatsResponse,
    LiquidityTimeseriesResponse,
    TopPairResponse,
    TopPairsResponse,
)
from arbbot_analytics.application.dto.liquidity import (
    GetLiquidityHeatmapInput,
    GetLiquidityStatsInput,
    GetLiquidityTimeseriesInput,
    GetTopPairsInput,
)
from arbbot_analytics.application.use_cases.get_liquidity_heatmap import GetLiquidityHeatmapUseCase
from arbbot_analytics.application.use_cases.get_liquidity_stats import GetLiquidityStatsUseCase
from arbbot_analytics.application.use_cases.get_liquidity_timeseries import (
    GetLiquidityTimeseriesUseCase,
)
from arbbot_analytics.application.use_cases.get_top_pairs import GetTopPairsUseCase
from arbbot_analytics.domain.exceptions import LiquidityInputError
from arbbot_analytics.domain.services.price_format import decimal_to_float, iso_or_none

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/liquidity")


def _upstream_failure(endpoint: str, detail: str, exc: Exception) -> HTTPException:
    logger.error("liquidity_router: %s_failed error=%s", endpoint, exc, exc_info=exc)
    return HTTPException(status_code=500, detail=detail)


@router.get("/heatmap", response_model=LiquidityHeatmapResponse)
def get_liquidity_heatmap(
    hours: str | None = None,
    min_observations: str | None = None,
    use_case: GetLiquidityHeatmapUseCase = Depends(get_liquidity_heatmap_use_case),
):
    try:
        result = use_case.execute(
            GetLiquidityHeatmapInput(hours=hours, min_observations=min_observations)
        )
    except FETCH_FAILURES as exc:
        raise _upstream_failure("heatmap", "Failed to fetch liquidity heatmap data", exc) from exc

    return LiquidityHeatmapResponse(
        time_range_hours=result.time_range_hours,
        min_observations=result.min_observations,
        pair_count=result.pair_count,
        pairs=[
            HeatmapPairResponse(
                source_avatar=row.source_avatar,
                target_avatar=row.target_avatar,
                observation_count=row.observation_count,
                avg_liquidity=decimal_to_float(row.avg_liquidity),
                liquidity_variance=decimal_to_float(row.liquidity_variance),
                max_liquidity=decimal_to_float(row.max_liquidity),
                min_liquidity=decimal_to_float(row.min_liquidity),
                success_rate=row.success_rate,
                avg_edge_score=decimal_to_float(row.avg_edge_score),
                last_observation=iso_or_none(row.last_observation),
                avg_source_price=decimal_to_float(row.avg_source_price),
                avg_target_price=decimal_to_float(row.avg_target_price),
                avg_price_ratio=decimal_to_float(row.avg_price_ratio),
            )
            for row in result.pairs
        ],
    )


@router.get("/top-pairs", response_model=TopPairsResponse)
def get_top_pairs(
    limit: str | None = None,
    sort: str | None = None,
    hours: str | None = None,
    use_case: GetTopPairsUseCase = Depends(get_top_pairs_use_case),
):
    try:
        result = use_case.execute(GetTopPairsInput(limit=limit, sort=sort, hours=hours))
    except FETCH_FAILURES as exc:
        raise _upstream_failure("top_pairs", "Failed to fetch top pairs data", exc) from exc

    return TopPairsResponse(
        sort_by=result.sort_by,
        limit=result.limit,
        time_range_hours=result.time_range_hours,
        pairs=[
            TopPairResponse(
                source_avatar=row.source_avatar,
                target_avatar=row.target_avatar,
                observation_count=row.observation_count,
                avg_liquidity=decimal_to_float(row.avg_liquidity),
                max_liquidity=decimal_to_float(row.max_liquidity),
                min_liquidity=decimal_to_float(row.min_liquidity),
                success_rate=row.success_rate,
                avg_edge_score=decimal_to_float(row.avg_edge_score),
                last_successful_trade=iso_or_none(row.last_observation),
                avg_source_price=decimal_to_float(row.avg_source_price),
                avg_target_price=decimal_to_float(row.avg_target_price),
                avg_price_ratio=decimal_to_float(row.avg_price_ratio),
            )
            for row in result.pairs
        ],
    )


@router.get("/timeseries", response_model=LiquidityTimeseriesResponse)
def get_liquidity_timeseries(
    source: str | None = None,
    target: str | None = None,
    hours: str | None = None,
    use_case: GetLiquidityTimeseriesUseCase = Depends(get_liquidity_timeseries_use_case),
):
    try:
        result = use_case.execute(
            GetLiquidityTimeseriesInput(source=source, target=target, hours=hours)
        )
    except LiquidityInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FETCH_FAILURES as exc:
        raise _upstream_failure("timeseries", "Failed to fetch timeseries data", exc) from exc

    return LiquidityTimeseriesResponse(
        source_avatar=result.source_avatar,
        target_avatar=result.target_avatar,
        time_range_hours=result.time_range_hours,
        observation_count=result.observation_count,
        observations=[
            LiquidityObservationResponse(
                timestamp=row.timestamp.isoformat(),
                measured_liquidity=float(row.measured_liquidity),
                required_amount=decimal_to_float(row.required_amount),
                success=row.success,
                edge_score=decimal_to_float(row.edge_score),
                failure_reason=row.failure_reason,
                execution_time_ms=row.execution_time_ms,
                ma10_liquidity=row.ma10_liquidity,
                source_token_price=decimal_to_float(row.source_token_price),
                target_token_price=decimal_to_float(row.target_token_price),
                price_ratio=row.price_ratio,
                ref_token=row.ref_token,
            )
            for row in result.observations
        ],
    )


@router.get("/stats", response_model=LiquidityStatsResponse)
def get_liquidity_stats(
    hours: str | None = None,
    use_case: GetLiquidityStatsUseCase = Depends(get_liquidity_stats_use_case),
):
    try:
        result = use_case.execute(GetLiquidityStatsInput(hours=hours))
    except FETCH_FAILURES as exc:
        raise _upstream_failure("stats", "Failed to fetch statistics", exc) from exc

    stats = result.stats
    return LiquidityStatsResponse(
        time_range_hours=result.time_range_hours,
        stats=LiquidityStatsBodyResponse(
            total_observations=stats.total_observations,
            unique_source_avatars=stats.unique_source_avatars,
            unique_target_avatars=stats.unique_target_avatars,
            unique_pairs=stats.unique_pairs,
            avg_liquidity=decimal_to_float(stats.avg_liquidity),
            max_liquidity=decimal_to_float(stats.max_liquidity),
            overall_success_rate=stats.overall_success_rate,
            zero_liquidity_rate=stats.zero_liquidity_rate,
        ),
    )
