from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from arbbot_analytics.application.use_cases.get_latest_snapshot import GetLatestSnapshotUseCase
from arbbot_analytics.application.use_cases.get_liquidity_heatmap import GetLiquidityHeatmapUseCase
from arbbot_analytics.application.use_cases.get_liquidity_stats import GetLiquidityStatsUseCase
from arbbot_analytics.application.use_cases.get_liquidity_timeseries import (
    GetLiquidityTimeseriesUseCase,
)
from arbbot_analytics.application.use_cases.get_snapshot import GetSnapshotUseCase
from arbbot_analytics.application.use_cases.get_top_pairs import GetTopPairsUseCase
from arbbot_analytics.application.use_cases.list_snapshots import ListSnapshotsUseCase
from arbbot_analytics.infrastructure.db.repositories.liquidity_observation_repository import (
    SqlLiquidityObservationRepository,
)
from arbbot_analytics.infrastructure.db.repositories.price_snapshot_repository import (
    SqlPriceSnapshotRepository,
)


def get_db_engine(request: Request):
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=500, detail="Database is not initialized.")
    return engine


def _get_price_snapshot_repository(engine=Depends(get_db_engine)) -> SqlPriceSnapshotRepository:
    return SqlPriceSnapshotRepository(engine)


def _get_liquidity_repository(engine=Depends(get_db_engine)) -> SqlLiquidityObservationRepository:
    return SqlLiquidityObservationRepository(engine)


def get_list_snapshots_use_case(
    repository: SqlPriceSnapshotRepository = Depends(_get_price_snapshot_repository),
) -> ListSnapshotsUseCase:
    return ListSnapshotsUseCase(price_snapshot_port=repository)


def get_snapshot_use_case(
    repository: SqlPriceSnapshotRepository = Depends(_get_price_snapshot_repository),
) -> GetSnapshotUseCase:
    return GetSnapshotUseCase(price_snapshot_port=repository)


def get_latest_snapshot_use_case(
    repository: SqlPriceSnapshotRepository = Depends(_get_price_snapshot_repository),
) -> GetLatestSnapshotUseCase:
    return GetLatestSnapshotUseCase(price_snapshot_port=repository)


def get_liquidity_heatmap_use_case(
    repository: SqlLiquidityObservationRepository = Depends(_get_liquidity_repository),
) -> GetLiquidityHeatmapUseCase:
    return GetLiquidityHeatmapUseCase(liquidity_port=repository)


def get_top_pairs_use_case(
    repository: SqlLiquidityObservationRepository = Depends(_get_liquidity_repository),
) -> GetTopPairsUseCase:
    return GetTopPairsUseCase(liquidity_port=repository)


def get_liquidity_timeseries_use_case(
    repository: SqlLiquidityObservationRepository = Depends(_get_liquidity_repository),
) -> GetLiquidityTimeseriesUseCase:
    return GetLiquidityTimeseriesUseCase(liquidity_port=repository)


def get_liquidity_stats_use_case(
    repository: SqlLiquidityObservationRepository = Depends(_get_liquidity_repository),
) -> GetLiquidityStatsUseCase:
    return GetLiquidityStatsUseCase(liquidity_port=repository)
