from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from arbbot_analytics.api.deps import (
    get_latest_snapshot_use_case,
    get_list_snapshots_use_case,
    get_snapshot_use_case,
)
from arbbot_analytics.api.errors import FETCH_FAILURES
from arbbot_analytics.api.schemas.snapshots import (
    SnapshotDetailResponse,
    SnapshotListResponse,
    SnapshotStatisticsResponse,
    SnapshotSummaryResponse,
    SnapshotTokenResponse,
)
from arbbot_analytics.application.dto.snapshots import GetSnapshotInput, ListSnapshotsInput
from arbbot_analytics.application.use_cases.get_latest_snapshot import GetLatestSnapshotUseCase
from arbbot_analytics.application.use_cases.get_snapshot import GetSnapshotUseCase
from arbbot_analytics.application.use_cases.list_snapshots import ListSnapshotsUseCase
from arbbot_analytics.domain.exceptions import SnapshotInputError, SnapshotNotFoundError
from arbbot_analytics.domain.services.price_format import decimal_to_float, iso_or_none

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/snapshots", response_model=SnapshotListResponse)
def list_snapshots(
    limit: str | None = None,
    offset: str | None = None,
    use_case: ListSnapshotsUseCase = Depends(get_list_snapshots_use_case),
):
    try:
        result = use_case.execute(ListSnapshotsInput(limit=limit, offset=offset))
    except FETCH_FAILURES as exc:
        logger.error("snapshots_router: list_snapshots_failed error=%s", exc, exc_info=exc)
        raise HTTPException(status_code=500, detail="Failed to fetch snapshots") from exc

    return SnapshotListResponse(
        snapshots=[
            SnapshotSummaryResponse(
                snapshot_id=row.snapshot_id,
                token_count=row.token_count,
                timestamp=iso_or_none(row.timestamp),
            )
            for row in result.snapshots
        ],
        total=result.total,
        limit=result.limit,
        offset=result.offset,
    )


@router.get("/api/snapshot/{snapshot_id}", response_model=SnapshotDetailResponse)
def get_snapshot(
    snapshot_id: str,
    use_case: GetSnapshotUseCase = Depends(get_snapshot_use_case),
):
    try:
        result = use_case.execute(GetSnapshotInput(snapshot_id=snapshot_id))
    except SnapshotInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SnapshotNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except FETCH_FAILURES as exc:
        logger.error(
            "snapshots_router: get_snapshot_failed snapshot_id=%s error=%s",
            snapshot_id,
            exc,
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Failed to fetch snapshot data") from exc

    return SnapshotDetailResponse(
        snapshot_id=result.snapshot_id,
        timestamp=iso_or_none(result.timestamp),
        token_count=result.token_count,
        statistics=SnapshotStatisticsResponse(
            avg_price=result.statistics.avg,
            max_price=result.statistics.max,
            min_price=result.statistics.min,
            median_price=result.statistics.median,
        ),
        tokens=[
            SnapshotTokenResponse(
                token=row.token,
                pool_id=row.pool_id,
                pool_type=row.pool_type,
                price=row.price,
                price_formatted=row.price_formatted,
                ref_token=row.ref_token,
                swap_amount=decimal_to_float(row.swap_amount),
            )
            for row in result.tokens
        ],
    )


@router.get("/api/latest-snapshot")
def get_latest_snapshot(
    use_case: GetLatestSnapshotUseCase = Depends(get_latest_snapshot_use_case),
):
    try:
        snapshot_id = use_case.execute()
    except SnapshotNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except FETCH_FAILURES as exc:
        logger.error("snapshots_router: latest_snapshot_failed error=%s", exc, exc_info=exc)
        raise HTTPException(status_code=500, detail="Failed to fetch latest snapshot") from exc

    return RedirectResponse(url=f"/api/snapshot/{snapshot_id}", status_code=302)
