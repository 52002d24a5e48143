from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from arbbot_analytics.application.ports.price_snapshot_port import PriceSnapshotPort
from arbbot_analytics.domain.entities.price_snapshot import SnapshotSummary, TokenPrice
from arbbot_analytics.domain.exceptions import UpstreamFailureError
from arbbot_analytics.infrastructure.db.mappers.coercion import DECODE_ERRORS, to_int, to_int_or_none
from arbbot_analytics.infrastructure.db.mappers.price_snapshot_mapper import (
    map_row_to_snapshot_summary,
    map_row_to_token_price,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlPriceSnapshotRepository(PriceSnapshotPort):
    def __init__(self, engine):
        self._engine = engine

    def _fetch_all(
        self,
        sql: str,
        params: dict[str, object],
        mapper: Callable[[Mapping[str, Any]], T],
    ) -> list[T]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql), params).mappings().all()
            return [mapper(row) for row in rows]
        except SQLAlchemyError as exc:
            raise UpstreamFailureError("price_snapshot query failed.") from exc
        except DECODE_ERRORS as exc:
            raise UpstreamFailureError("price_snapshot row could not be decoded.") from exc

    def _fetch_one(
        self,
        sql: str,
        params: dict[str, object],
        mapper: Callable[[Mapping[str, Any]], T],
    ) -> T | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), params).mappings().first()
            return mapper(row) if row else None
        except SQLAlchemyError as exc:
            raise UpstreamFailureError("price_snapshot query failed.") from exc
        except DECODE_ERRORS as exc:
            raise UpstreamFailureError("price_snapshot row could not be decoded.") from exc

    def list_snapshots(self, *, limit: int, offset: int) -> list[SnapshotSummary]:
        sql = """
            SELECT
                snapshot_id,
                COUNT(*) AS token_count,
                MIN(timestamp) AS timestamp
            FROM price_snapshot
            GROUP BY snapshot_id
            ORDER BY snapshot_id DESC
            LIMIT :limit OFFSET :offset
        """
        return self._fetch_all(
            sql,
            {"limit": limit, "offset": offset},
            map_row_to_snapshot_summary,
        )

    def count_snapshots(self) -> int:
        sql = """
            SELECT COUNT(DISTINCT snapshot_id) AS total
            FROM price_snapshot
        """
        total = self._fetch_one(sql, {}, lambda row: to_int(row["total"]))
        return total or 0

    def get_snapshot_prices(self, *, snapshot_id: int) -> list[TokenPrice]:
        sql = """
            SELECT
                token,
                pool_id,
                pool_type,
                price,
                ref_token,
                swap_amount,
                timestamp
            FROM price_snapshot
            WHERE snapshot_id = :snapshot_id
              AND price IS NOT NULL
            ORDER BY price::numeric DESC
        """
        return self._fetch_all(sql, {"snapshot_id": snapshot_id}, map_row_to_token_price)

    def get_latest_snapshot_id(self) -> int | None:
        sql = "SELECT MAX(snapshot_id) AS latest_id FROM price_snapshot"
        latest_id = self._fetch_one(sql, {}, lambda row: to_int_or_none(row["latest_id"]))
        if latest_id is None:
            logger.info("price_snapshot_repo: no_snapshots")
        return latest_id
