from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from arbbot_analytics.application.ports.liquidity_observation_port import LiquidityObservationPort
from arbbot_analytics.domain.entities.liquidity import (
    LiquidityObservation,
    LiquidityPairAggregate,
    LiquidityStats,
)
from arbbot_analytics.domain.exceptions import UpstreamFailureError
from arbbot_analytics.domain.services.query_params import DEFAULT_SORT_FIELD
from arbbot_analytics.infrastructure.db.mappers.coercion import DECODE_ERRORS
from arbbot_analytics.infrastructure.db.mappers.liquidity_mapper import (
    map_row_to_liquidity_observation,
    map_row_to_liquidity_stats,
    map_row_to_pair_aggregate,
)

T = TypeVar("T")


# ORDER BY clauses are only ever taken from this mapping.
_ORDER_BY = {
    "avg_liquidity": "avg_liquidity DESC",
    "success_rate": "success_rate DESC",
    "observation_count": "observation_count DESC",
    "max_liquidity": "max_liquidity DESC",
}

TOP_PAIRS_MIN_OBSERVATIONS = 3

_WINDOW_FILTER = "timestamp > now() - (:hours || ' hours')::interval"

_PAIR_AGGREGATE_COLUMNS = """
                source_avatar,
                target_avatar,
                COUNT(*) AS observation_count,
                AVG(measured_liquidity::numeric) AS avg_liquidity,
                MAX(measured_liquidity::numeric) AS max_liquidity,
                MIN(measured_liquidity::numeric) AS min_liquidity,
                SUM(CASE WHEN success THEN 1 ELSE 0 END)::float / COUNT(*) AS success_rate,
                AVG(edge_score::numeric) AS avg_edge_score,
                MAX(timestamp) AS last_observation,
                AVG(source_token_price::numeric) AS avg_source_price,
                AVG(target_token_price::numeric) AS avg_target_price,
                AVG(
                    source_token_price::numeric / NULLIF(target_token_price::numeric, 0)
                ) AS avg_price_ratio
"""


class SqlLiquidityObservationRepository(LiquidityObservationPort):
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
            raise UpstreamFailureError("liquidity_observations query failed.") from exc
        except DECODE_ERRORS as exc:
            raise UpstreamFailureError("liquidity_observations row could not be decoded.") from exc

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
            raise UpstreamFailureError("liquidity_observations query failed.") from exc
        except DECODE_ERRORS as exc:
            raise UpstreamFailureError("liquidity_observations row could not be decoded.") from exc

    def list_pair_aggregates(
        self,
        *,
        hours: int,
        min_observations: int,
    ) -> list[LiquidityPairAggregate]:
        sql = f"""
            SELECT
                {_PAIR_AGGREGATE_COLUMNS},
                STDDEV(measured_liquidity::numeric) AS liquidity_variance
            FROM liquidity_observations
            WHERE {_WINDOW_FILTER}
            GROUP BY source_avatar, target_avatar
            HAVING COUNT(*) >= :min_observations
            ORDER BY avg_liquidity DESC
        """
        return self._fetch_all(
            sql,
            {"hours": int(hours), "min_observations": int(min_observations)},
            map_row_to_pair_aggregate,
        )

    def list_top_pairs(
        self,
        *,
        hours: int,
        sort_field: str,
        limit: int,
    ) -> list[LiquidityPairAggregate]:
        order_by = _ORDER_BY.get(sort_field, _ORDER_BY[DEFAULT_SORT_FIELD])
        sql = f"""
            SELECT
                {_PAIR_AGGREGATE_COLUMNS}
            FROM liquidity_observations
            WHERE {_WINDOW_FILTER}
            GROUP BY source_avatar, target_avatar
            HAVING COUNT(*) >= :min_observations
            ORDER BY {order_by}
            LIMIT :limit
        """
        return self._fetch_all(
            sql,
            {
                "hours": int(hours),
                "min_observations": TOP_PAIRS_MIN_OBSERVATIONS,
                "limit": int(limit),
            },
            map_row_to_pair_aggregate,
        )

    def list_pair_observations(
        self,
        *,
        source_avatar: str,
        target_avatar: str,
        hours: int,
    ) -> list[LiquidityObservation]:
        sql = f"""
            SELECT
                timestamp,
                measured_liquidity,
                required_amount,
                success,
                edge_score,
                failure_reason,
                execution_time_ms,
                source_token_price,
                target_token_price,
                ref_token
            FROM liquidity_observations
            WHERE lower(source_avatar) = :source_avatar
              AND lower(target_avatar) = :target_avatar
              AND {_WINDOW_FILTER}
            ORDER BY timestamp ASC
        """
        return self._fetch_all(
            sql,
            {
                "source_avatar": source_avatar.lower(),
                "target_avatar": target_avatar.lower(),
                "hours": int(hours),
            },
            map_row_to_liquidity_observation,
        )

    def get_stats(self, *, hours: int) -> LiquidityStats:
        sql = f"""
            SELECT
                COUNT(*) AS total_observations,
                COUNT(DISTINCT source_avatar) AS unique_source_avatars,
                COUNT(DISTINCT target_avatar) AS unique_target_avatars,
                COUNT(DISTINCT (source_avatar, target_avatar)) AS unique_pairs,
                AVG(measured_liquidity::numeric) AS avg_liquidity,
                MAX(measured_liquidity::numeric) AS max_liquidity,
                SUM(CASE WHEN success THEN 1 ELSE 0 END)::float
                    / NULLIF(COUNT(*), 0) AS overall_success_rate,
                SUM(CASE WHEN measured_liquidity::numeric = 0 THEN 1 ELSE 0 END)::float
                    / NULLIF(COUNT(*), 0) AS zero_liquidity_rate
            FROM liquidity_observations
            WHERE {_WINDOW_FILTER}
        """
        stats = self._fetch_one(sql, {"hours": int(hours)}, map_row_to_liquidity_stats)
        if stats is None:
            return LiquidityStats(
                total_observations=0,
                unique_source_avatars=0,
                unique_target_avatars=0,
                unique_pairs=0,
                avg_liquidity=None,
                max_liquidity=None,
                overall_success_rate=None,
                zero_liquidity_rate=None,
            )
        return stats
