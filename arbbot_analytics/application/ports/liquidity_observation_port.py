from __future__ import annotations

from typing import Protocol

from arbbot_analytics.domain.entities.liquidity import (
    LiquidityObservation,
    LiquidityPairAggregate,
    LiquidityStats,
)


class LiquidityObservationPort(Protocol):
    def list_pair_aggregates(
        self,
        *,
        hours: int,
        min_observations: int,
    ) -> list[LiquidityPairAggregate]:
        ...

    def list_top_pairs(
        self,
        *,
        hours: int,
        sort_field: str,
        limit: int,
    ) -> list[LiquidityPairAggregate]:
        ...

    def list_pair_observations(
        self,
        *,
        source_avatar: str,
        target_avatar: str,
        hours: int,
    ) -> list[LiquidityObservation]:
        ...

    def get_stats(self, *, hours: int) -> LiquidityStats:
        ...
