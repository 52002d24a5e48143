from __future__ import annotations

from arbbot_analytics.application.dto.liquidity import GetTopPairsInput, GetTopPairsOutput
from arbbot_analytics.application.ports.liquidity_observation_port import LiquidityObservationPort
from arbbot_analytics.domain.services.query_params import coerce_int, resolve_sort_field


DEFAULT_LIMIT = 20
DEFAULT_HOURS = 24


class GetTopPairsUseCase:
    def __init__(self, *, liquidity_port: LiquidityObservationPort):
        self._liquidity_port = liquidity_port

    def execute(self, command: GetTopPairsInput) -> GetTopPairsOutput:
        limit = coerce_int(command.limit, default=DEFAULT_LIMIT)
        hours = coerce_int(command.hours, default=DEFAULT_HOURS)
        sort_field = resolve_sort_field(command.sort)

        pairs = self._liquidity_port.list_top_pairs(
            hours=hours,
            sort_field=sort_field,
            limit=limit,
        )
        return GetTopPairsOutput(
            sort_by=sort_field,
            limit=limit,
            time_range_hours=hours,
            pairs=pairs,
        )
