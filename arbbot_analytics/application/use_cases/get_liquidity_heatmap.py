from __future__ import annotations

from arbbot_analytics.application.dto.liquidity import (
    GetLiquidityHeatmapInput,
    GetLiquidityHeatmapOutput,
)
from arbbot_analytics.application.ports.liquidity_observation_port import LiquidityObservationPort
from arbbot_analytics.domain.services.query_params import coerce_int


DEFAULT_HOURS = 24
DEFAULT_MIN_OBSERVATIONS = 3


class GetLiquidityHeatmapUseCase:
    def __init__(self, *, liquidity_port: LiquidityObservationPort):
        self._liquidity_port = liquidity_port

    def execute(self, command: GetLiquidityHeatmapInput) -> GetLiquidityHeatmapOutput:
        hours = coerce_int(command.hours, default=DEFAULT_HOURS)
        min_observations = coerce_int(command.min_observations, default=DEFAULT_MIN_OBSERVATIONS)

        pairs = self._liquidity_port.list_pair_aggregates(
            hours=hours,
            min_observations=min_observations,
        )
        return GetLiquidityHeatmapOutput(
            time_range_hours=hours,
            min_observations=min_observations,
            pair_count=len(pairs),
            pairs=pairs,
        )
