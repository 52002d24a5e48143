from __future__ import annotations

from arbbot_analytics.application.dto.liquidity import (
    GetLiquidityStatsInput,
    GetLiquidityStatsOutput,
)
from arbbot_analytics.application.ports.liquidity_observation_port import LiquidityObservationPort
from arbbot_analytics.domain.services.query_params import coerce_int


DEFAULT_HOURS = 24


class GetLiquidityStatsUseCase:
    def __init__(self, *, liquidity_port: LiquidityObservationPort):
        self._liquidity_port = liquidity_port

    def execute(self, command: GetLiquidityStatsInput) -> GetLiquidityStatsOutput:
        hours = coerce_int(command.hours, default=DEFAULT_HOURS)
        return GetLiquidityStatsOutput(
            time_range_hours=hours,
            stats=self._liquidity_port.get_stats(hours=hours),
        )
