from __future__ import annotations

from arbbot_analytics.application.dto.liquidity import (
    GetLiquidityTimeseriesInput,
    GetLiquidityTimeseriesOutput,
    LiquidityObservationPointOutput,
)
from arbbot_analytics.application.ports.liquidity_observation_port import LiquidityObservationPort
from arbbot_analytics.domain.exceptions import LiquidityInputError
from arbbot_analytics.domain.services.price_format import decimal_to_float
from arbbot_analytics.domain.services.query_params import coerce_int, normalize_avatar
from arbbot_analytics.domain.services.statistics import price_ratio, trailing_moving_average


DEFAULT_HOURS = 24


class GetLiquidityTimeseriesUseCase:
    def __init__(self, *, liquidity_port: LiquidityObservationPort):
        self._liquidity_port = liquidity_port

    def execute(self, command: GetLiquidityTimeseriesInput) -> GetLiquidityTimeseriesOutput:
        source_avatar = normalize_avatar(command.source)
        target_avatar = normalize_avatar(command.target)
        if source_avatar is None or target_avatar is None:
            raise LiquidityInputError("source and target parameters are required")
        hours = coerce_int(command.hours, default=DEFAULT_HOURS)

        rows = self._liquidity_port.list_pair_observations(
            source_avatar=source_avatar,
            target_avatar=target_avatar,
            hours=hours,
        )
        moving_averages = trailing_moving_average(
            [float(row.measured_liquidity) for row in rows]
        )
        observations = [
            LiquidityObservationPointOutput(
                timestamp=row.timestamp,
                measured_liquidity=row.measured_liquidity,
                required_amount=row.required_amount,
                success=row.success,
                edge_score=row.edge_score,
                failure_reason=row.failure_reason,
                execution_time_ms=row.execution_time_ms,
                ma10_liquidity=ma10,
                source_token_price=row.source_token_price,
                target_token_price=row.target_token_price,
                price_ratio=price_ratio(
                    decimal_to_float(row.source_token_price),
                    decimal_to_float(row.target_token_price),
                ),
                ref_token=row.ref_token,
            )
            for row, ma10 in zip(rows, moving_averages)
        ]
        return GetLiquidityTimeseriesOutput(
            source_avatar=source_avatar,
            target_avatar=target_avatar,
            time_range_hours=hours,
            observation_count=len(observations),
            observations=observations,
        )
