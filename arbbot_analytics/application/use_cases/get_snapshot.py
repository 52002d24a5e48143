from __future__ import annotations

from arbbot_analytics.application.dto.snapshots import (
    GetSnapshotInput,
    GetSnapshotOutput,
    TokenPriceOutput,
)
from arbbot_analytics.application.ports.price_snapshot_port import PriceSnapshotPort
from arbbot_analytics.domain.exceptions import SnapshotInputError, SnapshotNotFoundError
from arbbot_analytics.domain.services.price_format import format_price, wei_to_float
from arbbot_analytics.domain.services.query_params import parse_int
from arbbot_analytics.domain.services.statistics import summarize


class GetSnapshotUseCase:
    def __init__(self, *, price_snapshot_port: PriceSnapshotPort):
        self._price_snapshot_port = price_snapshot_port

    def execute(self, command: GetSnapshotInput) -> GetSnapshotOutput:
        snapshot_id = parse_int(command.snapshot_id)
        if snapshot_id is None:
            raise SnapshotInputError("Invalid snapshot ID")

        rows = self._price_snapshot_port.get_snapshot_prices(snapshot_id=snapshot_id)
        if not rows:
            raise SnapshotNotFoundError("Snapshot not found")

        # rows arrive ordered by price, highest first
        statistics = summarize([wei_to_float(row.price) for row in rows])
        return GetSnapshotOutput(
            snapshot_id=snapshot_id,
            timestamp=rows[0].timestamp,
            token_count=len(rows),
            statistics=statistics,
            tokens=[
                TokenPriceOutput(
                    token=row.token,
                    pool_id=row.pool_id,
                    pool_type=row.pool_type,
                    price=str(row.price),
                    price_formatted=format_price(row.price),
                    ref_token=row.ref_token,
                    swap_amount=row.swap_amount,
                )
                for row in rows
            ],
        )
