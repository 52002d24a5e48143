from __future__ import annotations

from arbbot_analytics.application.ports.price_snapshot_port import PriceSnapshotPort
from arbbot_analytics.domain.exceptions import SnapshotNotFoundError


class GetLatestSnapshotUseCase:
    def __init__(self, *, price_snapshot_port: PriceSnapshotPort):
        self._price_snapshot_port = price_snapshot_port

    def execute(self) -> int:
        snapshot_id = self._price_snapshot_port.get_latest_snapshot_id()
        if snapshot_id is None:
            raise SnapshotNotFoundError("No snapshots found")
        return snapshot_id
