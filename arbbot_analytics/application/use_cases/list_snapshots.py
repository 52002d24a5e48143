from __future__ import annotations

from arbbot_analytics.application.dto.snapshots import ListSnapshotsInput, ListSnapshotsOutput
from arbbot_analytics.application.ports.price_snapshot_port import PriceSnapshotPort
from arbbot_analytics.domain.services.query_params import coerce_int


DEFAULT_LIMIT = 5
DEFAULT_OFFSET = 0


class ListSnapshotsUseCase:
    def __init__(self, *, price_snapshot_port: PriceSnapshotPort):
        self._price_snapshot_port = price_snapshot_port

    def execute(self, command: ListSnapshotsInput) -> ListSnapshotsOutput:
        limit = coerce_int(command.limit, default=DEFAULT_LIMIT)
        offset = coerce_int(command.offset, default=DEFAULT_OFFSET, minimum=0)

        snapshots = self._price_snapshot_port.list_snapshots(limit=limit, offset=offset)
        total = self._price_snapshot_port.count_snapshots()
        return ListSnapshotsOutput(
            snapshots=snapshots,
            total=total,
            limit=limit,
            offset=offset,
        )
