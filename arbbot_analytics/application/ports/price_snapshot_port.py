from __future__ import annotations

from typing import Protocol

from arbbot_analytics.domain.entities.price_snapshot import SnapshotSummary, TokenPrice


class PriceSnapshotPort(Protocol):
    def list_snapshots(self, *, limit: int, offset: int) -> list[SnapshotSummary]:
        ...

    def count_snapshots(self) -> int:
        ...

    def get_snapshot_prices(self, *, snapshot_id: int) -> list[TokenPrice]:
        ...

    def get_latest_snapshot_id(self) -> int | None:
        ...
