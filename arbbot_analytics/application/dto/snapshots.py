from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from arbbot_analytics.domain.entities.price_snapshot import SnapshotSummary
from arbbot_analytics.domain.services.statistics import PriceStatistics


@dataclass(frozen=True)
class ListSnapshotsInput:
    limit: str | None = None
    offset: str | None = None


@dataclass(frozen=True)
class ListSnapshotsOutput:
    snapshots: list[SnapshotSummary]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class GetSnapshotInput:
    snapshot_id: str


@dataclass(frozen=True)
class TokenPriceOutput:
    token: str
    pool_id: str
    pool_type: str
    price: str
    price_formatted: str
    ref_token: str
    swap_amount: Decimal | None


@dataclass(frozen=True)
class GetSnapshotOutput:
    snapshot_id: int
    timestamp: datetime | None
    token_count: int
    statistics: PriceStatistics
    tokens: list[TokenPriceOutput]
