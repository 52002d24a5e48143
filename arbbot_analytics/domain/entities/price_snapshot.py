from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class SnapshotSummary:
    snapshot_id: int
    token_count: int
    timestamp: datetime | None


@dataclass(frozen=True)
class TokenPrice:
    token: str
    pool_id: str
    pool_type: str
    price: int
    ref_token: str
    swap_amount: Decimal | None
    timestamp: datetime | None
