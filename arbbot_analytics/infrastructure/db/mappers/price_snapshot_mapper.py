from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from arbbot_analytics.domain.entities.price_snapshot import SnapshotSummary, TokenPrice
from arbbot_analytics.infrastructure.db.mappers.coercion import (
    to_datetime_or_none,
    to_decimal_or_none,
    to_int,
)


def map_row_to_snapshot_summary(row: Mapping[str, Any]) -> SnapshotSummary:
    return SnapshotSummary(
        snapshot_id=to_int(row["snapshot_id"]),
        token_count=to_int(row["token_count"]),
        timestamp=to_datetime_or_none(row["timestamp"]),
    )


def map_row_to_token_price(row: Mapping[str, Any]) -> TokenPrice:
    return TokenPrice(
        token=row["token"],
        pool_id=row["pool_id"],
        pool_type=row["pool_type"],
        price=to_int(row["price"]),
        ref_token=row["ref_token"],
        swap_amount=to_decimal_or_none(row["swap_amount"]),
        timestamp=to_datetime_or_none(row["timestamp"]),
    )
