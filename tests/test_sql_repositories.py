from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from arbbot_analytics.domain.exceptions import UpstreamFailureError
from arbbot_analytics.infrastructure.db.repositories.liquidity_observation_repository import (
    SqlLiquidityObservationRepository,
)
from arbbot_analytics.infrastructure.db.repositories.price_snapshot_repository import (
    SqlPriceSnapshotRepository,
)


class FakeMappings:
    def __init__(self, rows):
        self._rows = rows

    def all(self):
        return list(self._rows)

    def first(self):
        return self._rows[0] if self._rows else None


class FakeResult:
    def __init__(self, rows):
        self._rows = rows

    def mappings(self):
        return FakeMappings(self._rows)


class FakeConnection:
    def __init__(self, engine):
        self._engine = engine

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, statement, params=None):
        if self._engine.error is not None:
            raise self._engine.error
        self._engine.calls.append((str(statement), dict(params or {})))
        return FakeResult(self._engine.rows)


class FakeEngine:
    def __init__(self, rows=None, error: Exception | None = None):
        self.rows = rows or []
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def connect(self):
        return FakeConnection(self)


def _observation_row(**overrides):
    row = {
        "timestamp": datetime(2026, 3, 1, tzinfo=timezone.utc),
        "measured_liquidity": "10",
        "required_amount": "5",
        "success": True,
        "edge_score": None,
        "failure_reason": None,
        "execution_time_ms": 100,
        "source_token_price": None,
        "target_token_price": None,
        "ref_token": None,
    }
    row.update(overrides)
    return row


def test_hours_is_bound_as_integer_parameter_not_interpolated():
    engine = FakeEngine()
    repository = SqlLiquidityObservationRepository(engine)

    repository.list_pair_aggregates(hours=48, min_observations=3)

    sql, params = engine.calls[0]
    assert params == {"hours": 48, "min_observations": 3}
    assert "(:hours || ' hours')::interval" in sql
    assert "48" not in sql
    assert "STDDEV(measured_liquidity::numeric) AS liquidity_variance" in sql


@pytest.mark.parametrize(
    ("sort_field", "expected_order"),
    [
        ("success_rate", "ORDER BY success_rate DESC"),
        ("observation_count", "ORDER BY observation_count DESC"),
        ("max_liquidity", "ORDER BY max_liquidity DESC"),
        ("DROP TABLE", "ORDER BY avg_liquidity DESC"),
    ],
)
def test_top_pairs_order_by_comes_from_allow_list(sort_field, expected_order):
    engine = FakeEngine()
    repository = SqlLiquidityObservationRepository(engine)

    repository.list_top_pairs(hours=24, sort_field=sort_field, limit=20)

    sql, params = engine.calls[0]
    assert expected_order in sql
    assert "DROP TABLE" not in sql
    assert params == {"hours": 24, "min_observations": 3, "limit": 20}


def test_pair_observations_compare_lower_cased_avatars():
    engine = FakeEngine(rows=[_observation_row(), _observation_row(measured_liquidity="0")])
    repository = SqlLiquidityObservationRepository(engine)

    rows = repository.list_pair_observations(
        source_avatar="0xABC",
        target_avatar="0xDeF",
        hours=6,
    )

    sql, params = engine.calls[0]
    assert "lower(source_avatar) = :source_avatar" in sql
    assert "ORDER BY timestamp ASC" in sql
    assert params == {"source_avatar": "0xabc", "target_avatar": "0xdef", "hours": 6}
    assert [row.measured_liquidity for row in rows] == [Decimal("10"), Decimal("0")]


def test_stats_guard_rates_against_empty_window():
    engine = FakeEngine(
        rows=[
            {
                "total_observations": 0,
                "unique_source_avatars": 0,
                "unique_target_avatars": 0,
                "unique_pairs": 0,
                "avg_liquidity": None,
                "max_liquidity": None,
                "overall_success_rate": None,
                "zero_liquidity_rate": None,
            }
        ]
    )
    repository = SqlLiquidityObservationRepository(engine)

    stats = repository.get_stats(hours=24)

    sql, _ = engine.calls[0]
    assert "NULLIF(COUNT(*), 0)" in sql
    assert stats.total_observations == 0
    assert stats.overall_success_rate is None


def test_liquidity_query_errors_become_upstream_failures():
    repository = SqlLiquidityObservationRepository(FakeEngine(error=SQLAlchemyError("boom")))

    with pytest.raises(UpstreamFailureError):
        repository.get_stats(hours=24)


def test_list_snapshots_binds_pagination():
    engine = FakeEngine(
        rows=[{"snapshot_id": 3, "token_count": "2", "timestamp": None}],
    )
    repository = SqlPriceSnapshotRepository(engine)

    rows = repository.list_snapshots(limit=5, offset=10)

    sql, params = engine.calls[0]
    assert "LIMIT :limit OFFSET :offset" in sql
    assert params == {"limit": 5, "offset": 10}
    assert rows[0].token_count == 2


def test_count_snapshots_coerces_string_total():
    repository = SqlPriceSnapshotRepository(FakeEngine(rows=[{"total": "17"}]))

    assert repository.count_snapshots() == 17


def test_latest_snapshot_id_is_none_on_empty_table():
    repository = SqlPriceSnapshotRepository(FakeEngine(rows=[{"latest_id": None}]))

    assert repository.get_latest_snapshot_id() is None


def test_snapshot_prices_are_ordered_numerically():
    engine = FakeEngine()
    repository = SqlPriceSnapshotRepository(engine)

    repository.get_snapshot_prices(snapshot_id=9)

    sql, params = engine.calls[0]
    assert "ORDER BY price::numeric DESC" in sql
    assert params == {"snapshot_id": 9}


def test_snapshot_query_errors_become_upstream_failures():
    repository = SqlPriceSnapshotRepository(FakeEngine(error=SQLAlchemyError("down")))

    with pytest.raises(UpstreamFailureError):
        repository.list_snapshots(limit=5, offset=0)


def test_malformed_snapshot_price_becomes_upstream_failure():
    engine = FakeEngine(
        rows=[
            {
                "token": "0xtoken",
                "pool_id": "pool-1",
                "pool_type": "uniswap_v2",
                "price": "not-a-number",
                "ref_token": "0xref",
                "swap_amount": None,
                "timestamp": None,
            }
        ]
    )
    repository = SqlPriceSnapshotRepository(engine)

    with pytest.raises(UpstreamFailureError):
        repository.get_snapshot_prices(snapshot_id=1)


def test_null_measured_liquidity_becomes_upstream_failure():
    engine = FakeEngine(rows=[_observation_row(), _observation_row(measured_liquidity=None)])
    repository = SqlLiquidityObservationRepository(engine)

    with pytest.raises(UpstreamFailureError):
        repository.list_pair_observations(source_avatar="0xabc", target_avatar="0xdef", hours=6)


def test_malformed_timestamp_becomes_upstream_failure():
    engine = FakeEngine(rows=[_observation_row(timestamp="yesterday")])
    repository = SqlLiquidityObservationRepository(engine)

    with pytest.raises(UpstreamFailureError):
        repository.list_pair_observations(source_avatar="0xabc", target_avatar="0xdef", hours=6)
