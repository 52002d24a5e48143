from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from arbbot_analytics.api.deps import (
    get_liquidity_heatmap_use_case,
    get_liquidity_stats_use_case,
    get_liquidity_timeseries_use_case,
    get_top_pairs_use_case,
)
from arbbot_analytics.application.use_cases.get_liquidity_heatmap import GetLiquidityHeatmapUseCase
from arbbot_analytics.application.use_cases.get_liquidity_stats import GetLiquidityStatsUseCase
from arbbot_analytics.application.use_cases.get_liquidity_timeseries import (
    GetLiquidityTimeseriesUseCase,
)
from arbbot_analytics.application.use_cases.get_top_pairs import GetTopPairsUseCase
from arbbot_analytics.domain.entities.liquidity import (
    LiquidityObservation,
    LiquidityPairAggregate,
    LiquidityStats,
)
from arbbot_analytics.domain.exceptions import UpstreamFailureError
from arbbot_analytics.infrastructure.db.repositories.liquidity_observation_repository import (
    SqlLiquidityObservationRepository,
)
from arbbot_analytics.main import app

START = datetime(2026, 3, 1, tzinfo=timezone.utc)

PAIR = LiquidityPairAggregate(
    source_avatar="0xaaa",
    target_avatar="0xbbb",
    observation_count=6,
    avg_liquidity=Decimal("150.5"),
    max_liquidity=Decimal("300"),
    min_liquidity=Decimal("0"),
    success_rate=0.5,
    avg_edge_score=Decimal("0.9"),
    last_observation=START,
    avg_source_price=Decimal("2"),
    avg_target_price=Decimal("4"),
    avg_price_ratio=Decimal("0.5"),
    liquidity_variance=Decimal("12.25"),
)


class RowsEngine:
    def __init__(self, rows):
        self._rows = rows

    def connect(self):
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, statement, params=None):
        return self

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)

    def first(self):
        return self._rows[0] if self._rows else None


class FakeLiquidityPort:
    def __init__(self, *, fail: bool = False):
        self._fail = fail
        self.calls: list[tuple[str, dict]] = []
        self.observations = {
            ("0xabc", "0xdef"): [
                LiquidityObservation(
                    timestamp=START + timedelta(minutes=index),
                    measured_liquidity=Decimal(index + 1),
                    required_amount=Decimal("5"),
                    success=index % 2 == 0,
                    edge_score=None,
                    failure_reason=None if index % 2 == 0 else "slippage",
                    execution_time_ms=250,
                    source_token_price=Decimal("3"),
                    target_token_price=Decimal("1.5"),
                    ref_token="0xref",
                )
                for index in range(3)
            ]
        }

    def _record(self, name: str, **params):
        if self._fail:
            raise UpstreamFailureError("password authentication failed for user bot")
        self.calls.append((name, params))

    def list_pair_aggregates(self, *, hours: int, min_observations: int):
        self._record("heatmap", hours=hours, min_observations=min_observations)
        return [PAIR]

    def list_top_pairs(self, *, hours: int, sort_field: str, limit: int):
        self._record("top_pairs", hours=hours, sort_field=sort_field, limit=limit)
        return [PAIR]

    def list_pair_observations(self, *, source_avatar: str, target_avatar: str, hours: int):
        self._record(
            "timeseries",
            source_avatar=source_avatar,
            target_avatar=target_avatar,
            hours=hours,
        )
        return self.observations.get((source_avatar, target_avatar), [])

    def get_stats(self, *, hours: int):
        self._record("stats", hours=hours)
        return LiquidityStats(
            total_observations=0,
            unique_source_avatars=0,
            unique_target_avatars=0,
            unique_pairs=0,
            avg_liquidity=None,
            max_liquidity=None,
            overall_success_rate=None,
            zero_liquidity_rate=None,
        )


def _override(port: FakeLiquidityPort) -> None:
    app.dependency_overrides[get_liquidity_heatmap_use_case] = lambda: GetLiquidityHeatmapUseCase(
        liquidity_port=port
    )
    app.dependency_overrides[get_top_pairs_use_case] = lambda: GetTopPairsUseCase(
        liquidity_port=port
    )
    app.dependency_overrides[get_liquidity_timeseries_use_case] = (
        lambda: GetLiquidityTimeseriesUseCase(liquidity_port=port)
    )
    app.dependency_overrides[get_liquidity_stats_use_case] = lambda: GetLiquidityStatsUseCase(
        liquidity_port=port
    )


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_heatmap_returns_pairs_with_numeric_aggregates(client):
    port = FakeLiquidityPort()
    _override(port)

    response = client.get("/api/liquidity/heatmap", params={"hours": "48"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["time_range_hours"] == 48
    assert payload["min_observations"] == 3
    assert payload["pair_count"] == 1
    pair = payload["pairs"][0]
    assert pair["avg_liquidity"] == 150.5
    assert pair["liquidity_variance"] == 12.25
    assert pair["success_rate"] == 0.5
    assert pair["last_observation"] == "2026-03-01T00:00:00+00:00"


def test_top_pairs_invalid_sort_is_ignored(client):
    port = FakeLiquidityPort()
    _override(port)

    response = client.get("/api/liquidity/top-pairs", params={"sort": "DROP TABLE"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["sort_by"] == "avg_liquidity"
    assert payload["limit"] == 20
    assert payload["time_range_hours"] == 24
    assert port.calls == [("top_pairs", {"hours": 24, "sort_field": "avg_liquidity", "limit": 20})]
    assert payload["pairs"][0]["last_successful_trade"] == "2026-03-01T00:00:00+00:00"
    assert "liquidity_variance" not in payload["pairs"][0]


def test_timeseries_without_target_is_rejected_before_querying(client):
    port = FakeLiquidityPort()
    _override(port)

    response = client.get("/api/liquidity/timeseries", params={"source": "0xabc"})

    assert response.status_code == 400
    assert response.json() == {"error": "source and target parameters are required"}
    assert port.calls == []


def test_timeseries_is_case_insensitive_on_avatars(client):
    _override(FakeLiquidityPort())

    upper = client.get("/api/liquidity/timeseries", params={"source": "0xABC", "target": "0xDEF"})
    lower = client.get("/api/liquidity/timeseries", params={"source": "0xabc", "target": "0xdef"})

    assert upper.status_code == 200
    assert upper.json() == lower.json()
    payload = upper.json()
    assert payload["observation_count"] == 3
    assert [row["ma10_liquidity"] for row in payload["observations"]] == [1.0, 1.5, 2.0]
    assert payload["observations"][0]["price_ratio"] == 2.0
    assert payload["observations"][1]["failure_reason"] == "slippage"


def test_stats_with_empty_window_keeps_null_rates(client):
    _override(FakeLiquidityPort())

    response = client.get("/api/liquidity/stats", params={"hours": "nope"})

    assert response.status_code == 200
    assert response.json() == {
        "time_range_hours": 24,
        "stats": {
            "total_observations": 0,
            "unique_source_avatars": 0,
            "unique_target_avatars": 0,
            "unique_pairs": 0,
            "avg_liquidity": None,
            "max_liquidity": None,
            "overall_success_rate": None,
            "zero_liquidity_rate": None,
        },
    }


@pytest.mark.parametrize(
    ("path", "params", "message"),
    [
        ("/api/liquidity/heatmap", {}, "Failed to fetch liquidity heatmap data"),
        ("/api/liquidity/top-pairs", {}, "Failed to fetch top pairs data"),
        ("/api/liquidity/timeseries", {"source": "0xa", "target": "0xb"}, "Failed to fetch timeseries data"),
        ("/api/liquidity/stats", {}, "Failed to fetch statistics"),
    ],
)
def test_database_errors_return_fixed_messages(client, path, params, message):
    _override(FakeLiquidityPort(fail=True))

    response = client.get(path, params=params)

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_timeseries_with_null_liquidity_row_uses_endpoint_message(client):
    repository = SqlLiquidityObservationRepository(
        RowsEngine(
            [
                {
                    "timestamp": START,
                    "measured_liquidity": None,
                    "required_amount": None,
                    "success": False,
                    "edge_score": None,
                    "failure_reason": None,
                    "execution_time_ms": None,
                    "source_token_price": None,
                    "target_token_price": None,
                    "ref_token": None,
                }
            ]
        )
    )
    app.dependency_overrides[get_liquidity_timeseries_use_case] = (
        lambda: GetLiquidityTimeseriesUseCase(liquidity_port=repository)
    )

    response = client.get("/api/liquidity/timeseries", params={"source": "0xabc", "target": "0xdef"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch timeseries data"}
