from __future__ import annotations

import pytest

from arbbot_analytics.domain.services.query_params import (
    DEFAULT_SORT_FIELD,
    SORT_FIELDS,
    coerce_int,
    normalize_avatar,
    parse_int,
    resolve_sort_field,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        (" 7", 7),
        ("-3", -3),
        ("12abc", 12),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_int_reads_leading_integer(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10", 10),
        ("abc", 24),
        (None, 24),
        ("0", 24),
        ("-5", 24),
    ],
)
def test_coerce_int_falls_back_to_default(raw, expected):
    assert coerce_int(raw, default=24) == expected


def test_coerce_int_allows_zero_offset():
    assert coerce_int("0", default=0, minimum=0) == 0
    assert coerce_int("15", default=0, minimum=0) == 15
    assert coerce_int("-1", default=0, minimum=0) == 0


@pytest.mark.parametrize("field", SORT_FIELDS)
def test_resolve_sort_field_accepts_allow_listed_columns(field):
    assert resolve_sort_field(field) == field


@pytest.mark.parametrize("raw", ["DROP TABLE", "avg_liquidity; --", "AVG_LIQUIDITY", "", None])
def test_resolve_sort_field_falls_back_silently(raw):
    assert resolve_sort_field(raw) == DEFAULT_SORT_FIELD


def test_normalize_avatar_lower_cases_and_strips():
    assert normalize_avatar("  0xABCdef ") == "0xabcdef"


def test_normalize_avatar_treats_blank_as_missing():
    assert normalize_avatar("   ") is None
    assert normalize_avatar(None) is None
