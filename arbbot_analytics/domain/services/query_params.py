from __future__ import annotations

import re


DEFAULT_SORT_FIELD = "avg_liquidity"
SORT_FIELDS = ("avg_liquidity", "success_rate", "observation_count", "max_liquidity")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(raw: str | None) -> int | None:
    """Read the leading integer of ``raw``; ``"12abc"`` gives 12, ``"abc"`` gives None."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def coerce_int(raw: str | None, *, default: int, minimum: int = 1) -> int:
    value = parse_int(raw)
    if value is None or value == 0 or value < minimum:
        return default
    return value


def resolve_sort_field(raw: str | None) -> str:
    if raw in SORT_FIELDS:
        return raw
    return DEFAULT_SORT_FIELD


def normalize_avatar(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip().lower()
    return value or None
