from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any


# Raised by the helpers below when a column holds a malformed value.
DECODE_ERRORS = (ArithmeticError, ValueError, TypeError)


def to_int(value: Any) -> int:
    if value is None:
        return 0
    return int(Decimal(str(value)))


def to_int_or_none(value: Any) -> int | None:
    return to_int(value) if value is not None else None


def to_float_or_none(value: Any) -> float | None:
    return float(value) if value is not None else None


def to_decimal(value: Any) -> Decimal:
    return Decimal(str(value))


def to_decimal_or_none(value: Any) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"t", "true", "1"}
    return bool(value)


def to_datetime_or_none(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
