from __future__ import annotations

from datetime import datetime
from decimal import Decimal


WEI_DECIMALS = 18
WEI_SCALE = 10**WEI_DECIMALS


def wei_to_float(raw_price: int) -> float:
    return raw_price / WEI_SCALE


def format_price(raw_price: int, *, places: int = 6) -> str:
    return f"{wei_to_float(raw_price):.{places}f}"


def decimal_to_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
