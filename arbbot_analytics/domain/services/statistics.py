from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from arbbot_analytics.domain.exceptions import EmptySeriesError, InvalidInputError


MOVING_AVERAGE_WINDOW = 10


@dataclass(frozen=True)
class PriceStatistics:
    avg: float
    max: float
    min: float
    median: float


def _require_values(values: Sequence[float], *, name: str) -> None:
    if not values:
        raise EmptySeriesError(f"{name} requires at least one value.")


def mean(values: Sequence[float]) -> float:
    _require_values(values, name="mean")
    return sum(values) / len(values)


def maximum(values: Sequence[float]) -> float:
    _require_values(values, name="maximum")
    return max(values)


def minimum(values: Sequence[float]) -> float:
    _require_values(values, name="minimum")
    return min(values)


def median(values: Sequence[float]) -> float:
    _require_values(values, name="median")
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def summarize(values: Sequence[float]) -> PriceStatistics:
    return PriceStatistics(
        avg=mean(values),
        max=maximum(values),
        min=minimum(values),
        median=median(values),
    )


def trailing_moving_average(
    values: Iterable[float],
    window: int = MOVING_AVERAGE_WINDOW,
) -> list[float]:
    """Trailing mean over up to ``window`` most recent values.

    The window grows from a single element at the start of the series, so the
    output always has one value per input, in the same order.
    """
    if window < 1:
        raise InvalidInputError("window must be a positive integer.")

    buffer: deque[float] = deque()
    averages: list[float] = []
    for value in values:
        buffer.append(value)
        if len(buffer) > window:
            buffer.popleft()
        averages.append(math.fsum(buffer) / len(buffer))
    return averages


def price_ratio(numerator: float | None, denominator: float | None) -> float | None:
    if numerator is None or denominator is None:
        return None
    if denominator == 0:
        return None
    return numerator / denominator
