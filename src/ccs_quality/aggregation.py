"""Fold a day's raw samples into the values shown and rated per sampling mode."""

from __future__ import annotations

import math

from ccs_quality.ingestion.normalize import hour_from_time, parse_number, round1
from ccs_quality.models import TIME_SLOTS_2H_HOURS, DailyRecord, SamplingMode

# Shift C runs past midnight into the next calendar day.
SHIFT_HOURS = {
    "A": (6, 8, 10, 12),
    "B": (14, 16, 18, 20),
    "C": (22, 0, 2, 4),
}


def hour_value_map(record: DailyRecord) -> dict[int, float]:
    """Map hour of day -> sample value for one record.

    Samples without a parseable time or numeric value are dropped. When two
    samples land on the same hour the later one wins; duplicates are not
    averaged.
    """
    values: dict[int, float] = {}
    for point in record.data_points:
        if point.time_slot is None:
            continue
        value = parse_number(point.value)
        if value is None:
            continue
        hour = hour_from_time(point.time_slot)
        if hour is not None:
            values[hour] = value
    return values


def _mean_or_nan(values: list[float]) -> float:
    if not values:
        return math.nan
    # Left-to-right addition, not sum(), which is compensated on 3.12+.
    total = 0.0
    for v in values:
        total += v
    return round1(total / len(values))


def aggregate_values(record: DailyRecord, mode: SamplingMode) -> list[float]:
    """Return the fixed-length value sequence for ``mode``; gaps are NaN.

    - ``2h``: 12 values following TIME_SLOTS_2H
    - ``shift``: 3 shift means (A, B, C)
    - ``daily``: 1 mean over every hour present
    """
    by_hour = hour_value_map(record)

    if mode == "2h":
        return [by_hour.get(h, math.nan) for h in TIME_SLOTS_2H_HOURS]
    if mode == "shift":
        return [
            _mean_or_nan([by_hour[h] for h in hours if h in by_hour])
            for hours in SHIFT_HOURS.values()
        ]
    if mode == "daily":
        return [_mean_or_nan(list(by_hour.values()))]

    raise ValueError(f"Unknown sampling mode: {mode}")


def daily_values(records: list[DailyRecord]) -> list[tuple[DailyRecord, float]]:
    """Pair each record with its single daily mean (NaN when it has no samples)."""
    return [(r, aggregate_values(r, "daily")[0]) for r in records]
