from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Literal

SamplingMode = Literal["2h", "shift", "daily"]
SAMPLING_MODES: tuple[str, ...] = ("2h", "shift", "daily")

_DATE_SPLIT_RE = re.compile(r"[/\-]")

# Canonical two-hourly sampling schedule; the last three slots fall on the next calendar day.
TIME_SLOTS_2H: tuple[str, ...] = (
    "06:00", "08:00", "10:00", "12:00", "14:00", "16:00",
    "18:00", "20:00", "22:00", "00:00", "02:00", "04:00",
)
TIME_SLOTS_2H_HOURS: tuple[int, ...] = (6, 8, 10, 12, 14, 16, 18, 20, 22, 0, 2, 4)


@dataclass(frozen=True)
class DataPoint:
    """One raw CCS sample. ``time_slot`` is canonical ``HH:MM`` or the raw source time."""

    value: float
    time_slot: str | None = None


@dataclass(frozen=True)
class DailyRecord:
    """All samples and the production tonnage of one calendar day.

    ``date_str`` (``YYYY/MM/DD``) is the identity key of a record within a
    working set.
    """

    day: int
    date_str: str
    tonnage: float = 0.0
    data_points: tuple[DataPoint, ...] = field(default_factory=tuple)


def parse_date_key(date_str: str) -> tuple[int, int, int] | None:
    """Split a ``YYYY/MM/DD`` key into integers, or None if it is malformed."""
    if not date_str:
        return None
    parts = _DATE_SPLIT_RE.split(str(date_str))
    if len(parts) < 3:
        return None
    try:
        return int(parts[0]), int(parts[1]), int(parts[2])
    except ValueError:
        return None


def sort_records(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    return sorted(records, key=lambda r: parse_date_key(r.date_str) or (0, 0, 0))


def filter_month(records: Iterable[DailyRecord], year: int, month: int) -> list[DailyRecord]:
    out = []
    for r in records:
        parsed = parse_date_key(r.date_str)
        if parsed and parsed[0] == year and parsed[1] == month:
            out.append(r)
    return out
