from __future__ import annotations

from typing import Iterator

# Solar Hijri calendar month names, 1-indexed by month number.
MONTH_NAMES = (
    "Farvardin",
    "Ordibehesht",
    "Khordad",
    "Tir",
    "Mordad",
    "Shahrivar",
    "Mehr",
    "Aban",
    "Azar",
    "Dey",
    "Bahman",
    "Esfand",
)


def pad2(value: object) -> str:
    if value is None:
        return "00"
    return str(value).zfill(2)


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return str(month)


def iter_months(start_year: int, start_month: int, end_year: int, end_month: int) -> Iterator[tuple[int, int]]:
    """Yield (year, month) pairs from start to end inclusive.

    Month 12 wraps to month 1 of the next year. An end before the start
    yields nothing.
    """
    year, month = start_year, start_month
    while (year, month) <= (end_year, end_month):
        yield year, month
        month += 1
        if month > 12:
            month = 1
            year += 1
