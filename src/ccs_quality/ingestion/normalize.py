"""Normalization of raw spreadsheet cells into canonical dates, hours and numbers.

Cells arrive as whatever the spreadsheet reader produced: numbers, strings,
spreadsheet serial dates, or Python date/time objects. Every function here
returns None instead of raising when a cell cannot be interpreted; the
import pipeline decides what a failure means for the row.

Domain conventions:
- Numbers above SERIAL_DATE_THRESHOLD in a date column are day counts
  from SPREADSHEET_EPOCH (the 1900 date system with its leap-year quirk
  folded into the epoch).
- Years below 100 are two-digit Solar Hijri years and get
  TWO_DIGIT_YEAR_OFFSET added ("03" -> 1403). Pass a different offset for
  other calendars.
"""

from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

SERIAL_DATE_THRESHOLD = 40000
SPREADSHEET_EPOCH = datetime(1899, 12, 30)
TWO_DIGIT_YEAR_OFFSET = 1400

_DATE_SPLIT_RE = re.compile(r"[/\-]")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _leading_int(token: str) -> int | None:
    m = _LEADING_INT_RE.match(token)
    return int(m.group(1)) if m else None


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def parse_number(value: object) -> float | None:
    """Parse a numeric cell, stripping thousands separators.

    Returns None for blanks, booleans, non-numeric text and non-finite values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        num = float(value)
    else:
        text = _as_text(value).replace(",", "")
        if not text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    return num if math.isfinite(num) else None


def is_valid_number(value: object) -> bool:
    return parse_number(value) is not None


def round1(value: float) -> float:
    """Round half away from zero to one decimal on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _format_date(year: int, month: int, day: int) -> str:
    return f"{year}/{month:02d}/{day:02d}"


def _from_serial(serial: float) -> str | None:
    try:
        d = SPREADSHEET_EPOCH + timedelta(days=serial)
    except OverflowError:
        return None
    return _format_date(d.year, d.month, d.day)


def normalize_date(value: object, *, two_digit_year_offset: int = TWO_DIGIT_YEAR_OFFSET) -> str | None:
    """Return a canonical ``YYYY/MM/DD`` key for a date cell, or None.

    Resolution order: date objects, spreadsheet serials, then ``/`` or ``-``
    separated text. Text is read year/month/day, except when the first
    token has at most two digits and the last has four (``3/5/1403``),
    which is the month/day/year order spreadsheet readers emit.
    """
    if isinstance(value, (datetime, date)):
        # NaT is a datetime that is not equal to itself
        if value != value:
            return None
        return _format_date(value.year, value.month, value.day)

    num = parse_number(value)
    if num is not None and num > SERIAL_DATE_THRESHOLD:
        return _from_serial(num)

    text = _as_text(value)
    if not text:
        return None

    parts = _DATE_SPLIT_RE.split(text)
    if len(parts) < 3:
        return None

    first, second, third = (_leading_int(p) for p in parts[:3])
    if first is None or second is None or third is None:
        return None

    if len(parts[0].strip().lstrip("+-")) <= 2 and len(str(abs(third))) == 4:
        year, month, day = third, first, second
    else:
        year, month, day = first, second, third

    if year < 100:
        year += two_digit_year_offset

    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return _format_date(year, month, day)


def hour_from_time(value: object) -> int | None:
    """Return the hour of day (0..23) for a time cell, or None.

    - numbers in [0, 1) are fractions of a day (spreadsheet time)
    - numbers in [1, 24) are hours
    - text ``HH``, ``HH:MM``, ``HH:MM:SS`` with optional AM/PM; ``24`` means 0
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (time, datetime)):
        return None if value != value else value.hour

    text = _as_text(value).upper()
    if not text:
        return None

    try:
        num = float(text)
    except ValueError:
        num = None

    if num is not None and math.isfinite(num):
        if 0 <= num < 1:
            total_minutes = math.floor(num * 24 * 60 + 0.5)
            hour = total_minutes // 60
            return 0 if hour == 24 else hour
        if 0 <= num < 24:
            return math.floor(num)

    is_pm = "PM" in text
    is_am = "AM" in text
    time_part = text.replace("AM", "", 1).replace("PM", "", 1).strip()

    hour = _leading_int(time_part.split(":")[0])
    if hour is None:
        return None

    if is_am or is_pm:
        if is_pm and hour < 12:
            hour += 12
        if is_am and hour == 12:
            hour = 0
    elif hour == 24:
        hour = 0

    if 0 <= hour < 24:
        return hour
    return None
