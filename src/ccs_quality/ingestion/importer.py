"""Build the canonical daily record set from raw quality and tonnage rows.

Rows are mappings of column identifier -> raw cell, as produced by the
workbook adapter. Which column holds which field comes from a
``SheetMapping``; this module only applies the meaning of each role:

- quality rows need a date and a positive numeric CCS value; a blank time
  cell gets the next canonical 2-hour slot for that date, an unreadable
  one drops the row
- tonnage rows need a date; amounts are summed per date and an unreadable
  amount counts as zero
- the first row of a sheet is treated as a header when its value cell is
  not numeric
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, time
from typing import Mapping, Sequence

from ccs_quality.config import SheetMapping
from ccs_quality.ingestion.normalize import (
    TWO_DIGIT_YEAR_OFFSET,
    hour_from_time,
    normalize_date,
    parse_number,
    round1,
)
from ccs_quality.models import TIME_SLOTS_2H, DailyRecord, DataPoint, parse_date_key, sort_records

logger = logging.getLogger(__name__)

Row = Mapping[str, object]


@dataclass(frozen=True)
class ImportResult:
    records: list[DailyRecord]
    quality_rows_used: int = 0
    quality_rows_skipped: int = 0
    tonnage_rows_used: int = 0
    tonnage_rows_skipped: int = 0


def _cell_text(value: object) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def _is_header(index: int, raw_value: object) -> bool:
    return index == 0 and parse_number(raw_value) is None


def _collect_quality(
    rows: Sequence[Row],
    mapping: SheetMapping,
    year_offset: int,
) -> tuple[dict[str, list[DataPoint]], int, int]:
    date_col = mapping.column_for("date")
    time_col = mapping.column_for("time")
    value_col = mapping.column_for("ccs_value")
    if not date_col or not value_col:
        if rows:
            logger.warning("Quality sheet has no date or CCS value column mapped; skipping")
        return {}, 0, len(rows)

    points: dict[str, list[DataPoint]] = defaultdict(list)
    auto_slot: dict[str, int] = defaultdict(int)
    used = skipped = 0

    for index, row in enumerate(rows):
        raw_value = row.get(value_col)
        if _is_header(index, raw_value):
            continue

        date_key = normalize_date(row.get(date_col), two_digit_year_offset=year_offset)
        value = parse_number(raw_value)
        if date_key is None or value is None or value <= 0:
            skipped += 1
            logger.debug(f"Quality row {index}: unusable date or value, skipped")
            continue

        time_cell = row.get(time_col) if time_col else None
        time_text = _cell_text(time_cell)
        if not time_text:
            time_text = TIME_SLOTS_2H[auto_slot[date_key] % len(TIME_SLOTS_2H)]
            auto_slot[date_key] += 1
        elif hour_from_time(time_cell) is None:
            skipped += 1
            logger.debug(f"Quality row {index}: unreadable time {time_text!r}, skipped")
            continue
        elif isinstance(time_cell, (time, datetime)):
            # str() of a datetime cell starts with its date part
            time_text = time_cell.strftime("%H:%M")

        points[date_key].append(DataPoint(value=value, time_slot=time_text))
        used += 1

    return points, used, skipped


def _collect_tonnage(
    rows: Sequence[Row],
    mapping: SheetMapping,
    year_offset: int,
) -> tuple[dict[str, float], int, int]:
    date_col = mapping.column_for("date")
    tonnage_col = mapping.column_for("tonnage")
    if not date_col or not tonnage_col:
        if rows:
            logger.warning("Tonnage sheet has no date or tonnage column mapped; skipping")
        return {}, 0, len(rows)

    totals: dict[str, float] = defaultdict(float)
    used = skipped = 0

    for index, row in enumerate(rows):
        raw_value = row.get(tonnage_col)
        if _is_header(index, raw_value):
            continue

        date_key = normalize_date(row.get(date_col), two_digit_year_offset=year_offset)
        if date_key is None:
            skipped += 1
            continue

        totals[date_key] += parse_number(raw_value) or 0.0
        used += 1

    return totals, used, skipped


def build_daily_records(
    quality_rows: Sequence[Row],
    tonnage_rows: Sequence[Row],
    quality_mapping: SheetMapping,
    tonnage_mapping: SheetMapping,
    *,
    two_digit_year_offset: int = TWO_DIGIT_YEAR_OFFSET,
) -> ImportResult:
    """Merge quality samples and tonnage into one record per date, sorted by date."""
    points, q_used, q_skipped = _collect_quality(quality_rows, quality_mapping, two_digit_year_offset)
    tonnage, t_used, t_skipped = _collect_tonnage(tonnage_rows, tonnage_mapping, two_digit_year_offset)

    records = []
    for date_key in set(points) | set(tonnage):
        parsed = parse_date_key(date_key)
        records.append(
            DailyRecord(
                day=parsed[2] if parsed else 0,
                date_str=date_key,
                tonnage=round1(tonnage[date_key]) if date_key in tonnage else 0.0,
                data_points=tuple(points.get(date_key, ())),
            )
        )
    records = sort_records(records)

    logger.info(
        f"Imported {len(records)} daily records "
        f"(quality rows: {q_used} used / {q_skipped} skipped; "
        f"tonnage rows: {t_used} used / {t_skipped} skipped)"
    )
    return ImportResult(
        records=records,
        quality_rows_used=q_used,
        quality_rows_skipped=q_skipped,
        tonnage_rows_used=t_used,
        tonnage_rows_skipped=t_skipped,
    )
