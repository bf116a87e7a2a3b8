"""Spreadsheet ingestion: cell normalization, record building and checks.

This module handles:
- Normalizing raw date, time and numeric cells
- Reading workbook sheets into rows keyed by column letter
- Merging quality and tonnage rows into one record per day
- Validating a record working set
"""

from .normalize import hour_from_time, is_valid_number, normalize_date, parse_number  # noqa
from .importer import ImportResult, build_daily_records  # noqa
from .workbook import list_sheets, read_sheet_rows, rows_from_frame  # noqa
from .validation import RecordValidationResult, validate_records  # noqa

__all__ = [
    "hour_from_time",
    "is_valid_number",
    "normalize_date",
    "parse_number",
    "ImportResult",
    "build_daily_records",
    "list_sheets",
    "read_sheet_rows",
    "rows_from_frame",
    "RecordValidationResult",
    "validate_records",
]
