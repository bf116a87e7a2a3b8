"""Consistency checks for a working set of daily records."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from ccs_quality.ingestion.normalize import parse_number
from ccs_quality.models import DailyRecord, parse_date_key

logger = logging.getLogger(__name__)


@dataclass
class RecordValidationResult:
    """Results of validating a record set."""

    is_valid: bool
    num_records: int
    num_samples: int = 0
    date_range: tuple[str, str] | None = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    summary: str = ""

    def __str__(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        lines = [
            f"{status} | {self.num_records} records, {self.num_samples} samples",
        ]
        if self.date_range:
            lines.append(f"  Date range: {self.date_range[0]} to {self.date_range[1]}")
        if self.warnings:
            lines.append(f"  Warnings ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"    - {w}")
        if self.errors:
            lines.append(f"  Errors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"    - {e}")
        return "\n".join(lines)


def validate_records(records: Sequence[DailyRecord]) -> RecordValidationResult:
    """Validate a record set before it is stored or reported on.

    Errors: malformed or duplicate ``date_str`` keys, negative tonnage.
    Warnings: unsorted records, ``day`` disagreeing with ``date_str``,
    non-numeric sample values, days with neither samples nor tonnage.
    """
    result = RecordValidationResult(
        is_valid=True,
        num_records=len(records),
        num_samples=sum(len(r.data_points) for r in records),
    )

    if not records:
        result.warnings.append("No records")
        result.summary = "Empty record set"
        return result

    keys = []
    for r in records:
        parsed = parse_date_key(r.date_str)
        if parsed is None:
            result.errors.append(f"Malformed date key: {r.date_str!r}")
            continue
        keys.append(parsed)
        if parsed[2] != r.day:
            result.warnings.append(f"{r.date_str}: day field is {r.day}")
        if r.tonnage < 0:
            result.errors.append(f"{r.date_str}: negative tonnage {r.tonnage}")
        bad_values = sum(1 for p in r.data_points if parse_number(p.value) is None)
        if bad_values:
            result.warnings.append(f"{r.date_str}: {bad_values} non-numeric sample value(s)")
        if not r.data_points and not r.tonnage:
            result.warnings.append(f"{r.date_str}: no samples and no tonnage")

    dupes = [k for k, n in Counter(r.date_str for r in records).items() if n > 1]
    if dupes:
        result.errors.append(f"{len(dupes)} duplicate date key(s), e.g. {dupes[:3]}")

    if keys != sorted(keys):
        result.warnings.append("Records are not sorted by date")

    if keys:
        lo, hi = min(keys), max(keys)
        result.date_range = (f"{lo[0]}/{lo[1]:02d}/{lo[2]:02d}", f"{hi[0]}/{hi[1]:02d}/{hi[2]:02d}")

    result.is_valid = not result.errors
    if result.errors:
        result.summary = f"{len(result.errors)} validation error(s)"
    elif result.warnings:
        result.summary = f"Valid with {len(result.warnings)} warning(s)"
    else:
        result.summary = "All checks passed"

    if not result.is_valid:
        logger.warning(f"Record validation failed: {result.summary}")
    return result
