"""Month and week-window rollups of tonnage impact.

Every month is cut into the same four windows regardless of its length:
days 1-7, 8-14, 15-22 and 23-31. Totals over any range are plain sums of
window impacts, so a month total always equals the sum of its windows and
a period total equals the sum of its months.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import pandas as pd

from ccs_quality.config import AppConfig, Profile
from ccs_quality.models import DailyRecord, SamplingMode, filter_month, parse_date_key
from ccs_quality.stats import WeekStats, calculate_week_stats
from ccs_quality.utils.dates import iter_months, month_name

logger = logging.getLogger(__name__)

# Reporting convention, not calendar weeks: day 22 belongs to window 3 only.
WEEK_WINDOWS: tuple[tuple[int, int], ...] = ((1, 7), (8, 14), (15, 22), (23, 31))
WEEK_NAMES: tuple[str, ...] = ("Week 1", "Week 2", "Week 3", "Week 4+")


@dataclass(frozen=True)
class ImpactTotals:
    fixed: float = 0.0
    custom: float = 0.0
    tonnage: float = 0.0


@dataclass(frozen=True)
class PeriodRange:
    """Inclusive year/month range."""
    start_year: int
    start_month: int
    end_year: int
    end_month: int

    def contains(self, year: int, month: int) -> bool:
        return (self.start_year, self.start_month) <= (year, month) <= (self.end_year, self.end_month)

    def months(self) -> list[tuple[int, int]]:
        return list(iter_months(self.start_year, self.start_month, self.end_year, self.end_month))


@dataclass(frozen=True)
class WeekReport:
    index: int
    name: str
    first_day: int
    last_day: int
    stats: WeekStats


@dataclass(frozen=True)
class MonthReport:
    year: int
    month: int
    month_name: str
    weeks: list[WeekReport]
    totals: ImpactTotals


@dataclass(frozen=True)
class PeriodReport:
    period: PeriodRange
    summary: ImpactTotals
    months: list[MonthReport] = field(default_factory=list)


def _record_day(record: DailyRecord) -> int | None:
    parsed = parse_date_key(record.date_str)
    return parsed[2] if parsed else None


def window_records(records: Iterable[DailyRecord], first_day: int, last_day: int) -> list[DailyRecord]:
    out = []
    for r in records:
        day = _record_day(r)
        if day is not None and first_day <= day <= last_day:
            out.append(r)
    return out


def calculate_total_impact(
    records: Iterable[DailyRecord],
    config: AppConfig,
    profiles: Sequence[Profile],
    mode: SamplingMode,
) -> ImpactTotals:
    """Sum window impacts and tonnage over every month present in ``records``.

    Records are grouped by their parsed year and month (so ``1403/1/5`` and
    ``1403/01/06`` share a month), then by week window; each non-empty
    window is rated on its own. Records with malformed keys are ignored.
    """
    by_month: dict[tuple[int, int], list[DailyRecord]] = defaultdict(list)
    for r in records:
        parsed = parse_date_key(r.date_str)
        if parsed:
            by_month[parsed[:2]].append(r)

    fixed = custom = tonnage = 0.0
    for month_records in by_month.values():
        for first_day, last_day in WEEK_WINDOWS:
            week = window_records(month_records, first_day, last_day)
            if not week:
                continue
            stats = calculate_week_stats(week, config, profiles, mode)
            fixed += stats.fixed.impact
            custom += stats.custom.impact
            tonnage += stats.total_tonnage

    return ImpactTotals(fixed=fixed, custom=custom, tonnage=tonnage)


def build_month_report(
    records: Iterable[DailyRecord],
    year: int,
    month: int,
    config: AppConfig,
    profiles: Sequence[Profile],
    mode: SamplingMode,
) -> MonthReport:
    """Rate all four windows of one month; empty windows report ``no data``."""
    month_records = filter_month(records, year, month)

    weeks = []
    fixed = custom = tonnage = 0.0
    for i, (first_day, last_day) in enumerate(WEEK_WINDOWS):
        stats = calculate_week_stats(
            window_records(month_records, first_day, last_day), config, profiles, mode
        )
        weeks.append(
            WeekReport(index=i + 1, name=WEEK_NAMES[i], first_day=first_day, last_day=last_day, stats=stats)
        )
        fixed += stats.fixed.impact
        custom += stats.custom.impact
        tonnage += stats.total_tonnage

    return MonthReport(
        year=year,
        month=month,
        month_name=month_name(month),
        weeks=weeks,
        totals=ImpactTotals(fixed=fixed, custom=custom, tonnage=tonnage),
    )


def build_period_report(
    records: Iterable[DailyRecord],
    period: PeriodRange,
    config: AppConfig,
    profiles: Sequence[Profile],
    mode: SamplingMode,
) -> PeriodReport:
    """Summary totals plus a month-by-month, week-by-week breakdown.

    An end month before the start month yields an empty report.
    """
    in_range = []
    for r in records:
        parsed = parse_date_key(r.date_str)
        if parsed and period.contains(parsed[0], parsed[1]):
            in_range.append(r)

    months = [
        build_month_report(in_range, year, month, config, profiles, mode)
        for year, month in period.months()
    ]
    summary = calculate_total_impact(in_range, config, profiles, mode)

    logger.debug(
        f"Period report {period.start_year}/{period.start_month:02d}-"
        f"{period.end_year}/{period.end_month:02d}: {len(in_range)} records, {len(months)} months"
    )
    return PeriodReport(period=period, summary=summary, months=months)


def report_to_frame(report: PeriodReport) -> pd.DataFrame:
    """Flatten a period report into one row per month and week window."""
    rows = []
    for m in report.months:
        for w in m.weeks:
            s = w.stats
            rows.append(
                {
                    "year": m.year,
                    "month": m.month,
                    "month_name": m.month_name,
                    "week": w.name,
                    "samples": s.total_count,
                    "tonnage": s.total_tonnage,
                    "pct_fixed": s.fixed.pct,
                    "rule_fixed": s.fixed.label,
                    "impact_fixed": s.fixed.impact,
                    "rejected_fixed": s.fixed.is_rejected,
                    "pct_custom": s.custom.pct,
                    "rule_custom": s.custom.label,
                    "impact_custom": s.custom.impact,
                    "rejected_custom": s.custom.is_rejected,
                }
            )
    columns = [
        "year", "month", "month_name", "week", "samples", "tonnage",
        "pct_fixed", "rule_fixed", "impact_fixed", "rejected_fixed",
        "pct_custom", "rule_custom", "impact_custom", "rejected_custom",
    ]
    return pd.DataFrame(rows, columns=columns)
