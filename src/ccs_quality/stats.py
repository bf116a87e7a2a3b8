"""Compliance counts, percentages and tonnage impact for one reporting window."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from ccs_quality.aggregation import aggregate_values
from ccs_quality.config import CUSTOM_PROFILE_ID, FIXED_PROFILE_ID, AppConfig, Profile, Rule
from ccs_quality.models import DailyRecord, SamplingMode
from ccs_quality.rules import NO_DATA_LABEL, NO_RULE_LABEL, RangeStatus, classify_value, is_rejection, match_rule


@dataclass(frozen=True)
class BandCounts:
    in_range: int = 0
    low: int = 0
    high: int = 0


@dataclass(frozen=True)
class BandStats:
    """Result for one acceptable band under its rule profile.

    ``rule`` is None both for empty windows (label ``no data``) and for
    percentages no tier covers (label ``no rule``); in either case the
    factor and impact are 0.
    """

    counts: BandCounts
    pct: float
    rule: Rule | None
    impact: float
    label: str

    @property
    def matched(self) -> bool:
        return self.rule is not None

    @property
    def factor(self) -> float:
        return self.rule.factor if self.rule is not None else 0.0

    @property
    def is_rejected(self) -> bool:
        return is_rejection(self.rule)

    @property
    def severity(self) -> str | None:
        return self.rule.type if self.rule is not None else None


@dataclass(frozen=True)
class WeekStats:
    total_count: int
    total_tonnage: float
    fixed: BandStats
    custom: BandStats

    @property
    def has_data(self) -> bool:
        return self.total_count > 0


def find_profile(profiles: Iterable[Profile], profile_id: str) -> Profile | None:
    return next((p for p in profiles if p.id == profile_id), None)


def _count_band(values: Sequence[float], low: float, high: float) -> BandCounts:
    statuses = [classify_value(v, low, high) for v in values]
    return BandCounts(
        in_range=statuses.count(RangeStatus.IN_RANGE),
        low=statuses.count(RangeStatus.LOW),
        high=statuses.count(RangeStatus.HIGH),
    )


def _band_stats(counts: BandCounts, total: int, tonnage: float, profile: Profile | None) -> BandStats:
    if total == 0:
        return BandStats(counts=counts, pct=0.0, rule=None, impact=0.0, label=NO_DATA_LABEL)

    pct = counts.in_range / total * 100
    rule = match_rule(pct, profile.rules) if profile is not None else None
    if rule is None:
        return BandStats(counts=counts, pct=pct, rule=None, impact=0.0, label=NO_RULE_LABEL)
    return BandStats(
        counts=counts,
        pct=pct,
        rule=rule,
        impact=tonnage * rule.factor / 100,
        label=rule.label,
    )


def calculate_week_stats(
    records: Iterable[DailyRecord],
    config: AppConfig,
    profiles: Sequence[Profile],
    mode: SamplingMode,
) -> WeekStats:
    """Rate one window of daily records against both bands.

    Every aggregated, non-NaN value of every record is one sample. The
    standard band is rated with the ``ccs_fixed`` profile and the custom
    band with ``ccs_custom``. Impact is ``window tonnage * factor / 100``.
    """
    total_tonnage = 0.0
    values: list[float] = []
    for record in records:
        if record.tonnage:
            total_tonnage += float(record.tonnage)
        values.extend(v for v in aggregate_values(record, mode) if not math.isnan(v))

    total = len(values)
    fixed_counts = _count_band(values, config.min_range, config.max_range)
    custom_counts = _count_band(values, config.custom_min_range, config.custom_max_range)

    return WeekStats(
        total_count=total,
        total_tonnage=total_tonnage,
        fixed=_band_stats(fixed_counts, total, total_tonnage, find_profile(profiles, FIXED_PROFILE_ID)),
        custom=_band_stats(custom_counts, total, total_tonnage, find_profile(profiles, CUSTOM_PROFILE_ID)),
    )
