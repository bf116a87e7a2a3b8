"""Tiered rule matching and per-value band classification."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

from ccs_quality.config import Rule

NO_RULE_LABEL = "no rule"
NO_DATA_LABEL = "no data"
REJECTION_FACTOR = -100.0


class RangeStatus(Enum):
    """Where one value sits relative to an acceptable band."""
    IN_RANGE = "IN_RANGE"
    LOW = "LOW"
    HIGH = "HIGH"
    MISSING = "MISSING"


def rule_matches(value: float, rule: Rule) -> bool:
    # gt/lt lower bounds are exclusive, ge/le inclusive
    if rule.min_op in ("gt", "lt"):
        min_ok = value > rule.min_value
    else:
        min_ok = value >= rule.min_value
    if rule.max_op == "lt":
        max_ok = value < rule.max_value
    else:
        max_ok = value <= rule.max_value
    return min_ok and max_ok


def match_rule(value: float, rules: Iterable[Rule]) -> Rule | None:
    """Return the first rule whose interval contains ``value``, else None.

    Rules are scanned in list order with no rounding, so overlapping tiers
    resolve to the earliest one and gaps in coverage return None.
    """
    return next((r for r in rules if rule_matches(value, r)), None)


def is_rejection(rule: Rule | None) -> bool:
    return rule is not None and rule.factor <= REJECTION_FACTOR


def classify_value(value: float | None, low: float, high: float) -> RangeStatus:
    """Classify a value against the inclusive band ``[low, high]``."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return RangeStatus.MISSING
    if low <= value <= high:
        return RangeStatus.IN_RANGE
    if value < low:
        return RangeStatus.LOW
    return RangeStatus.HIGH
