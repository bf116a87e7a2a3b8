import math

import pytest

from ccs_quality.config import DEFAULT_PROFILES, Rule
from ccs_quality.rules import RangeStatus, classify_value, is_rejection, match_rule, rule_matches

FIXED_RULES = DEFAULT_PROFILES[0].rules
CUSTOM_RULES = DEFAULT_PROFILES[1].rules


def _rule(lo, lo_op, hi, hi_op, factor=0.0, label=""):
    return Rule(min=lo, minOp=lo_op, max=hi, maxOp=hi_op, factor=factor, label=label)


@pytest.mark.parametrize(
    "pct, factor",
    [
        (0.0, -100),
        (40.0, -100),
        (64.99, -100),
        (70.0, -2),
        (72.5, -1),
        (75.0, -0.5),
        (79.99, 0),
        (80.0, 0.5),
        (82.0, 0.5),
        (83.0, 1),
        (89.9, 1.5),
        (100.0, 2),
    ],
)
def test_default_contract_tiers(pct, factor):
    assert match_rule(pct, FIXED_RULES).factor == factor


def test_gap_in_coverage_is_no_rule():
    # [0, 65) then (65, 70]: exactly 65 is covered by neither tier
    assert match_rule(65.0, FIXED_RULES) is None
    assert match_rule(-1.0, FIXED_RULES) is None


def test_no_rule_is_distinct_from_zero_factor():
    zero_tier = match_rule(77.0, FIXED_RULES)
    assert zero_tier is not None and zero_tier.factor == 0
    assert match_rule(65.0, FIXED_RULES) is None


def test_first_match_wins_on_overlap():
    rules = [
        _rule(0, "ge", 100, "le", factor=1, label="wide"),
        _rule(50, "ge", 60, "lt", factor=2, label="narrow"),
    ]
    assert match_rule(55, rules).label == "wide"
    assert match_rule(55, list(reversed(rules))).label == "narrow"


@pytest.mark.parametrize(
    "op, value, expected",
    [
        ("gt", 10, False),
        ("lt", 10, False),
        ("ge", 10, True),
        ("le", 10, True),
        ("gt", 10.0000001, True),
    ],
)
def test_lower_bound_strictness(op, value, expected):
    assert rule_matches(value, _rule(10, op, 20, "le")) is expected


def test_upper_bound_strictness():
    assert not rule_matches(20, _rule(10, "ge", 20, "lt"))
    assert rule_matches(20, _rule(10, "ge", 20, "le"))


def test_no_rounding_before_comparison():
    assert match_rule(79.99999999, FIXED_RULES).factor == 0


def test_rejection_marker():
    assert is_rejection(match_rule(10, CUSTOM_RULES))
    assert not is_rejection(match_rule(70, CUSTOM_RULES))
    assert not is_rejection(None)


def test_classify_value_band_is_inclusive():
    assert classify_value(260, 260, 310) is RangeStatus.IN_RANGE
    assert classify_value(310, 260, 310) is RangeStatus.IN_RANGE
    assert classify_value(259.9, 260, 310) is RangeStatus.LOW
    assert classify_value(311, 260, 310) is RangeStatus.HIGH
    assert classify_value(math.nan, 260, 310) is RangeStatus.MISSING
    assert classify_value(None, 260, 310) is RangeStatus.MISSING
