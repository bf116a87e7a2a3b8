from datetime import date, datetime, time

import pytest

from ccs_quality.ingestion.normalize import (
    hour_from_time,
    is_valid_number,
    normalize_date,
    parse_number,
    round1,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,250", 1250.0),
        ("  300.5 ", 300.5),
        (42, 42.0),
        (0, 0.0),
        ("", None),
        (None, None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        (float("nan"), None),
        (True, None),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_is_valid_number():
    assert is_valid_number("1,000")
    assert not is_valid_number("   ")


def test_serial_date_uses_spreadsheet_epoch():
    assert normalize_date(45000) == "2023/03/15"
    assert normalize_date("45000") == "2023/03/15"
    # time-of-day fraction does not move the date
    assert normalize_date(45000.75) == "2023/03/15"


def test_month_day_year_text():
    assert normalize_date("3/5/1403") == "1403/03/05"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1403/01/05", "1403/01/05"),
        ("1403-1-5", "1403/01/05"),
        ("03/01/05", "1403/01/05"),
        ("1403/12/30 00:00:00", "1403/12/30"),
    ],
)
def test_year_month_day_text(raw, expected):
    assert normalize_date(raw) == expected


def test_two_digit_year_offset_is_configurable():
    assert normalize_date("24/02/10", two_digit_year_offset=2000) == "2024/02/10"


@pytest.mark.parametrize("raw", [None, "", "1403", "1403/05", "a/b/c", "1403/13/01", 0])
def test_unparseable_dates(raw):
    assert normalize_date(raw) is None


def test_date_objects():
    assert normalize_date(date(1403, 2, 9)) == "1403/02/09"
    assert normalize_date(datetime(2024, 11, 3, 8, 0)) == "2024/11/03"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0.25, 6),
        ("0.25", 6),
        (0.0, 0),
        (0.9999, 0),
        (0.999, 23),
        (7.9, 7),
        ("06:00", 6),
        ("14:30:00", 14),
        ("2:00 PM", 14),
        ("12:00 PM", 12),
        ("12:00 AM", 0),
        ("9 am", 9),
        ("24:00", 0),
        (time(22, 30), 22),
    ],
)
def test_hour_from_time(raw, expected):
    assert hour_from_time(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "25:00", "-1", True])
def test_unparseable_times(raw):
    assert hour_from_time(raw) is None


def test_round1_rounds_half_up():
    assert round1(0.25) == 0.3
    assert round1(302.5) == 302.5
    assert round1(-0.25) == -0.3
