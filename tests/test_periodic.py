import pytest

from ccs_quality.reporting import (
    WEEK_WINDOWS,
    PeriodRange,
    build_month_report,
    build_period_report,
    calculate_total_impact,
    report_to_frame,
)
from ccs_quality.reporting.periodic import window_records
from ccs_quality.utils.dates import iter_months

from conftest import make_record, samples_2h


@pytest.fixture
def month_records():
    return [
        make_record("1403/01/03", samples_2h(280, 290, 300, 305, 320), tonnage=1000),
        make_record("1403/01/10", samples_2h(200, 210, 300), tonnage=800),
        make_record("1403/01/22", samples_2h(280, 290), tonnage=550.5),
        make_record("1403/01/23", samples_2h(280, 200, 210, 300, 301), tonnage=900),
        make_record("1403/01/31", samples_2h(305), tonnage=100),
    ]


def test_week_windows_do_not_overlap():
    days = [d for lo, hi in WEEK_WINDOWS for d in range(lo, hi + 1)]
    assert days == list(range(1, 32))


def test_day_22_belongs_to_window_3(month_records):
    assert [r.day for r in window_records(month_records, 15, 22)] == [22]
    assert [r.day for r in window_records(month_records, 23, 31)] == [23, 31]


def test_empty_input(app_config, profiles):
    totals = calculate_total_impact([], app_config, profiles, "2h")
    assert (totals.fixed, totals.custom, totals.tonnage) == (0, 0, 0)


def test_month_total_is_sum_of_windows(month_records, app_config, profiles):
    month = build_month_report(month_records, 1403, 1, app_config, profiles, "2h")
    totals = calculate_total_impact(month_records, app_config, profiles, "2h")

    assert sum(w.stats.fixed.impact for w in month.weeks) == totals.fixed
    assert sum(w.stats.custom.impact for w in month.weeks) == totals.custom
    assert month.totals == totals
    assert totals.tonnage == 3350.5


def test_month_report_window_details(month_records, app_config, profiles):
    month = build_month_report(month_records, 1403, 1, app_config, profiles, "2h")
    w1, w2, w3, w4 = month.weeks

    assert w1.stats.fixed.impact == 5.0  # 80% -> +0.5%
    assert w2.stats.fixed.is_rejected  # 1 of 3 in range
    assert w2.stats.fixed.impact == -800.0
    assert w3.stats.fixed.impact == 11.01  # 100% -> +2%
    assert w4.stats.total_count == 6
    assert month.month_name == "Farvardin"


def test_empty_windows_are_reported(app_config, profiles):
    records = [make_record("1403/02/09", samples_2h(300), tonnage=10)]
    month = build_month_report(records, 1403, 2, app_config, profiles, "2h")
    labels = [w.stats.fixed.label for w in month.weeks]
    assert labels[0] == "no data"
    assert labels[2:] == ["no data", "no data"]
    assert month.weeks[1].stats.has_data


def test_totals_group_by_month_before_windows(app_config, profiles):
    # Same day-of-month in two months must be rated as two separate windows.
    records = [
        make_record("1403/01/03", samples_2h(280, 290, 300, 305, 320), tonnage=1000),
        make_record("1403/02/03", samples_2h(200, 210, 220, 280, 290), tonnage=1000),
    ]
    totals = calculate_total_impact(records, app_config, profiles, "2h")
    assert totals.fixed == 5.0 - 1000.0


def test_iter_months_wraps_year():
    assert list(iter_months(1403, 11, 1404, 2)) == [(1403, 11), (1403, 12), (1404, 1), (1404, 2)]


def test_end_before_start_is_empty(month_records, app_config, profiles):
    report = build_period_report(month_records, PeriodRange(1403, 5, 1403, 2), app_config, profiles, "2h")
    assert report.months == []
    assert report.summary.fixed == 0 and report.summary.tonnage == 0


def test_period_report_filters_to_range(month_records, app_config, profiles):
    extra = [
        make_record("1402/12/29", samples_2h(100), tonnage=5000),
        make_record("1403/03/01", samples_2h(300), tonnage=50),
    ]
    period = PeriodRange(1403, 1, 1403, 2)
    report = build_period_report(month_records + extra, period, app_config, profiles, "2h")

    assert [(m.year, m.month) for m in report.months] == [(1403, 1), (1403, 2)]
    assert report.summary.tonnage == 3350.5
    assert report.summary.fixed == pytest.approx(sum(m.totals.fixed for m in report.months))
    assert report.months[1].totals.tonnage == 0


def test_report_to_frame(month_records, app_config, profiles):
    report = build_period_report(month_records, PeriodRange(1403, 1, 1403, 1), app_config, profiles, "2h")
    df = report_to_frame(report)

    assert len(df) == 4
    assert list(df["week"]) == ["Week 1", "Week 2", "Week 3", "Week 4+"]
    assert df["impact_fixed"].sum() == pytest.approx(report.summary.fixed)
    assert bool(df.loc[1, "rejected_fixed"])


def test_unpadded_keys_share_a_month(app_config, profiles):
    records = [
        make_record("1403/1/5", samples_2h(280, 290, 300, 305), tonnage=1000),
        make_record("1403/01/06", samples_2h(200), tonnage=1000),
    ]
    month = build_month_report(records, 1403, 1, app_config, profiles, "2h")
    totals = calculate_total_impact(records, app_config, profiles, "2h")

    assert month.weeks[0].stats.fixed.pct == pytest.approx(80.0)
    assert totals.fixed == 10.0  # one window at 80% -> +0.5% of 2000 t
    assert month.totals == totals
