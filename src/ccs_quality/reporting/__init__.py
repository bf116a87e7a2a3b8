from .periodic import (  # noqa
    WEEK_WINDOWS,
    ImpactTotals,
    MonthReport,
    PeriodRange,
    PeriodReport,
    WeekReport,
    build_month_report,
    build_period_report,
    calculate_total_impact,
    report_to_frame,
)

__all__ = [
    "WEEK_WINDOWS",
    "ImpactTotals",
    "MonthReport",
    "PeriodRange",
    "PeriodReport",
    "WeekReport",
    "build_month_report",
    "build_period_report",
    "calculate_total_impact",
    "report_to_frame",
]
