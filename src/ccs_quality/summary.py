"""Prompt building for the free-text quality summary.

The text generator itself is injected: any callable taking a prompt and
returning text (an LLM client wrapper, a canned responder in tests).
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Sequence

from ccs_quality.aggregation import daily_values
from ccs_quality.config import AppConfig
from ccs_quality.models import DailyRecord, filter_month

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]

NO_MONTH_DATA_MESSAGE = "No data is available for this month."
NO_ANALYSIS_MESSAGE = "No analysis was produced."


def build_analysis_prompt(records: Sequence[DailyRecord], config: AppConfig) -> str:
    lines = []
    for record, value in daily_values(records):
        lines.append(f"Day {record.day}: {'No Data' if math.isnan(value) else value}")

    return "\n".join(
        [
            "Analyze the following CCS (Cold Crushing Strength) quality data "
            f"for month {config.month} of year {config.year}.",
            "",
            "Configuration:",
            f"- Standard Range: {config.min_range} - {config.max_range}",
            f"- Custom Range: {config.custom_min_range} - {config.custom_max_range}",
            "",
            "Data Summary (daily mean):",
            *lines,
            "",
            "Please provide:",
            "1. A summary of the quality trends.",
            "2. Identification of any problematic days (Low/High CCS).",
            "3. Recommendations for process improvement based on the data.",
        ]
    )


def analyze_quality_data(
    records: Sequence[DailyRecord],
    config: AppConfig,
    generate: TextGenerator,
) -> str:
    """Summarize the configured month; generator errors come back as text."""
    month_records = filter_month(records, config.year, config.month)
    if not month_records:
        return NO_MONTH_DATA_MESSAGE

    prompt = build_analysis_prompt(month_records, config)
    try:
        text = generate(prompt)
    except Exception as e:
        logger.error(f"Summary generation failed: {e}")
        return f"Analysis failed: {e}"
    return text or NO_ANALYSIS_MESSAGE
