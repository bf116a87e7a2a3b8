from ccs_quality.config import AppConfig
from ccs_quality.summary import NO_MONTH_DATA_MESSAGE, analyze_quality_data, build_analysis_prompt

from conftest import make_record

CONFIG = AppConfig(year=1403, month=11, min_range=260, max_range=310, custom_min_range=250, custom_max_range=320)
RECORDS = [
    make_record("1403/11/01", {"06:00": 300, "08:00": 311}),
    make_record("1403/11/02", tonnage=40),
    make_record("1403/10/30", {"06:00": 999}),
]


def test_prompt_lists_daily_means():
    prompt = build_analysis_prompt(RECORDS[:2], CONFIG)
    assert "month 11 of year 1403" in prompt
    assert "Day 1: 305.5" in prompt
    assert "Day 2: No Data" in prompt
    assert "Standard Range: 260.0 - 310.0" in prompt
    assert "Custom Range: 250.0 - 320.0" in prompt


def test_analysis_uses_configured_month_only():
    seen = []

    def generate(prompt):
        seen.append(prompt)
        return "ok"

    assert analyze_quality_data(RECORDS, CONFIG, generate) == "ok"
    assert "999" not in seen[0]


def test_no_month_data():
    assert analyze_quality_data(RECORDS, CONFIG.model_copy(update={"month": 5}), lambda p: "x") == NO_MONTH_DATA_MESSAGE


def test_generator_errors_become_text():
    def broken(prompt):
        raise RuntimeError("quota exceeded")

    assert analyze_quality_data(RECORDS, CONFIG, broken) == "Analysis failed: quota exceeded"
