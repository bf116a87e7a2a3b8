from __future__ import annotations

import pytest

from ccs_quality.config import DEFAULT_PROFILES, AppConfig
from ccs_quality.models import DailyRecord, DataPoint


def make_record(date_str: str, samples: dict[str, float] | None = None, tonnage: float = 0.0) -> DailyRecord:
    return DailyRecord(
        day=int(date_str.split("/")[2]),
        date_str=date_str,
        tonnage=tonnage,
        data_points=tuple(DataPoint(value=v, time_slot=t) for t, v in (samples or {}).items()),
    )


def samples_2h(*values: float) -> dict[str, float]:
    """Map values onto the 2-hour schedule starting at 06:00."""
    slots = ["06:00", "08:00", "10:00", "12:00", "14:00", "16:00",
             "18:00", "20:00", "22:00", "00:00", "02:00", "04:00"]
    return dict(zip(slots, values))


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(year=1403, month=1, min_range=260, max_range=310, custom_min_range=250, custom_max_range=320)


@pytest.fixture
def profiles():
    return list(DEFAULT_PROFILES)
