"""CCS quality compliance and tonnage impact engine.

Raw spreadsheet rows are normalized into daily records, aggregated per
sampling mode, rated against tiered rule profiles per week window and
rolled up into month and period totals.
"""

from .config import load_config, ProjectConfig, AppConfig, Profile, Rule, DEFAULT_PROFILES
from .models import DailyRecord, DataPoint
