from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ccs_quality.models import SamplingMode

ColumnRole = Literal["date", "time", "ccs_value", "tonnage", "ignore"]

FIXED_PROFILE_ID = "ccs_fixed"
CUSTOM_PROFILE_ID = "ccs_custom"


class Rule(BaseModel):
    """One tier of the compliance-percentage -> factor mapping.

    ``min_op`` selects the strictness of the lower bound: ``gt``/``lt`` are
    exclusive (the editor writes ``min < x`` as ``lt``), ``ge``/``le`` are
    inclusive. ``max_op`` is ``lt`` (exclusive) or ``le`` (inclusive).
    ``factor`` is a percentage of tonnage; ``<= -100`` marks full rejection.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    min_value: float = Field(alias="min")
    min_op: Literal["lt", "le", "gt", "ge"] = Field(default="ge", alias="minOp")
    max_value: float = Field(alias="max")
    max_op: Literal["lt", "le"] = Field(default="lt", alias="maxOp")
    label: str = ""
    type: Literal["success", "warning", "danger"] = "success"
    factor: float = 0.0


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    readonly: bool = False
    rules: list[Rule] = Field(default_factory=list)


class AppConfig(BaseModel):
    """Reporting month plus the standard and custom acceptable CCS bands."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    year: int = 1403
    month: int = Field(default=11, ge=1, le=12)
    min_range: float = Field(default=260, alias="minRange")
    max_range: float = Field(default=310, alias="maxRange")
    custom_min_range: float = Field(default=260, alias="customMinRange")
    custom_max_range: float = Field(default=310, alias="customMaxRange")


class SheetMapping(BaseModel):
    sheet_name: str = ""
    # column identifier (e.g. "A") -> semantic role
    columns: dict[str, ColumnRole] = Field(default_factory=dict)

    def column_for(self, role: ColumnRole) -> str | None:
        return next((col for col, r in self.columns.items() if r == role), None)


class ImportConfig(BaseModel):
    quality: SheetMapping = SheetMapping()
    tonnage: SheetMapping = SheetMapping()


class StorageConfig(BaseModel):
    table: str = "ccs_storage"
    record_id: str = "main_records"
    cache_path: str = ".cache/ccs_records.json"
    timeout_sec: float = 5.0


def _rule(lo, lo_op, hi, hi_op, label, kind, factor) -> Rule:
    return Rule(
        min_value=lo, min_op=lo_op, max_value=hi, max_op=hi_op, label=label, type=kind, factor=factor
    )


DEFAULT_PROFILES: tuple[Profile, ...] = (
    Profile(
        id=FIXED_PROFILE_ID,
        name="Contract rules (standard)",
        rules=[
            _rule(0, "ge", 65, "lt", "Rejected (REJ)", "danger", -100),
            _rule(65, "gt", 70, "le", "2% tonnage penalty", "warning", -2),
            _rule(70, "gt", 73, "le", "1% tonnage penalty", "warning", -1),
            _rule(73, "gt", 75, "le", "0.5% tonnage penalty", "warning", -0.5),
            _rule(75, "gt", 80, "lt", "Accepted (no penalty)", "success", 0),
            _rule(80, "ge", 83, "lt", "0.5% bonus", "success", 0.5),
            _rule(83, "ge", 85, "lt", "1% bonus", "success", 1),
            _rule(85, "ge", 90, "lt", "1.5% bonus", "success", 1.5),
            _rule(90, "ge", 1000, "lt", "2% bonus", "success", 2),
        ],
    ),
    Profile(
        id=CUSTOM_PROFILE_ID,
        name="New rules (custom)",
        rules=[
            _rule(0, "ge", 65, "lt", "REJ", "danger", -100),
            _rule(65, "ge", 1000, "lt", "Accepted", "success", 0),
        ],
    ),
)


class ProjectConfig(BaseModel):
    app: AppConfig = AppConfig()
    profiles: list[Profile] = Field(default_factory=lambda: list(DEFAULT_PROFILES))
    sampling_mode: SamplingMode = "2h"
    # Two-digit years in date cells are read as Solar Hijri 14xx years.
    two_digit_year_offset: int = 1400
    imports: ImportConfig = ImportConfig()
    storage: StorageConfig = StorageConfig()


def load_config(path: str | Path) -> ProjectConfig:
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return ProjectConfig.model_validate(data)
