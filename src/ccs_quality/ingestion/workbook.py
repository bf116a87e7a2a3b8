"""Read workbook sheets into raw rows keyed by spreadsheet column letter."""

from __future__ import annotations

from pathlib import Path

import pandas as pd


def column_letter(index: int) -> str:
    """0 -> "A", 25 -> "Z", 26 -> "AA"."""
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def rows_from_frame(raw: pd.DataFrame) -> list[dict[str, object]]:
    """Turn a header-less frame into row dicts; blank cells become None."""
    raw = raw.astype(object).where(raw.notna(), None)
    raw.columns = [column_letter(i) for i in range(len(raw.columns))]
    return raw.to_dict(orient="records")


def list_sheets(path: str | Path) -> list[str]:
    with pd.ExcelFile(path, engine="openpyxl") as xlsx:
        return [str(s) for s in xlsx.sheet_names]


def read_sheet_rows(path: str | Path, sheet_name: str) -> list[dict[str, object]]:
    path = Path(path)
    sheets = list_sheets(path)
    if sheet_name not in sheets:
        raise ValueError(f"Sheet {sheet_name!r} not found in {path.name}. Available: {sheets}")
    raw = pd.read_excel(path, sheet_name=sheet_name, header=None, engine="openpyxl", dtype=object)
    return rows_from_frame(raw)
