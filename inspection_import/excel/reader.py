from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData

"""Workbook source: decode an .xlsx file into sheets of raw rows.

The header row (first row by default) supplies column labels; every later row
becomes a dict of label -> cell value with empty cells dropped, so that a
blank cell and a missing column are indistinguishable downstream. Fully
empty rows are skipped.

keep_default_na=False keeps literal strings such as "N/A" or "-" as text;
only truly empty cells are treated as missing.
"""


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be opened or decoded."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[RowData] = field(default_factory=list)


def _is_empty_cell(value: Any) -> bool:
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):  # pragma: no cover - array-like cell
        return False


def read_excel_file(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read an Excel file returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheet names (None -> every sheet)
    """
    if not path.exists():
        raise WorkbookReadError(f"workbook not found: {path}")
    wanted = set(target_sheets) if target_sheets is not None else None
    dfs: dict[str, pd.DataFrame] = {}
    try:
        with pd.ExcelFile(path) as xls:
            for name in xls.sheet_names:
                if wanted is not None and str(name) not in wanted:
                    continue
                # header は normalize_sheet で適用するため生読み
                dfs[str(name)] = xls.parse(name, header=None, keep_default_na=False, na_values=[])
    except Exception as e:
        raise WorkbookReadError(f"cannot read workbook {path.name}: {e}") from e
    return dfs


def normalize_sheet(df: pd.DataFrame, sheet_name: str, header_row: int = 0) -> SheetData:
    """Apply the header row and convert the remaining rows to RowData.

    A sheet with no header row yields no rows (not an error).
    """
    if df.shape[0] <= header_row:
        return SheetData(sheet_name=sheet_name, columns=[])
    columns = [
        "" if _is_empty_cell(c) else str(c).strip()
        for c in df.iloc[header_row].tolist()
    ]
    rows: list[RowData] = []
    for offset, raw in enumerate(df.iloc[header_row + 1:].itertuples(index=False, name=None)):
        values: dict[str, Any] = {}
        for col, val in zip(columns, raw, strict=False):
            if not col or _is_empty_cell(val) or col in values:
                continue
            values[col] = val
        if not values:
            continue
        # Excel row number: header_row is 0-based, rows are 1-based
        rows.append(RowData(sheet_name=sheet_name, row_number=header_row + 2 + offset, values=values))
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)


def read_workbook(
    path: Path, target_sheets: Iterable[str] | None = None, header_row: int = 0
) -> list[SheetData]:
    """Read every (or every targeted) sheet of a workbook in workbook order."""
    raw = read_excel_file(path, target_sheets=target_sheets)
    return [normalize_sheet(df, name, header_row=header_row) for name, df in raw.items()]
