from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model for the inspection workbook importer.

RowData represents a single raw spreadsheet row after decoding: column label ->
cell value, with empty cells already dropped. Rows carry no identity beyond
their position in the sheet.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """One raw worksheet row.

    The row_number refers to the original Excel row number (header is row 1,
    so the first data row is row 2 with the default header position).
    """
    sheet_name: str  # Source worksheet
    row_number: int  # 1-based Excel row number
    values: dict[str, Any]  # Column label -> cell value (empty cells omitted)

    @property
    def is_empty(self) -> bool:
        return not self.values
