from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from .inspection_record import InspectionRecord

"""Import result models for the inspection workbook importer.

ImportResult aggregates the counts reported after one workbook import:
rows read across all sheets, rows mapped, records accepted/rejected by the
validator and records the persistence API confirmed.
"""

__all__ = [
    "ImportResult",
    "SheetStat",
]


@dataclass(frozen=True)
class SheetStat:
    """Per-sheet row count (rows are concatenated before mapping)."""
    sheet_name: str
    rows: int


@dataclass(frozen=True)
class ImportResult:
    """Aggregated result of a single workbook import.

    ``submitted`` is the count the bulk endpoint acknowledged; it stays 0 in
    dry-run mode and when no record survived validation. ``batch_seconds`` is
    the round trip of that one bulk call.
    """
    sheets: int  # シート数
    read: int  # 全シート合計の読込行数
    mapped: int  # マッピング済行数
    accepted: int  # validator 通過
    rejected: int  # validator 拒否
    submitted: int  # API が受理した件数
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    sheet_stats: list[SheetStat] = field(default_factory=list)
    records: list[InspectionRecord] = field(default_factory=list, repr=False)
    dry_run: bool = False
    batch_seconds: float = 0.0  # bulk 送信の所要時間 (未送信なら 0)

    def item_type_counts(self) -> Counter[str]:
        """Tally accepted records per normalized item type."""
        return Counter(r.item_type for r in self.records)
