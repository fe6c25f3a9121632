from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pandas as pd

from ..models.inspection_record import FAIL_RESULT, NO_REPORT_VALUES, PAYLOAD_KEYS, InspectionRecord

"""Dashboard KPIs over stored inspection records.

Quantity metrics sum the three quantity columns. Count metrics treat a record
as "inspected" only when a report number was issued (anything but "" or "-"),
and as "failed" when result is the fail label.
"""

__all__ = [
    "InspectionSummary",
    "is_report_issued",
    "TrendPoint",
    "UNSPECIFIED_DEFECT",
    "summarize_inspections",
    "supplier_defect_details",
    "trend_series",
]

TOP_N = 10
_BLANK_LABELS = ("", "-")
UNSPECIFIED_DEFECT = "미지정"
# group_by -> date 문자열 앞부분 길이
_GROUP_KEY_LENGTHS = {"day": 10, "month": 7, "year": 4}

DateBound = str | date | None


def is_report_issued(value: Any) -> bool:
    if value is None:
        return False
    return str(value) not in NO_REPORT_VALUES


def _rate(numerator: float, denominator: float) -> float:
    return round(numerator / denominator * 100, 2) if denominator > 0 else 0.0


@dataclass(frozen=True)
class InspectionSummary:
    total_quantity: int = 0
    inspection_quantity: int = 0
    defect_quantity: int = 0
    inbound_count: int = 0
    inspection_count: int = 0
    fail_count: int = 0
    inspection_rate: float = 0.0  # 검사율 (수량 기준, %)
    quantity_defect_rate: float = 0.0  # 불량률 (수량 기준, %)
    count_defect_rate: float = 0.0  # 불량률 (건수 기준, %)
    top_defect_suppliers: list[tuple[str, int]] = field(default_factory=list)
    top_defect_types: list[tuple[str, int]] = field(default_factory=list)


def _to_frame(records: Iterable[InspectionRecord | dict[str, Any]]) -> pd.DataFrame:
    rows = [
        r.to_payload() if isinstance(r, InspectionRecord) else InspectionRecord.from_payload(r).to_payload()
        for r in records
    ]
    return pd.DataFrame(rows, columns=list(PAYLOAD_KEYS.values()))


def _top(series: pd.Series) -> list[tuple[str, int]]:
    counts = series.value_counts()
    return [(str(k), int(v)) for k, v in counts.head(TOP_N).items()]


def _period_mask(
    df: pd.DataFrame,
    year: int | None,
    month: int | None,
    start: DateBound,
    end: DateBound,
) -> pd.Series:
    mask = pd.Series(True, index=df.index)
    if year is not None or month is not None:
        dates = pd.to_datetime(df["date"], errors="coerce", format="%Y-%m-%d")
        mask &= dates.notna()
        if year is not None:
            mask &= dates.dt.year == year
        if month is not None:
            mask &= dates.dt.month == month
    # 문자열 비교 (YYYY-MM-DD), 양 끝 포함
    if start is not None:
        mask &= df["date"] >= _bound(start)
    if end is not None:
        mask &= df["date"] <= _bound(end)
    return mask


def _bound(value: str | date) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def _filtered_frame(
    records: Iterable[InspectionRecord | dict[str, Any]],
    year: int | None = None,
    month: int | None = None,
    start: DateBound = None,
    end: DateBound = None,
) -> pd.DataFrame:
    df = _to_frame(records)
    if df.empty:
        return df
    return df[_period_mask(df, year, month, start, end)]


def summarize_inspections(
    records: Iterable[InspectionRecord | dict[str, Any]],
    year: int | None = None,
    month: int | None = None,
    start: DateBound = None,
    end: DateBound = None,
) -> InspectionSummary:
    """Aggregate dashboard KPIs, optionally restricted to a period.

    ``records`` may be InspectionRecord objects or raw API payloads.
    ``start``/``end`` are inclusive YYYY-MM-DD bounds and combine with
    ``year``/``month``.
    """
    df = _filtered_frame(records, year, month, start, end)
    if df.empty:
        return InspectionSummary()

    total_qty = int(df["totalQuantity"].sum())
    inspection_qty = int(df["inspectionQuantity"].sum())
    defect_qty = int(df["defectQuantity"].sum())
    inspection_count = int(df["inspectionReportNo"].map(is_report_issued).sum())
    failed = df[df["result"] == FAIL_RESULT]
    defect_types = df.loc[~df["defectType"].isin(_BLANK_LABELS), "defectType"]

    return InspectionSummary(
        total_quantity=total_qty,
        inspection_quantity=inspection_qty,
        defect_quantity=defect_qty,
        inbound_count=len(df),
        inspection_count=inspection_count,
        fail_count=len(failed),
        inspection_rate=_rate(inspection_qty, total_qty),
        quantity_defect_rate=_rate(defect_qty, inspection_qty),
        count_defect_rate=_rate(len(failed), inspection_count),
        top_defect_suppliers=_top(failed["supplier"]),
        top_defect_types=_top(defect_types),
    )


@dataclass(frozen=True)
class TrendPoint:
    key: str  # YYYY-MM-DD / YYYY-MM / YYYY
    quantity: int
    count: int


def trend_series(
    records: Iterable[InspectionRecord | dict[str, Any]],
    group_by: str = "day",
    start: DateBound = None,
    end: DateBound = None,
) -> list[TrendPoint]:
    """Inbound quantity and record count per day, month or year, sorted by key."""
    if group_by not in _GROUP_KEY_LENGTHS:
        raise ValueError(f"group_by must be one of {sorted(_GROUP_KEY_LENGTHS)}, got {group_by!r}")
    df = _filtered_frame(records, start=start, end=end)
    if df.empty:
        return []
    keys = df["date"].astype(str).str[: _GROUP_KEY_LENGTHS[group_by]]
    grouped = df.groupby(keys, sort=True).agg(
        quantity=("totalQuantity", "sum"),
        records=("id", "size"),
    )
    return [
        TrendPoint(str(k), int(qty), int(n))
        for k, qty, n in zip(grouped.index, grouped["quantity"], grouped["records"])
    ]


def supplier_defect_details(
    records: Iterable[InspectionRecord | dict[str, Any]],
    start: DateBound = None,
    end: DateBound = None,
) -> dict[str, dict[str, int]]:
    """Failed-record counts per supplier broken down by defect type.

    Suppliers are ordered by failure count (highest first), top ``TOP_N``.
    A blank defect type is reported as ``UNSPECIFIED_DEFECT``.
    """
    df = _filtered_frame(records, start=start, end=end)
    failed = df[df["result"] == FAIL_RESULT]
    if failed.empty:
        return {}
    failed = failed.assign(defectType=failed["defectType"].replace("", UNSPECIFIED_DEFECT))
    per_supplier = failed["supplier"].value_counts().head(TOP_N)
    breakdown = failed.groupby(["supplier", "defectType"]).size()
    details: dict[str, dict[str, int]] = {}
    for supplier in per_supplier.index:
        types = breakdown.loc[supplier]
        details[str(supplier)] = {str(t): int(n) for t, n in types.sort_values(ascending=False, kind="stable").items()}
    return details
