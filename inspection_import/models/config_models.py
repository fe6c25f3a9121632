from __future__ import annotations

from dataclasses import dataclass, field, fields

"""Config dataclasses for the inspection workbook importer.

This module defines the typed configuration consumed by the mapping pipeline:
per-field column-label synonym tables, the item-type aliasing rule table and
the persistence API location. The YAML loader in inspection_import.config
builds these objects; tests construct them directly.
"""

__all__ = [
    "ApiConfig",
    "FieldCandidates",
    "ImportConfig",
    "ItemTypeRule",
    "DEFAULT_FALLBACK_DATE",
    "DEFAULT_ITEM_TYPE_RULES",
    "OUTSOURCED_PAINTING",
]

DEFAULT_FALLBACK_DATE = "2025-01-01"
OUTSOURCED_PAINTING = "외주도장"


@dataclass(frozen=True)
class FieldCandidates:
    """Ordered column-label synonyms per canonical field (highest priority first)."""
    date: tuple[str, ...] = ("입고일", "입고일자", "날짜")
    supplier: tuple[str, ...] = ("입고업체", "업체명", "공급사")
    item_name: tuple[str, ...] = ("제품명", "품명", "품목명")
    total_quantity: tuple[str, ...] = ("입고수량(EA)", "입고수량", "수량")
    inspection_quantity: tuple[str, ...] = ("검사수량(EA)", "검사수량")
    defect_quantity: tuple[str, ...] = ("불량수량(EA)", "불량수량", "불량")
    defect_type: tuple[str, ...] = ("불량유형", "불량내용")
    item_type: tuple[str, ...] = ("품목유형", "제품유형")
    inspection_report_no: tuple[str, ...] = (
        "인수검사성적서NO",
        "인수검사성적서",
        "성적서NO",
        "성적서번호",
    )

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, data: dict[str, list[str]] | None) -> FieldCandidates:
        """Override the default synonym lists with the ones present in ``data``."""
        if not data:
            return cls()
        return cls(**{name: tuple(values) for name, values in data.items()})


@dataclass(frozen=True)
class ItemTypeRule:
    """One aliasing rule: ``match`` is "exact" or "contains" (case-sensitive)."""
    match: str
    pattern: str
    value: str

    def matches(self, text: str) -> bool:
        if self.match == "exact":
            return text == self.pattern
        if self.match == "contains":
            return self.pattern in text
        raise ValueError(f"unknown match kind: {self.match!r}")


# 외주도장 (outsourced painting): every facility doing painting on our behalf
DEFAULT_ITEM_TYPE_RULES: tuple[ItemTypeRule, ...] = (
    ItemTypeRule("exact", "중국공장", OUTSOURCED_PAINTING),
    ItemTypeRule("contains", "SMART VALVE", OUTSOURCED_PAINTING),
    ItemTypeRule("contains", "DALIAN", OUTSOURCED_PAINTING),
)


@dataclass(frozen=True)
class ApiConfig:
    """Persistence API location (env vars take precedence, see loader)."""
    base_url: str
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for one importer run."""
    api: ApiConfig
    field_candidates: FieldCandidates = field(default_factory=FieldCandidates)
    item_type_rules: tuple[ItemTypeRule, ...] = DEFAULT_ITEM_TYPE_RULES
    fallback_date: str = DEFAULT_FALLBACK_DATE
    sheets: list[str] | None = None  # None -> all sheets
    header_row: int = 0
