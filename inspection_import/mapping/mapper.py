from __future__ import annotations

import random
import string
import time
from collections.abc import Callable, Mapping
from typing import Any

from ..models.config_models import DEFAULT_FALLBACK_DATE, FieldCandidates, ImportConfig
from ..models.inspection_record import UNKNOWN, InspectionRecord, derive_result
from .coercers import is_blank, parse_date, parse_quantity
from .resolver import resolve
from .rules import ItemTypeNormalizer

"""Record mapper: one raw worksheet row -> one canonical inspection record.

The same mapper instance serves the batch import and the single-record path,
so both produce identical records for identical rows (apart from ``id``).
"""

__all__ = [
    "RecordMapper",
    "generate_record_id",
]

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_record_id() -> str:
    """Epoch milliseconds + 9 random base36 characters, e.g. ``1767336560226_ds91d37gz``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}_{suffix}"


def _text(value: Any, default: str = "") -> str:
    if is_blank(value):
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class RecordMapper:
    """Map raw rows using injected synonym tables and aliasing rules."""

    def __init__(
        self,
        candidates: FieldCandidates | None = None,
        normalizer: ItemTypeNormalizer | None = None,
        *,
        fallback_date: str = DEFAULT_FALLBACK_DATE,
        id_factory: Callable[[], str] = generate_record_id,
    ) -> None:
        self.candidates = candidates or FieldCandidates()
        self.normalizer = normalizer or ItemTypeNormalizer()
        self.fallback_date = fallback_date
        self.id_factory = id_factory

    @classmethod
    def from_config(cls, config: ImportConfig) -> RecordMapper:
        return cls(
            config.field_candidates,
            ItemTypeNormalizer(config.item_type_rules),
            fallback_date=config.fallback_date,
        )

    def map_row(self, row: Mapping[Any, Any]) -> InspectionRecord:
        c = self.candidates
        raw_date = resolve(row, c.date)
        # defect 수량을 먼저 계산해서 result 를 파생
        defect_quantity = parse_quantity(resolve(row, c.defect_quantity))
        return InspectionRecord(
            id=self.id_factory(),
            date=parse_date(raw_date, self.fallback_date),
            supplier=_text(resolve(row, c.supplier), UNKNOWN),
            item_name=_text(resolve(row, c.item_name), UNKNOWN),
            total_quantity=parse_quantity(resolve(row, c.total_quantity)),
            inspection_quantity=parse_quantity(resolve(row, c.inspection_quantity)),
            defect_quantity=defect_quantity,
            result=derive_result(defect_quantity),
            defect_type=_text(resolve(row, c.defect_type)),
            item_type=self.normalizer.normalize(_text(resolve(row, c.item_type))),
            inspection_report_no=_text(resolve(row, c.inspection_report_no)),
            date_resolved=not is_blank(raw_date),
        )
