"""Row -> canonical inspection record mapping pipeline."""

from .coercers import parse_date, parse_quantity
from .mapper import RecordMapper, generate_record_id
from .resolver import resolve
from .rules import ItemTypeNormalizer, normalize_item_type
from .validator import is_acceptable

__all__ = [
    "ItemTypeNormalizer",
    "RecordMapper",
    "generate_record_id",
    "is_acceptable",
    "normalize_item_type",
    "parse_date",
    "parse_quantity",
    "resolve",
]
