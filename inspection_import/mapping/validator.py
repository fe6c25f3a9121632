from __future__ import annotations

from ..models.inspection_record import UNKNOWN, InspectionRecord

"""Minimum-signal filter for mapped records.

The policy is permissive: partial rows are kept for manual correction in the
dashboard. Only a row with no date and no identifying text is dropped.
"""

__all__ = [
    "is_acceptable",
]


def is_acceptable(record: InspectionRecord) -> bool:
    """Reject iff the date was missing and supplier, item name and item type are all unresolved."""
    empty = (
        not record.date_resolved
        and record.supplier == UNKNOWN
        and record.item_name == UNKNOWN
        and record.item_type == ""
    )
    return not empty
