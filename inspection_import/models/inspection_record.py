from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Canonical inspection record model.

One record represents one inbound-inspection event as stored behind the
persistence API. Attribute names are snake_case in Python; the wire payload
uses the exact lowerCamelCase keys the dashboard and json-server expect.
"""

__all__ = [
    "PASS_RESULT",
    "FAIL_RESULT",
    "UNKNOWN",
    "NO_REPORT_VALUES",
    "PAYLOAD_KEYS",
    "InspectionRecord",
    "derive_result",
]

PASS_RESULT = "합격"
FAIL_RESULT = "불합격"
UNKNOWN = "Unknown"  # supplier / itemName 미해결 시 sentinel
NO_REPORT_VALUES = frozenset({"", "-"})

# attribute -> JSON key (payload key order follows this mapping)
PAYLOAD_KEYS: dict[str, str] = {
    "id": "id",
    "date": "date",
    "supplier": "supplier",
    "item_name": "itemName",
    "total_quantity": "totalQuantity",
    "inspection_quantity": "inspectionQuantity",
    "defect_quantity": "defectQuantity",
    "result": "result",
    "defect_type": "defectType",
    "item_type": "itemType",
    "inspection_report_no": "inspectionReportNo",
}


def derive_result(defect_quantity: int) -> str:
    """Return the fail label iff any defect was counted."""
    return FAIL_RESULT if defect_quantity > 0 else PASS_RESULT


@dataclass(frozen=True)
class InspectionRecord:
    """Normalized inbound inspection record.

    Attributes:
        id: Opaque unique string assigned at mapping time
        date: Inspection date in YYYY-MM-DD form
        supplier: Supplier name, ``UNKNOWN`` if unresolved
        item_name: Product name, ``UNKNOWN`` if unresolved
        total_quantity: Received quantity (EA)
        inspection_quantity: Inspected quantity (EA)
        defect_quantity: Defective quantity (EA)
        result: ``PASS_RESULT`` or ``FAIL_RESULT``, derived from defect_quantity
        defect_type: Free-text defect description
        item_type: Item category after business-rule normalization
        inspection_report_no: Report/certificate number, "" or "-" when none
        date_resolved: Whether a raw date value was found (not serialized)
    """
    id: str
    date: str
    supplier: str
    item_name: str
    total_quantity: int
    inspection_quantity: int
    defect_quantity: int
    result: str
    defect_type: str = ""
    item_type: str = ""
    inspection_report_no: str = ""
    date_resolved: bool = field(default=True, compare=False, repr=False)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the persistence API JSON object (lowerCamelCase keys)."""
        return {key: getattr(self, attr) for attr, key in PAYLOAD_KEYS.items()}

    @staticmethod
    def from_payload(data: dict[str, Any]) -> InspectionRecord:
        """Build a record from a stored JSON object.

        Stored records may have been edited by hand, so missing keys fall back
        to empty values and ``result`` is taken as stored rather than derived.
        """
        def _int(value: Any) -> int:
            try:
                return int(value or 0)
            except (TypeError, ValueError):
                return 0

        return InspectionRecord(
            id=str(data.get("id", "")),
            date=str(data.get("date") or ""),
            supplier=str(data.get("supplier") or ""),
            item_name=str(data.get("itemName") or ""),
            total_quantity=_int(data.get("totalQuantity")),
            inspection_quantity=_int(data.get("inspectionQuantity")),
            defect_quantity=_int(data.get("defectQuantity")),
            result=str(data.get("result") or ""),
            defect_type=str(data.get("defectType") or ""),
            item_type=str(data.get("itemType") or ""),
            inspection_report_no=str(data.get("inspectionReportNo") or ""),
        )
