from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""Error log entry model.

One ErrorRecord is one line of the JSON Lines error log. Import failures are
workbook-wide (the batch is all-or-nothing), so ``row`` is usually -1 and
``sheet`` the "<WORKBOOK>" marker.
"""

__all__ = [
    "ErrorRecord",
    "READ_ERROR",
    "SUBMIT_ERROR",
]

READ_ERROR = "READ_ERROR"  # workbook missing / undecodable
SUBMIT_ERROR = "SUBMIT_ERROR"  # bulk submission refused or unreachable API


def _utc_now_z() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorRecord:
    """A single failure.

    Attributes:
        timestamp: UTC time of the failure, ISO8601 with 'Z'
        file: Workbook file name
        sheet: Worksheet name or "<WORKBOOK>"
        row: 1-based Excel row, -1 when no single row is at fault
        error_type: UPPER_SNAKE_CASE category
        message: Exception text or API response
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    error_type: str
    message: str

    @classmethod
    def create(cls, file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        return cls(_utc_now_z(), file, sheet, row, error_type, message)

    def to_json_line(self) -> str:
        """One JSON object, non-ASCII text kept readable."""
        return json.dumps(asdict(self), ensure_ascii=False)
