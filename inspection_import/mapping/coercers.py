from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime, timedelta
from numbers import Number
from typing import Any

from ..models.config_models import DEFAULT_FALLBACK_DATE

"""Value coercers for raw spreadsheet cells.

Both functions are total: they never raise and always produce a typed
fallback. Serial dates use the spreadsheet epoch (day 25569 == 1970-01-01,
i.e. day 0 == 1899-12-30) and are computed in UTC so the result does not
depend on the host timezone.
"""

__all__ = [
    "EXCEL_EPOCH_OFFSET_DAYS",
    "is_blank",
    "SECONDS_PER_DAY",
    "parse_quantity",
    "parse_date",
    "serial_to_date",
]

EXCEL_EPOCH_OFFSET_DAYS = 25569
SECONDS_PER_DAY = 86400

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
# plain decimal literal: "45992", "45992.5", " 1e3 " (no hex, no "nan"/"inf")
_DECIMAL = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
_QUANTITY_PLACEHOLDERS = {"", "-"}


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_blank(value: Any) -> bool:
    """True for None, NaN and other falsy cells ("" and 0)."""
    return not value or _is_nan(value)


def parse_quantity(raw: Any) -> int:
    """Coerce a raw quantity cell to a non-negative integer.

    None, NaN, "" and the "-" placeholder are 0. Thousands separators are
    removed before parsing; anything unparsable is 0. Fractions truncate and
    negative values clamp to 0.
    """
    if raw is None or _is_nan(raw):
        return 0
    if _is_number(raw):
        value = float(raw)
    else:
        text = str(raw).replace(",", "").strip()
        if text in _QUANTITY_PLACEHOLDERS or not _DECIMAL.match(text):
            return 0
        value = float(text)
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)


def serial_to_date(serial: float) -> str:
    """Convert a spreadsheet serial day count to YYYY-MM-DD (UTC).

    Raises OverflowError/ValueError for serials outside the datetime range.
    """
    millis = round((serial - EXCEL_EPOCH_OFFSET_DAYS) * SECONDS_PER_DAY * 1000)
    return (_UNIX_EPOCH + timedelta(milliseconds=millis)).date().isoformat()


def parse_date(raw: Any, fallback: str = DEFAULT_FALLBACK_DATE) -> str:
    """Coerce a raw date cell to a YYYY-MM-DD string.

    - falsy / NaN -> ``fallback``
    - datetime / date (pandas yields these for date-formatted cells) -> ISO date
    - number -> serial date
    - numeric string without "-" -> serial date
    - any other string -> unchanged
    - anything else, or a serial out of range -> ``fallback``
    """
    if is_blank(raw):
        return fallback
    if isinstance(raw, datetime):
        return raw.date().isoformat()
    if isinstance(raw, date):
        return raw.isoformat()
    try:
        if _is_number(raw):
            if not math.isfinite(float(raw)):
                return fallback
            return serial_to_date(float(raw))
        if isinstance(raw, str):
            if "-" not in raw and _DECIMAL.match(raw):
                return serial_to_date(float(raw))
            return raw
    except (OverflowError, ValueError):
        return fallback
    return fallback
