from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

"""Field resolution: find the raw column that carries a canonical field.

Spreadsheet exports spell the same column differently ("불량수량(EA)",
"불량수량 (EA)", "불량 수량"), so each canonical field is described by an
ordered list of synonyms. A synonym matches a column exactly or, failing that,
after all whitespace is removed from both sides.
"""

__all__ = [
    "resolve",
    "strip_whitespace",
]

_WHITESPACE = re.compile(r"\s+")


def strip_whitespace(label: Any) -> str:
    return _WHITESPACE.sub("", str(label))


def resolve(row: Mapping[Any, Any], candidates: Sequence[str]) -> Any:
    """Return the value of the first column matching a candidate, else None.

    Candidates are tried in priority order. For each one an exact key lookup
    is attempted first (a present key wins even when its value is None), then
    the whitespace-insensitive comparison against every row key in row order.
    """
    for candidate in candidates:
        if candidate in row:
            return row[candidate]
        target = strip_whitespace(candidate)
        for key in row:
            if strip_whitespace(key) == target:
                return row[key]
    return None
