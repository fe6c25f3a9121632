from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..models.config_models import DEFAULT_ITEM_TYPE_RULES, ItemTypeRule

"""Business rule normalizer for the item-type column.

Source systems record outsourced painting under the name of whichever plant
or vendor did the work. The rule table folds those spellings into one
reporting category; rules are evaluated in order and the first hit wins.
"""

__all__ = [
    "ItemTypeNormalizer",
    "normalize_item_type",
]


class ItemTypeNormalizer:
    """Apply an ordered (match, pattern) -> value rule table to item types."""

    def __init__(self, rules: Iterable[ItemTypeRule] = DEFAULT_ITEM_TYPE_RULES) -> None:
        self.rules: tuple[ItemTypeRule, ...] = tuple(rules)

    def normalize(self, raw: Any) -> str:
        if raw is None:
            return ""
        text = str(raw).strip()
        for rule in self.rules:
            if rule.matches(text):
                return rule.value
        return text

    __call__ = normalize


_default_normalizer = ItemTypeNormalizer()


def normalize_item_type(raw: Any) -> str:
    """Normalize with the default rule table."""
    return _default_normalizer.normalize(raw)
