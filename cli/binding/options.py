"""Build deduplicated select option lists from loosely shaped data."""
from __future__ import annotations

import re
from typing import Any, List, Optional, Set

from cli.binding.coerce import to_label_string, to_value_string
from cli.binding.models import Option

OPTION_SEPARATORS = re.compile(r"[;,]")


def flatten_candidates(value: Any) -> List[Any]:
    """Leaves of (possibly nested) lists; a single value becomes a one-item list."""
    if value is None:
        return []
    if not isinstance(value, list):
        return [value]
    leaves: List[Any] = []
    for item in value:
        leaves.extend(flatten_candidates(item))
    return leaves


def normalize_options(items: Any) -> List[Option]:
    """Turn raw candidates into options, keeping the first of each value."""
    seen: Set[str] = set()
    options: List[Option] = []
    for item in flatten_candidates(items):
        value = to_value_string(item)
        if value is None:
            value = to_label_string(item)
        if not value or value in seen:
            continue
        seen.add(value)
        options.append(Option(value=value, label=to_label_string(item) or value))
    return options


def _clamped(items: List[Any], index: int) -> Any:
    if not items:
        return None
    return items[min(index, len(items) - 1)]


def build_select_options(labels: Any, values: Any) -> List[Option]:
    """Pair label data and value data coming from two different paths.

    The shorter side reuses its last element, so one scalar value can pair
    with many labels and vice versa.
    """
    label_items = flatten_candidates(labels)
    value_items = flatten_candidates(values)
    total = max(len(label_items), len(value_items))

    seen: Set[str] = set()
    options: List[Option] = []
    for index in range(total):
        label_item = _clamped(label_items, index)
        value_item = _clamped(value_items, index)

        value: Optional[str] = to_value_string(value_item)
        if not value:
            value = to_value_string(label_item)
        if not value or value in seen:
            continue
        seen.add(value)

        label = to_label_string(label_item) or to_label_string(value_item) or value
        options.append(Option(value=value, label=label))
    return options


def split_option_string(text: str) -> List[str]:
    """``"a; b, c"`` -> ``["a", "b", "c"]``."""
    return [part.strip() for part in OPTION_SEPARATORS.split(text) if part.strip()]
