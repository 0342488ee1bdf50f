"""Coerce arbitrary JSON values into labels, option values and field values."""
from __future__ import annotations

import math
from typing import Any, Optional

from cli.binding.models import FieldDescriptor

# Keys that conventionally carry a display label, in priority order
LABEL_KEYS = ("label", "name", "title", "value", "id", "code")

# Keys that conventionally carry the technical/current value
EXPLICIT_VALUE_KEYS = (
    "value",
    "default",
    "defaultValue",
    "initial",
    "initialValue",
    "current",
    "selected",
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_number(value: Any) -> str:
    # Match JSON rendering: 5.0 -> "5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_primitive_string(value: Any) -> Optional[str]:
    """Stringify str/number/bool values; None for anything else."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        return _format_number(value)
    return None


def to_label_string(value: Any) -> Optional[str]:
    """Best display label for ``value``."""
    if not isinstance(value, dict):
        return to_primitive_string(value)

    for key in LABEL_KEYS:
        label = to_primitive_string(value.get(key))
        if label is not None:
            return label

    for first in value.values():
        return to_primitive_string(first)
    return None


def to_value_string(value: Any) -> Optional[str]:
    """Best technical value for ``value``, preferring explicit value keys."""
    if not isinstance(value, dict):
        return to_primitive_string(value)

    for key in EXPLICIT_VALUE_KEYS:
        if key not in value:
            continue
        explicit = to_value_string(value[key])
        if explicit is not None:
            return explicit

    return to_label_string(value)


def _parse_number(text: str) -> Optional[float]:
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def convert_initial_value(field: FieldDescriptor, value: Any) -> Any:
    """Coerce ``value`` to what ``field`` can display, or None if unusable."""
    if value is None:
        return None

    if field.type == "number":
        if _is_number(value):
            return value if math.isfinite(value) else None
        if isinstance(value, str):
            return _parse_number(value)
        return None

    if field.type == "select":
        return to_primitive_string(value)

    if isinstance(value, str):
        return value
    if isinstance(value, bool) or _is_number(value):
        return to_primitive_string(value)
    return None
