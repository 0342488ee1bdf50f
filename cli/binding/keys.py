"""Key name normalization across naming conventions."""
from __future__ import annotations

import re
from typing import Iterable, List

SEPARATOR_RUN = re.compile(r"[\s_-]+")
CAMEL_BOUNDARY = re.compile(r"[\s_-]+([a-z0-9])", re.IGNORECASE)


def sanitize_key(key: str) -> str:
    """Drop whitespace, hyphens and underscores, then lowercase.

    ``"Field Name"``, ``"field_name"`` and ``"fieldName"`` all become
    ``"fieldname"``.
    """
    return SEPARATOR_RUN.sub("", key).lower()


def _unique(items: Iterable[str]) -> List[str]:
    return [item for item in dict.fromkeys(items) if item]


def key_variants(text: str) -> List[str]:
    """Spellings of an identifier that may appear as a JSON key.

    Ordered from most to least literal so the result can be used directly
    as a candidate key list.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return []

    camel = CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), trimmed.lower())

    return _unique([
        trimmed,
        trimmed.lower(),
        SEPARATOR_RUN.sub("", trimmed),
        SEPARATOR_RUN.sub("_", trimmed),
        camel,
        camel.lower(),
        sanitize_key(trimmed),
    ])


def field_key_variants(field_id: str, label: str = "") -> List[str]:
    """Variants of a field's id followed by variants of its label."""
    return _unique(key_variants(field_id) + key_variants(label))


def suffixed_variants(variants: Iterable[str], suffixes: Iterable[str]) -> List[str]:
    suffixes = list(suffixes)
    return [f"{variant}{suffix}" for variant in variants for suffix in suffixes]
