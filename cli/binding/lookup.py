"""Case- and separator-insensitive key lookup on JSON objects."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from cli.binding.keys import sanitize_key

Predicate = Callable[[Any], bool]


class RecordLookup:
    """Indexes a JSON object by lowercase and sanitized key names.

    On index collisions the last key in document order wins.
    """

    def __init__(self, record: Dict[str, Any]):
        self.record = record
        self.lower: Dict[str, Any] = {}
        self.sanitized: Dict[str, Any] = {}
        for key, value in record.items():
            key = str(key)
            self.lower[key.lower()] = value
            self.sanitized[sanitize_key(key)] = value

    def resolve(self, keys: Sequence[str], predicate: Optional[Predicate] = None) -> Any:
        """Return the first matching value for ``keys``, or None.

        Every candidate is tried at one tier before moving on to the next,
        so an exact hit on a late candidate beats a lowercase hit on an
        early one.
        """
        for _, strategy in LOOKUP_TIERS:
            for key in keys:
                value = strategy(self, key)
                if value is None:
                    continue
                if predicate is None or predicate(value):
                    return value
        return None

    def resolve_array(self, keys: Sequence[str]) -> Optional[List[Any]]:
        value = self.resolve(keys, is_array)
        return value if isinstance(value, list) else None


def _exact(lookup: RecordLookup, key: str) -> Any:
    return lookup.record.get(key)


def _lowercase(lookup: RecordLookup, key: str) -> Any:
    return lookup.lower.get(key.lower())


def _sanitized(lookup: RecordLookup, key: str) -> Any:
    return lookup.sanitized.get(sanitize_key(key))


# Priority order of lookup strategies
LOOKUP_TIERS: List[Tuple[str, Callable[[RecordLookup, str], Any]]] = [
    ("exact", _exact),
    ("lowercase", _lowercase),
    ("sanitized", _sanitized),
]


def is_array(value: Any) -> bool:
    return isinstance(value, list)

