"""Bind external JSON payloads to form fields.

A binding pass runs in up to three stages:

1. Explicit paths: fields with ``externalDataPath`` resolve their value
   through the path resolver.
2. Structural matching: when the payload is a list of records, records whose
   key names or identifier properties match a field feed that field.
3. Generic object lookup: when the payload is an object, fields still unbound
   look up their own id/label variants directly in it.

Earlier stages win; later stages only fill gaps. Nothing here raises on an
unexpected payload shape, an unresolvable field is simply left out.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Dict, Iterable, List, Set

from cli.binding.coerce import EXPLICIT_VALUE_KEYS, convert_initial_value, to_primitive_string, to_value_string
from cli.binding.keys import field_key_variants, key_variants, sanitize_key, suffixed_variants
from cli.binding.lookup import RecordLookup
from cli.binding.models import FieldDescriptor, ProcessedExternalData, ResolvedFieldData
from cli.binding.options import build_select_options, normalize_options, split_option_string
from cli.binding.paths import resolve_path

logger = logging.getLogger(__name__)

# Properties of a resolved object that may hold its option list
ARRAY_OPTION_KEYS = ("options", "values", "items", "list", "choices", "data")

# Payload-level option arrays for the generic object pass
GENERIC_ARRAY_KEYS = ("options", "values", "items", "data", "list")

# Properties naming the field a record describes
IDENTIFIER_KEYS = (
    "fieldId",
    "field_id",
    "field",
    "fieldName",
    "field_name",
    "targetField",
    "target_field",
    "target",
    "id",
    "name",
    "key",
    "code",
    "column",
    "property",
)
IDENTIFIER_KEY_VARIANTS = tuple(
    dict.fromkeys(variant for key in IDENTIFIER_KEYS for variant in key_variants(key))
)

VALUE_SUFFIXES = (
    "Value",
    "_value",
    "Default",
    "_default",
    "DefaultValue",
    "_default_value",
    "Initial",
    "_initial",
    "InitialValue",
    "_initial_value",
)
GENERIC_VALUE_KEYS = ("value", "default", "defaultValue", "initial", "initialValue", "current")

OPTION_SUFFIXES = ("Options", "_options", "Choices", "_choices", "List", "_list")
GENERIC_OPTION_KEYS = ("options", "values", "items", "list", "choices")
OBJECT_OPTION_SUFFIXES = ("Options", "_options", "List", "_list")


# ---------------------------------------------------------------------------
# Explicit path resolution
# ---------------------------------------------------------------------------

def _first_convertible(field: FieldDescriptor, items: Iterable[Any]) -> Any:
    for item in items:
        converted = convert_initial_value(field, item)
        if converted is not None:
            return converted
    return None


def _bind_array(field: FieldDescriptor, value: List[Any]) -> ResolvedFieldData:
    if field.is_select:
        return ResolvedFieldData(options=normalize_options(value) or None)
    return ResolvedFieldData(initial_value=_first_convertible(field, value))


def _bind_object(field: FieldDescriptor, value: Dict[str, Any]) -> ResolvedFieldData:
    lookup = RecordLookup(value)
    initial = convert_initial_value(
        field,
        lookup.resolve(EXPLICIT_VALUE_KEYS, lambda v: convert_initial_value(field, v) is not None),
    )
    if initial is None:
        initial = convert_initial_value(field, to_value_string(value))

    options = None
    if field.is_select:
        option_array = lookup.resolve_array(ARRAY_OPTION_KEYS)
        if option_array:
            options = normalize_options(option_array) or None
    return ResolvedFieldData(initial_value=initial, options=options)


def _bind_scalar(field: FieldDescriptor, value: Any) -> ResolvedFieldData:
    options = None
    if field.is_select and isinstance(value, str):
        options = normalize_options(split_option_string(value)) or None
    return ResolvedFieldData(initial_value=convert_initial_value(field, value), options=options)


def resolve_field(payload: Any, field: FieldDescriptor) -> ResolvedFieldData:
    """Resolve one field through its configured path(s)."""
    path = field.data_path
    if path is None:
        return ResolvedFieldData()

    scoped = resolve_path(payload, path)
    override = None
    if field.is_select and field.value_path:
        override = resolve_path(payload, field.value_path)

    if scoped is None and override is None:
        logger.debug("Field %s: path %r resolved nothing", field.id, path)
        return ResolvedFieldData()

    if field.is_select and override is not None:
        return ResolvedFieldData(options=build_select_options(scoped, override) or None)

    value = scoped if scoped is not None else override
    if isinstance(value, list):
        return _bind_array(field, value)
    if isinstance(value, dict):
        return _bind_object(field, value)
    return _bind_scalar(field, value)


# ---------------------------------------------------------------------------
# Structural matching over a list of records
# ---------------------------------------------------------------------------

@dataclass
class FieldIdentity:
    """Key spellings under which a field may appear in external records."""
    field: FieldDescriptor
    variants: List[str]
    normalized: Set[str]

    @classmethod
    def of(cls, field: FieldDescriptor) -> "FieldIdentity":
        variants = field_key_variants(field.id, field.label)
        return cls(field=field, variants=variants, normalized={sanitize_key(v) for v in variants})

    @property
    def value_keys(self) -> List[str]:
        return self.variants + suffixed_variants(self.variants, VALUE_SUFFIXES) + list(GENERIC_VALUE_KEYS)

    @property
    def option_keys(self) -> List[str]:
        return suffixed_variants(self.variants, OPTION_SUFFIXES) + list(GENERIC_OPTION_KEYS)

    def matches(self, lookup: RecordLookup) -> bool:
        if not self.normalized:
            return False
        if any(sanitize_key(str(key)) in self.normalized for key in lookup.record):
            return True
        identifier = to_primitive_string(lookup.resolve(IDENTIFIER_KEY_VARIANTS))
        return identifier is not None and sanitize_key(identifier) in self.normalized


@dataclass
class _Aggregate:
    initial_value: Any = None
    raw_options: List[Any] = dataclass_field(default_factory=list)


def _bind_structural(payload: List[Any], fields: List[FieldDescriptor]) -> Dict[str, ResolvedFieldData]:
    identities = [FieldIdentity.of(field) for field in fields]
    aggregates: Dict[str, _Aggregate] = {}
    matched = False

    for entry in payload:
        if not isinstance(entry, dict):
            continue
        lookup = RecordLookup(entry)
        for identity in identities:
            if not identity.matches(lookup):
                continue
            matched = True
            aggregate = aggregates.setdefault(identity.field.id, _Aggregate())

            raw_value = lookup.resolve(identity.value_keys)
            if aggregate.initial_value is None:
                aggregate.initial_value = convert_initial_value(identity.field, raw_value)

            option_array = lookup.resolve_array(identity.option_keys)
            if option_array is None and isinstance(raw_value, list):
                option_array = raw_value
            if option_array:
                aggregate.raw_options.extend(option_array)

    results = {
        field_id: ResolvedFieldData(
            initial_value=aggregate.initial_value,
            options=normalize_options(aggregate.raw_options) or None,
        )
        for field_id, aggregate in aggregates.items()
    }

    if not matched and not any(isinstance(item, list) for item in payload):
        pool = normalize_options(payload)
        if pool:
            logger.debug("No structural match, using payload as shared pool of %d options", len(pool))
            for field in fields:
                if field.is_select:
                    results[field.id] = ResolvedFieldData(options=list(pool))
    return results


# ---------------------------------------------------------------------------
# Generic lookup on a plain object payload
# ---------------------------------------------------------------------------

def _bind_generic_object(payload: Dict[str, Any], fields: List[FieldDescriptor]) -> Dict[str, ResolvedFieldData]:
    lookup = RecordLookup(payload)
    generic_array = lookup.resolve_array(GENERIC_ARRAY_KEYS)
    results: Dict[str, ResolvedFieldData] = {}

    for field in fields:
        variants = field_key_variants(field.id, field.label)
        raw_value = lookup.resolve(variants) if variants else None
        resolved = ResolvedFieldData(initial_value=convert_initial_value(field, raw_value))

        if field.is_select:
            option_array = lookup.resolve_array(suffixed_variants(variants, OBJECT_OPTION_SUFFIXES))
            if option_array is None:
                option_array = generic_array
            if option_array is None and isinstance(raw_value, list):
                option_array = raw_value
            if option_array:
                resolved.options = normalize_options(option_array) or None

        results[field.id] = resolved
    return results


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def _apply(result: ProcessedExternalData, field_id: str, resolved: ResolvedFieldData, origin: str) -> None:
    """Write ``resolved`` into ``result`` without overwriting earlier data."""
    if resolved.initial_value is not None and field_id not in result.initial_values:
        result.initial_values[field_id] = resolved.initial_value
        logger.debug("Field %s: initial value from %s", field_id, origin)
    if resolved.options and field_id not in result.select_options:
        result.select_options[field_id] = list(resolved.options)
        logger.debug("Field %s: %d options from %s", field_id, len(resolved.options), origin)


def process_external_data(payload: Any, fields: Iterable[FieldDescriptor]) -> ProcessedExternalData:
    """Resolve initial values and select options for ``fields`` from ``payload``."""
    fields = list(fields)
    result = ProcessedExternalData()

    explicit: Set[str] = set()
    for field in fields:
        resolved = resolve_field(payload, field)
        if not resolved.is_empty:
            explicit.add(field.id)
        _apply(result, field.id, resolved, "path")

    if isinstance(payload, list):
        for field_id, resolved in _bind_structural(payload, fields).items():
            _apply(result, field_id, resolved, "structure")
    elif isinstance(payload, dict):
        unbound = [field for field in fields if field.id not in explicit]
        for field_id, resolved in _bind_generic_object(payload, unbound).items():
            _apply(result, field_id, resolved, "object keys")

    logger.debug(
        "Bound %d initial values and %d option lists for %d fields",
        len(result.initial_values),
        len(result.select_options),
        len(fields),
    )
    return result


# ---------------------------------------------------------------------------
# Applying results to form state
# ---------------------------------------------------------------------------

def has_filled_value(field: FieldDescriptor, value: Any) -> bool:
    """Whether the user (or an earlier pass) already filled ``field``."""
    if value is None:
        return False
    if field.type == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value.strip() != ""
    return True


def apply_initial_values(
    form_state: Dict[str, Any],
    fields: Iterable[FieldDescriptor],
    processed: ProcessedExternalData,
) -> Dict[str, Any]:
    """Return a copy of ``form_state`` with resolved values in empty fields."""
    state = dict(form_state)
    for field in fields:
        if field.id not in processed.initial_values:
            continue
        if has_filled_value(field, state.get(field.id)):
            continue
        state[field.id] = processed.initial_values[field.id]
    return state
