"""External data binding: fill form fields from schema-less JSON payloads."""
from __future__ import annotations

from cli.binding.binder import (
    apply_initial_values,
    has_filled_value,
    process_external_data,
    resolve_field,
)
from cli.binding.coerce import (
    convert_initial_value,
    to_label_string,
    to_primitive_string,
    to_value_string,
)
from cli.binding.keys import key_variants, sanitize_key
from cli.binding.lookup import RecordLookup
from cli.binding.models import FieldDescriptor, Option, ProcessedExternalData, ResolvedFieldData
from cli.binding.options import build_select_options, normalize_options
from cli.binding.paths import parse_path, resolve_path

__all__ = [
    "FieldDescriptor",
    "Option",
    "ProcessedExternalData",
    "RecordLookup",
    "ResolvedFieldData",
    "apply_initial_values",
    "build_select_options",
    "convert_initial_value",
    "has_filled_value",
    "key_variants",
    "normalize_options",
    "parse_path",
    "process_external_data",
    "resolve_field",
    "resolve_path",
    "sanitize_key",
    "to_label_string",
    "to_primitive_string",
    "to_value_string",
]
