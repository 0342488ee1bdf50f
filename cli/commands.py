from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from cli.binding import FieldDescriptor, ProcessedExternalData, process_external_data, resolve_field, resolve_path
from cli.binding.config import FormConfig, get_form_config, load_form_config
from cli.utils import compact_json, load_json

ROOT_DIR = Path(__file__).resolve().parents[1]
FORMS_DIR = ROOT_DIR / "forms"

logger = logging.getLogger(__name__)


@dataclass
class FieldPreview:
    """How one field came out of a binding pass."""
    field_id: str
    field_type: str
    path: Optional[str]
    initial_value: Any = None
    option_count: int = 0
    origin: str = "-"  # "path", "structure", "object keys" or "-"


@dataclass
class BindingReport:
    """Result of binding a payload file to a form, with per-field detail."""
    form: str
    payload_file: str
    result: ProcessedExternalData
    fields: List[FieldPreview] = field(default_factory=list)

    @property
    def bound_count(self) -> int:
        return sum(1 for preview in self.fields if preview.origin != "-")


def load_form(form: str, forms_dir: Optional[Path] = None) -> FormConfig:
    """Load a form by YAML path or by name.

    Raises:
        ValueError: If no valid form definition could be found
    """
    candidate = Path(form)
    if candidate.suffix in (".yaml", ".yml") and candidate.exists():
        config = load_form_config(candidate)
    else:
        config, origin = get_form_config(form, forms_dir or FORMS_DIR)
        if config:
            logger.info("Using %s form definition %s", origin, config.config_path)
    if config is None:
        raise ValueError(f"No valid form definition found for '{form}'")
    return config


def select_fields(config: FormConfig, field_id: Optional[str] = None) -> List[FieldDescriptor]:
    if field_id is None:
        return list(config.fields)
    found = config.get_field(field_id)
    if found is None:
        raise ValueError(f"Unknown field '{field_id}' in form '{config.name}'")
    return [found]


def bind(form: str, payload_path: Path, field_id: Optional[str] = None) -> ProcessedExternalData:
    """Bind a JSON payload file to a form's fields.

    Raises:
        FileNotFoundError: If the payload file does not exist
        json.JSONDecodeError: If the payload is not valid JSON
        ValueError: If the form or field cannot be found
    """
    config = load_form(form)
    fields = select_fields(config, field_id)
    payload = load_json(payload_path)
    return process_external_data(payload, fields)


def preview(form: str, payload_path: Path) -> BindingReport:
    """Bind a payload and record where each field's data came from."""
    config = load_form(form)
    payload = load_json(payload_path)
    result = process_external_data(payload, config.fields)

    path_fields = {descriptor.id for descriptor in config.bound_fields}
    fallback_origin = "structure" if isinstance(payload, list) else "object keys"
    report = BindingReport(form=config.name, payload_file=str(payload_path), result=result)
    for descriptor in config.fields:
        bound = descriptor.id in result.initial_values or descriptor.id in result.select_options
        if not bound:
            origin = "-"
        elif descriptor.id in path_fields and not resolve_field(payload, descriptor).is_empty:
            origin = "path"
        else:
            origin = fallback_origin
        report.fields.append(
            FieldPreview(
                field_id=descriptor.id,
                field_type=descriptor.type,
                path=descriptor.data_path,
                initial_value=result.initial_values.get(descriptor.id),
                option_count=len(result.select_options.get(descriptor.id, [])),
                origin=origin,
            )
        )
    return report


def resolve(payload_path: Path, expression: str) -> Any:
    """Resolve a path expression against a payload file; None if nothing matched."""
    return resolve_path(load_json(payload_path), expression)


def print_preview(report: BindingReport) -> List[str]:
    """Format a binding report for CLI output."""
    lines = []
    lines.append(f"\nForm: {report.form}")
    lines.append(f"Payload: {Path(report.payload_file).name}")
    lines.append(f"Bound fields: {report.bound_count}/{len(report.fields)}")

    lines.append("")
    cols = ["field", "type", "path", "initial", "options", "origin"]
    widths = [20, 8, 24, 20, 7, 12]
    header = " | ".join(col.ljust(w) for col, w in zip(cols, widths))
    lines.append(header)
    lines.append("-" * len(header))

    for preview_row in report.fields:
        initial = "" if preview_row.initial_value is None else compact_json(preview_row.initial_value)
        values = [
            preview_row.field_id,
            preview_row.field_type,
            preview_row.path or "",
            initial,
            str(preview_row.option_count),
            preview_row.origin,
        ]
        lines.append(" | ".join(str(value)[:w].ljust(w) for value, w in zip(values, widths)))

    unbound = [p.field_id for p in report.fields if p.origin == "-"]
    if unbound:
        lines.append(f"\nUnbound fields: {', '.join(unbound)}")
    return lines


def summarize(result: ProcessedExternalData) -> Dict[str, int]:
    return {
        "initial_values": len(result.initial_values),
        "select_options": len(result.select_options),
    }
