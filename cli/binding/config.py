"""YAML form definitions - field descriptors without writing Python."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from cli.binding.models import FieldDescriptor

logger = logging.getLogger(__name__)

# Path to bundled YAML form definitions
CONFIGS_DIR = Path(__file__).parent / "configs"


class FormConfig:
    """A form loaded from a YAML file.

    Config format:
        form: customer-intake
        description: "Customer details pre-filled from the CRM"

        fields:
          - id: company
            label: Company
            type: text
            externalDataUrl: https://api.example.com/customers
            externalDataPath: data.company
          - id: country
            label: Country
            type: select
            externalDataPath: countries[].name
            externalDataValuePath: countries[].code
    """

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self.config: Dict[str, Any] = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        if not isinstance(self.config, dict):
            raise ValueError(f"Form config must be a mapping: {config_path}")
        self.name: str = str(self.config.get("form", config_path.stem))
        self.description: str = self.config.get("description", "") or ""
        self.fields: List[FieldDescriptor] = [
            FieldDescriptor.model_validate(entry) for entry in self.config.get("fields") or []
        ]

    def get_field(self, field_id: str) -> Optional[FieldDescriptor]:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    @property
    def bound_fields(self) -> List[FieldDescriptor]:
        """Fields with an external data path configured."""
        return [field for field in self.fields if field.data_path]


def load_form_config(config_path: Path) -> Optional[FormConfig]:
    """Load a FormConfig from a YAML file, returning None if invalid."""
    try:
        return FormConfig(config_path)
    except (yaml.YAMLError, OSError, ValidationError, ValueError) as exc:
        logger.warning("Ignoring form config %s: %s", config_path, exc)
        return None


def get_form_config(name: str, forms_dir: Optional[Path] = None) -> Tuple[Optional[FormConfig], str]:
    """Find a form definition by name.

    Lookup order:
    1. Project forms directory (<forms_dir>/<name>.yaml)
    2. Bundled config (cli/binding/configs/<name>.yaml)

    Returns:
        Tuple of (config or None, origin) where origin is one of
        "project", "builtin", "missing"
    """
    name_lower = name.lower()

    if forms_dir:
        config_path = forms_dir / f"{name_lower}.yaml"
        if config_path.exists():
            config = load_form_config(config_path)
            if config:
                return config, "project"

    builtin = CONFIGS_DIR / f"{name_lower}.yaml"
    if builtin.exists():
        config = load_form_config(builtin)
        if config:
            return config, "builtin"

    return None, "missing"


def list_form_configs(forms_dir: Optional[Path] = None) -> List[Tuple[str, str, str]]:
    """(name, origin, description) for every loadable form, project first."""
    found: Dict[str, Tuple[str, str, str]] = {}
    sources = [(CONFIGS_DIR, "builtin")]
    if forms_dir:
        sources.append((forms_dir, "project"))
    for directory, origin in sources:
        if not directory.is_dir():
            continue
        for config_path in sorted(directory.glob("*.yaml")):
            config = load_form_config(config_path)
            if config:
                found[config_path.stem] = (config_path.stem, origin, config.description)
    return sorted(found.values())
