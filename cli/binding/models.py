"""Field descriptors and binding result models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldDescriptor(BaseModel):
    """One form field as authored in the designer.

    Accepts both the designer's camelCase keys (``externalDataPath``) and
    snake_case attribute names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    label: str = ""
    type: str = "text"  # "text" | "number" | "select"
    required: bool = False
    placeholder: Optional[str] = None
    options: Optional[List[str]] = None
    external_data_url: Optional[str] = Field(None, alias="externalDataUrl")
    external_data_path: Optional[str] = Field(None, alias="externalDataPath")
    external_data_value_path: Optional[str] = Field(None, alias="externalDataValuePath")

    @property
    def is_select(self) -> bool:
        return self.type == "select"

    @property
    def data_path(self) -> Optional[str]:
        """Configured value path, or None when blank."""
        path = (self.external_data_path or "").strip()
        return path or None

    @property
    def value_path(self) -> Optional[str]:
        """Secondary path for select option values, or None when blank."""
        path = (self.external_data_value_path or "").strip()
        return path or None


class Option(BaseModel):
    """A value/label pair offered by a select field."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


@dataclass
class ResolvedFieldData:
    """Binding result for one field. None means leave the field untouched."""
    initial_value: Any = None
    options: Optional[List[Option]] = None

    @property
    def is_empty(self) -> bool:
        return self.initial_value is None and not self.options


@dataclass
class ProcessedExternalData:
    """Aggregate result of one binding pass."""
    select_options: Dict[str, List[Option]] = field(default_factory=dict)
    initial_values: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selectOptions": {
                field_id: [option.model_dump() for option in options]
                for field_id, options in self.select_options.items()
            },
            "initialValues": dict(self.initial_values),
        }
