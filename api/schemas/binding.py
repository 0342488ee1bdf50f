"""Binding-related Pydantic models."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from cli.binding.models import FieldDescriptor, Option


class BindRequest(BaseModel):
    """A decoded payload and the fields to bind from it."""
    payload: Any = Field(None, description="Decoded JSON returned by the external source")
    fields: List[FieldDescriptor] = Field(default_factory=list)


class BindResponse(BaseModel):
    """Resolved data, keyed by field id. Unresolved fields are absent."""
    selectOptions: Dict[str, List[Option]] = Field(default_factory=dict)
    initialValues: Dict[str, Any] = Field(default_factory=dict)


class ResolveRequest(BaseModel):
    """Evaluate one path expression against a payload."""
    payload: Any = None
    path: str = Field(..., description="Path expression, e.g. 'data.items[].value'")


class ResolveResponse(BaseModel):
    path: str
    found: bool
    value: Any = None


class FormInfo(BaseModel):
    """Information about an available form definition."""
    name: str
    origin: str  # "project", "builtin"
    description: Optional[str] = None


class FormDetail(FormInfo):
    fields: List[FieldDescriptor] = Field(default_factory=list)
