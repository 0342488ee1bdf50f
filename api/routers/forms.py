"""Form definition endpoints."""
from typing import List

from fastapi import APIRouter, HTTPException

from api.schemas.binding import FormDetail, FormInfo
from cli.binding.config import get_form_config, list_form_configs
from cli.commands import FORMS_DIR

router = APIRouter(prefix="/forms", tags=["forms"])


@router.get("", response_model=List[FormInfo])
def get_forms():
    """List bundled and project form definitions."""
    return [
        FormInfo(name=name, origin=origin, description=description or None)
        for name, origin, description in list_form_configs(FORMS_DIR)
    ]


@router.get("/{name}", response_model=FormDetail)
def get_form(name: str):
    """Get one form definition with its field descriptors."""
    config, origin = get_form_config(name, FORMS_DIR)
    if config is None:
        raise HTTPException(status_code=404, detail=f"Form '{name}' not found")
    return FormDetail(
        name=config.name,
        origin=origin,
        description=config.description or None,
        fields=config.fields,
    )
