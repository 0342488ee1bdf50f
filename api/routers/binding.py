"""External data binding endpoints."""
import logging

from fastapi import APIRouter

from api.schemas.binding import BindRequest, BindResponse, ResolveRequest, ResolveResponse
from cli.binding import process_external_data, resolve_path

logger = logging.getLogger(__name__)

router = APIRouter(tags=["binding"])


@router.post("/bind", response_model=BindResponse)
def bind(request: BindRequest):
    """Resolve initial values and select options for the given fields.

    Never fails on payload shape; fields that cannot be resolved are simply
    missing from the response.
    """
    result = process_external_data(request.payload, request.fields)
    logger.info(
        "Bound %d/%d fields (%d option lists)",
        len(result.initial_values),
        len(request.fields),
        len(result.select_options),
    )
    return BindResponse(selectOptions=result.select_options, initialValues=result.initial_values)


@router.post("/resolve", response_model=ResolveResponse)
def resolve(request: ResolveRequest):
    """Evaluate a path expression against a payload."""
    value = resolve_path(request.payload, request.path)
    return ResolveResponse(path=request.path, found=value is not None, value=value)
