"""Pydantic schemas for API request/response models."""
from api.schemas.binding import (
    BindRequest,
    BindResponse,
    FormDetail,
    FormInfo,
    ResolveRequest,
    ResolveResponse,
)

__all__ = [
    "BindRequest",
    "BindResponse",
    "FormDetail",
    "FormInfo",
    "ResolveRequest",
    "ResolveResponse",
]
