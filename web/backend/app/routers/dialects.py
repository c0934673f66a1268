"""Dialects router -- registered dialects and their JSON Schemas."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from jun.codec.dialects import available_dialects, get_dialect
from jun.errors import UnknownDialectError
from jun.schema.json_schema import get_schema

from web.backend.app.models.api import DialectListResponse, DialectResponse

router = APIRouter(tags=["dialects"])


def _dialect_to_response(dialect, default_name: str) -> DialectResponse:
    """Convert a Dialect dataclass to a Pydantic response."""
    return DialectResponse(
        name=dialect.name,
        version=dialect.version,
        strict=dialect.strict,
        description=dialect.description,
        variants=dialect.type_names,
        common_properties=[spec.key for spec in dialect.common_fields],
        is_default=dialect.name == default_name,
    )


@router.get(
    "/api/dialects",
    response_model=DialectListResponse,
    summary="List registered dialects",
)
async def list_dialects():
    default_name = get_dialect(None).name
    return DialectListResponse(
        dialects=[_dialect_to_response(d, default_name) for d in available_dialects()],
        default=default_name,
    )


@router.get("/api/schema/{dialect_name}", summary="JSON Schema for a dialect")
async def dialect_schema(dialect_name: str):
    """Return the generated JSON Schema (draft 2020-12) for a dialect."""
    try:
        return get_schema(dialect_name)
    except UnknownDialectError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
