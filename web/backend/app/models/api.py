"""Pydantic models for API request/response serialization.

Documents travel as plain JSON objects; the JUN codec does all the
interpretation. These models only describe the envelopes around them.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Dialect models
# ---------------------------------------------------------------------------


class DialectResponse(BaseModel):
    """Mirrors jun.codec.dialects.Dialect."""

    name: str
    version: str
    strict: bool
    description: str = ""
    variants: list[str] = Field(default_factory=list)
    common_properties: list[str] = Field(default_factory=list)
    is_default: bool = False


class DialectListResponse(BaseModel):
    dialects: list[DialectResponse] = Field(default_factory=list)
    default: str = ""


# ---------------------------------------------------------------------------
# Document models
# ---------------------------------------------------------------------------


class DocumentRequest(BaseModel):
    """A JUN document plus the dialect to read it with."""

    document: Any = Field(..., description="Root component object")
    dialect: Optional[str] = Field(
        default=None, description="Dialect name; server default when omitted"
    )


class ValidateResponse(BaseModel):
    """Mirrors jun.schema.validator.ValidationResult."""

    passed: bool
    dialect: str = ""
    error_kind: str = ""
    message: str = ""
    path: str = ""


class NormalizeResponse(BaseModel):
    """A document decoded and re-encoded in canonical form."""

    dialect: str
    node_count: int = 0
    document: dict[str, Any] = Field(default_factory=dict)


class DecodeErrorResponse(BaseModel):
    """Body of a 422 response for documents that fail to decode."""

    error_kind: str
    message: str
    path: str = ""
