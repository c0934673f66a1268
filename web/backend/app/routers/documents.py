"""Documents router -- validate and normalize JUN documents.

Request bodies are read raw and parsed with ``jun.loader.parse_json`` rather
than by FastAPI, so the parser honours the configured maximum tree depth and
depth failures come back as ``MaxDepthExceeded`` instead of a generic body
parsing error. Responses carrying a document are serialized the same way.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import ValidationError

from jun.codec.decoder import decode_node
from jun.codec.dialects import get_dialect
from jun.codec.encoder import encode_node
from jun.errors import DecodeError, InvalidJSONError, UnknownDialectError
from jun.loader import dump_json, parse_json
from jun.schema.validator import validate_document

from web.backend.app.models.api import (
    DecodeErrorResponse,
    DocumentRequest,
    NormalizeResponse,
    ValidateResponse,
)

router = APIRouter(tags=["documents"])

_DOCUMENT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": DocumentRequest.model_json_schema()}},
    }
}


def _resolve_dialect(name: str | None):
    try:
        return get_dialect(name)
    except UnknownDialectError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


def _unprocessable(kind: str, message: str, path: str = "") -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=DecodeErrorResponse(error_kind=kind, message=message, path=path).model_dump(),
    )


async def _read_body(request: Request) -> DocumentRequest:
    """Parse the ``{document, dialect}`` envelope.

    Raises ``DecodeError`` when the document is too deep to parse.
    """
    raw = await request.body()
    try:
        envelope = parse_json(raw)
    except InvalidJSONError as exc:
        raise _unprocessable(exc.kind, str(exc))
    try:
        return DocumentRequest.model_validate(envelope)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False))


@router.post(
    "/api/documents/validate",
    response_model=ValidateResponse,
    summary="Check that a document decodes (pass/fail)",
    openapi_extra=_DOCUMENT_BODY,
)
async def validate(request: Request):
    """Validate a document against a dialect.

    Always answers 200 for well-formed JSON; ``passed`` carries the verdict
    and, on failure, ``error_kind`` names the structural problem.
    """
    try:
        body = await _read_body(request)
    except DecodeError as exc:
        return ValidateResponse(
            passed=False, error_kind=exc.kind, message=exc.message, path=exc.path
        )

    dialect = _resolve_dialect(body.dialect)
    result = validate_document(body.document, dialect)
    return ValidateResponse(
        passed=result.passed,
        dialect=result.dialect,
        error_kind=result.error_kind,
        message=result.message,
        path=result.path,
    )


@router.post(
    "/api/documents/normalize",
    response_model=NormalizeResponse,
    responses={422: {"model": DecodeErrorResponse}},
    summary="Decode then re-encode a document in canonical form",
    openapi_extra=_DOCUMENT_BODY,
)
async def normalize(request: Request):
    """Return the canonical encoding of a document.

    Legacy field names become current names, ``type`` strings become
    canonical and every node carries an ``id``.
    """
    try:
        body = await _read_body(request)
        dialect = _resolve_dialect(body.dialect)
        root = decode_node(body.document, dialect)
    except DecodeError as exc:
        raise _unprocessable(exc.kind, exc.message, exc.path)

    response = {
        "dialect": dialect.name,
        "node_count": sum(1 for _ in root.walk()),
        "document": encode_node(root, dialect),
    }
    return Response(
        content=dump_json(response, indent=None),
        media_type="application/json",
    )
