"""Common-property resolver.

Common properties live in the same ``properties`` object as the payload
fields; there is no nested ``common`` key. The payload decoder has first
claim on the keys it declares, and this resolver reads the rest. Resolution
never fails: a wrong-typed value is simply "not set".
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from jun.codec.dialects import Dialect
from jun.models.node import CommonProperties


def decode_common(
    properties: Mapping[str, Any],
    dialect: Dialect,
    claimed: Collection[str] = (),
) -> CommonProperties:
    """Read the dialect's common fields from *properties*.

    Args:
        properties: The node's ``properties`` object.
        dialect:    Supplies the set of common fields (``font`` is 1.1 only).
        claimed:    Keys already owned by the payload decoder; skipped here.
    """
    values: dict[str, Any] = {}
    for spec in dialect.common_fields:
        if claimed and spec.key in claimed:
            continue
        value = spec.read(properties)
        if value is not None:
            values[spec.attr] = value
    return CommonProperties(**values)


def encode_common(common: CommonProperties, dialect: Dialect) -> dict[str, Any]:
    """Flatten the set common fields back to wire keys.

    Fields the dialect does not declare are dropped, so a POC document never
    gains a ``font`` key.
    """
    out: dict[str, Any] = {}
    for spec in dialect.common_fields:
        value = getattr(common, spec.attr)
        if value is not None:
            out[spec.key] = spec.write(value)
    return out
