"""Typed field extraction with legacy alias chains.

A ``FieldSpec`` describes one wire field: the attribute it fills, its
current key, the legacy keys still accepted for it, its JSON type and its
default. Reading tries the current key, then each alias in declared order;
the first value of the right type wins. A value of the wrong type is
skipped, never an error.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


class FieldKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FieldSpec:
    """One flattened wire field."""

    attr: str
    key: str
    kind: FieldKind
    aliases: tuple[str, ...] = ()
    default: Any = None

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.key, *self.aliases)

    def read(self, source: Mapping[str, Any]) -> Any:
        for key in self.keys:
            if key not in source:
                continue
            value = extract(source[key], self.kind)
            if value is not _MISSING:
                return value
            logger.debug(
                "Ignoring field %r: expected %s, got %s",
                key,
                self.kind.value,
                type(source[key]).__name__,
            )
        return self.default

    def write(self, value: Any) -> Any:
        if self.kind is FieldKind.NUMBER:
            return json_number(value)
        return value


def extract(value: Any, kind: FieldKind) -> Any:
    """Return *value* converted for *kind*, or the missing sentinel on mismatch."""
    if kind is FieldKind.STRING:
        return value if isinstance(value, str) else _MISSING

    if kind is FieldKind.BOOLEAN:
        return value if isinstance(value, bool) else _MISSING

    # bool is a subclass of int; true/false are not numbers on the wire
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _MISSING
    try:
        number = float(value)
    except OverflowError:
        return _MISSING
    if not math.isfinite(number):
        return _MISSING
    return number


def json_number(value: float) -> int | float:
    """Write integral floats as JSON integers (``10.0`` -> ``10``)."""
    if float(value).is_integer() and abs(value) < 2**53:
        return int(value)
    return value
