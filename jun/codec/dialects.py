"""Dialect tables — which variants exist and how their fields are spelled.

A ``Dialect`` is a closed, versioned description of one JUN wire format:
the dispatch table from normalized ``type`` strings to payload schemas, the
common property fields, and whether an unknown ``type`` is a hard error.

Three dialects ship with the package:

- ``poc``: the original proof of concept. Strict: unknown types fail.
  Images may be addressed by system symbol name.
- ``jun-1.0``: JUN 1.0. Lenient: unknown types become a text
  node naming the type. Legacy button/scroll keys accepted.
- ``jun-1.1``: JUN 1.0 plus the ``font`` common property. Default.

``Dialect.with_variant`` builds a new dialect that gains, or re-spells, one
of the ``Variant`` members; the decoder itself never changes. A brand-new
component type also needs a ``Variant`` member and a ``VARIANT_PAYLOADS``
entry (with its payload dataclass) in ``jun.models.node``, since nodes only
carry variants and payloads declared there.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from jun.codec.fields import FieldKind, FieldSpec
from jun.config import default_dialect_name
from jun.errors import UnknownDialectError
from jun.models.node import (
    ButtonPayload,
    EmptyPayload,
    ImagePayload,
    LayoutPayload,
    Payload,
    ScrollViewPayload,
    SymbolImagePayload,
    TextPayload,
    VARIANT_PAYLOADS,
    Variant,
)

STRING = FieldKind.STRING
NUMBER = FieldKind.NUMBER
BOOLEAN = FieldKind.BOOLEAN

UNKNOWN_TYPE_PREFIX = "Unknown type: "


@dataclass(frozen=True)
class PayloadSchema:
    """Decoder/encoder for the type-specific fields of one variant."""

    variant: Variant
    payload_cls: type
    fields: tuple[FieldSpec, ...] = ()

    def __post_init__(self):
        if self.payload_cls not in VARIANT_PAYLOADS[self.variant]:
            raise ValueError(
                f"{self.payload_cls.__name__} is not a payload for {self.variant.value}"
            )

    @property
    def claimed_keys(self) -> frozenset[str]:
        """Every wire key this payload reads, legacy aliases included."""
        return frozenset(key for spec in self.fields for key in spec.keys)

    def decode(self, source: Mapping[str, Any]) -> Payload:
        return self.payload_cls(**{spec.attr: spec.read(source) for spec in self.fields})

    def encode(self, payload: Payload) -> dict[str, Any]:
        if not isinstance(payload, self.payload_cls):
            raise TypeError(
                f"{self.variant.value} payload must be {self.payload_cls.__name__}, "
                f"got {type(payload).__name__}"
            )
        out: dict[str, Any] = {}
        for spec in self.fields:
            value = getattr(payload, spec.attr)
            if value is not None:
                out[spec.key] = spec.write(value)
        return out


@dataclass(frozen=True)
class Dialect:
    """A complete, selectable wire-format configuration."""

    name: str
    version: str
    strict: bool
    schemas: tuple[PayloadSchema, ...]
    common_fields: tuple[FieldSpec, ...]
    description: str = ""
    variants: Mapping[str, PayloadSchema] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        table: dict[str, PayloadSchema] = {}
        common_keys = {key for spec in self.common_fields for key in spec.keys}
        for schema in self.schemas:
            type_name = schema.variant.value.lower()
            if type_name in table:
                raise ValueError(f"{self.name}: variant {schema.variant.value} registered twice")
            collisions = schema.claimed_keys & common_keys
            if collisions:
                raise ValueError(
                    f"{self.name}: {schema.variant.value} fields collide with common "
                    f"properties: {sorted(collisions)}"
                )
            table[type_name] = schema
        if not self.strict and "text" not in table:
            raise ValueError(f"{self.name}: lenient dialects need a text variant for fallbacks")
        object.__setattr__(self, "variants", MappingProxyType(table))

    def resolve(self, type_name: str) -> PayloadSchema | None:
        """Case-insensitive lookup of a wire ``type`` string."""
        return self.variants.get(type_name.lower())

    def schema_for(self, variant: Variant) -> PayloadSchema:
        schema = self.variants.get(variant.value.lower())
        if schema is None:
            raise TypeError(f"Dialect {self.name} has no {variant.value} variant")
        return schema

    def fallback(self, type_name: str) -> tuple[Variant, Payload]:
        """Substitute node for an unrecognized ``type`` in lenient dialects."""
        return Variant.TEXT, TextPayload(content=f"{UNKNOWN_TYPE_PREFIX}{type_name}")

    @property
    def type_names(self) -> list[str]:
        """Canonical wire names of every registered variant, in table order."""
        return [schema.variant.value for schema in self.schemas]

    def with_variant(self, schema: PayloadSchema, name: str | None = None) -> Dialect:
        """Return a new dialect with *schema* added, or replacing the entry for its variant.

        *schema* must be for a ``Variant`` member; ``PayloadSchema`` rejects
        payload classes not listed in ``VARIANT_PAYLOADS``.
        """
        kept = tuple(s for s in self.schemas if s.variant is not schema.variant)
        return replace(self, name=name or self.name, schemas=(*kept, schema))


# --- Field tables ---

COMMON_FIELDS_V1: tuple[FieldSpec, ...] = (
    FieldSpec("padding", "padding", NUMBER),
    FieldSpec("width", "width", NUMBER),
    FieldSpec("height", "height", NUMBER),
    FieldSpec("max_width", "maxWidth", NUMBER),
    FieldSpec("max_height", "maxHeight", NUMBER),
    FieldSpec("foreground_color", "foregroundColor", STRING),
    FieldSpec("background_color", "backgroundColor", STRING),
    FieldSpec("corner_radius", "cornerRadius", NUMBER),
    FieldSpec("clipped", "clipped", BOOLEAN),
    FieldSpec("aspect_ratio", "aspectRatio", NUMBER),
    FieldSpec("content_mode", "contentMode", STRING),
)

COMMON_FIELDS_V1_1: tuple[FieldSpec, ...] = (
    *COMMON_FIELDS_V1,
    FieldSpec("font", "font", STRING),
)

_LAYOUT_FIELDS = (
    FieldSpec("spacing", "spacing", NUMBER),
    FieldSpec("alignment", "alignment", STRING),
)

_TEXT_FIELDS = (
    FieldSpec("content", "content", STRING, default=""),
    FieldSpec("font_size", "fontSize", NUMBER),
    FieldSpec("font_weight", "fontWeight", STRING),
)


def _shared_schemas() -> list[PayloadSchema]:
    """Variants spelled identically in every dialect."""
    return [
        PayloadSchema(Variant.VSTACK, LayoutPayload, _LAYOUT_FIELDS),
        PayloadSchema(Variant.HSTACK, LayoutPayload, _LAYOUT_FIELDS),
        PayloadSchema(Variant.ZSTACK, LayoutPayload, _LAYOUT_FIELDS),
        PayloadSchema(Variant.TEXT, TextPayload, _TEXT_FIELDS),
        PayloadSchema(Variant.RECTANGLE, EmptyPayload),
        PayloadSchema(Variant.CIRCLE, EmptyPayload),
        PayloadSchema(Variant.SPACER, EmptyPayload),
        PayloadSchema(Variant.DIVIDER, EmptyPayload),
    ]


_POC_SCHEMAS = (
    *_shared_schemas(),
    PayloadSchema(
        Variant.IMAGE,
        SymbolImagePayload,
        (
            FieldSpec("image_name", "imageName", STRING),
            FieldSpec("image_url", "imageURL", STRING),
            FieldSpec("image_width", "imageWidth", NUMBER),
            FieldSpec("image_height", "imageHeight", NUMBER),
            FieldSpec("resizable", "resizable", BOOLEAN),
        ),
    ),
    PayloadSchema(
        Variant.BUTTON,
        ButtonPayload,
        (
            FieldSpec("label", "label", STRING, default="Button"),
            FieldSpec("action", "action", STRING),
        ),
    ),
    PayloadSchema(
        Variant.SCROLL_VIEW,
        ScrollViewPayload,
        (
            FieldSpec("axis", "axis", STRING),
            FieldSpec("shows_indicators", "showsIndicators", BOOLEAN),
        ),
    ),
)

_JUN_SCHEMAS = (
    *_shared_schemas(),
    PayloadSchema(
        Variant.IMAGE,
        ImagePayload,
        (
            FieldSpec("image_url", "imageURL", STRING),
            FieldSpec("resizable", "resizable", BOOLEAN),
        ),
    ),
    PayloadSchema(
        Variant.BUTTON,
        ButtonPayload,
        (
            FieldSpec("label", "label", STRING, aliases=("buttonLabel",), default="Button"),
            FieldSpec("action", "action", STRING, aliases=("buttonAction",)),
        ),
    ),
    PayloadSchema(
        Variant.SCROLL_VIEW,
        ScrollViewPayload,
        (
            FieldSpec("axis", "axis", STRING, aliases=("scrollAxis",)),
            FieldSpec("shows_indicators", "showsIndicators", BOOLEAN),
        ),
    ),
)


POC = Dialect(
    name="poc",
    version="0.1",
    strict=True,
    schemas=_POC_SCHEMAS,
    common_fields=COMMON_FIELDS_V1,
    description="Proof-of-concept format: strict types, symbol-name images.",
)

JUN_1_0 = Dialect(
    name="jun-1.0",
    version="1.0",
    strict=False,
    schemas=_JUN_SCHEMAS,
    common_fields=COMMON_FIELDS_V1,
    description="JUN 1.0: unknown types fall back to text, URL-only images.",
)

JUN_1_1 = Dialect(
    name="jun-1.1",
    version="1.1",
    strict=False,
    schemas=_JUN_SCHEMAS,
    common_fields=COMMON_FIELDS_V1_1,
    description="JUN 1.1: adds the font common property.",
)


# --- Registry ---

_DIALECTS: dict[str, Dialect] = {d.name: d for d in (POC, JUN_1_0, JUN_1_1)}


def register_dialect(dialect: Dialect, replace_existing: bool = False) -> Dialect:
    key = dialect.name.lower()
    if key in _DIALECTS and not replace_existing:
        raise ValueError(f"Dialect {dialect.name!r} is already registered")
    _DIALECTS[key] = dialect
    return dialect


def get_dialect(name: str | Dialect | None = None) -> Dialect:
    """Resolve a dialect by name; ``None`` selects the configured default."""
    if isinstance(name, Dialect):
        return name
    if name is None:
        name = default_dialect_name()
    try:
        return _DIALECTS[name.lower()]
    except KeyError:
        raise UnknownDialectError(name) from None


def available_dialects() -> Iterable[Dialect]:
    return list(_DIALECTS.values())
