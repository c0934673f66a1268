"""Node data model — the in-memory form of a JUN UI tree.

A decoded document is a tree of immutable ``Node`` values. Each node carries
a ``Variant`` tag, the payload dataclass that belongs to that tag, the
universal ``CommonProperties`` bag and an optional tuple of children.

Renderers read these values and nothing else; how they were produced (and
from which dialect) is invisible at this level.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from enum import Enum


class Variant(Enum):
    """Closed set of component types. Values are the canonical wire names."""

    VSTACK = "vstack"
    HSTACK = "hstack"
    ZSTACK = "zstack"
    TEXT = "text"
    IMAGE = "image"
    BUTTON = "button"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    SCROLL_VIEW = "scrollView"
    SPACER = "spacer"
    DIVIDER = "divider"

    @property
    def family(self) -> str:
        return _FAMILIES.get(self, self.value)

    @property
    def qualified_name(self) -> str:
        """``layout/vstack``, ``shape/circle``; plain name for ungrouped variants."""
        family = self.family
        if family == self.value:
            return self.value
        return f"{family}/{self.value}"


_FAMILIES = {
    Variant.VSTACK: "layout",
    Variant.HSTACK: "layout",
    Variant.ZSTACK: "layout",
    Variant.RECTANGLE: "shape",
    Variant.CIRCLE: "shape",
}


# --- Payloads ---


@dataclass(frozen=True)
class LayoutPayload:
    """Stack layouts (vstack, hstack, zstack)."""

    spacing: float | None = None
    alignment: str | None = None


@dataclass(frozen=True)
class TextPayload:
    content: str = ""
    font_size: float | None = None
    font_weight: str | None = None


@dataclass(frozen=True)
class ImagePayload:
    """URL-addressed image (JUN dialects)."""

    image_url: str | None = None
    resizable: bool | None = None


@dataclass(frozen=True)
class SymbolImagePayload:
    """Image addressed by system symbol name or URL (POC dialect)."""

    image_name: str | None = None
    image_url: str | None = None
    image_width: float | None = None
    image_height: float | None = None
    resizable: bool | None = None


@dataclass(frozen=True)
class ButtonPayload:
    label: str = "Button"
    action: str | None = None


@dataclass(frozen=True)
class ScrollViewPayload:
    axis: str | None = None
    shows_indicators: bool | None = None


@dataclass(frozen=True)
class EmptyPayload:
    """Variants with no type-specific fields (shapes, spacer, divider)."""


Payload = (
    LayoutPayload
    | TextPayload
    | ImagePayload
    | SymbolImagePayload
    | ButtonPayload
    | ScrollViewPayload
    | EmptyPayload
)

VARIANT_PAYLOADS: dict[Variant, tuple[type, ...]] = {
    Variant.VSTACK: (LayoutPayload,),
    Variant.HSTACK: (LayoutPayload,),
    Variant.ZSTACK: (LayoutPayload,),
    Variant.TEXT: (TextPayload,),
    Variant.IMAGE: (ImagePayload, SymbolImagePayload),
    Variant.BUTTON: (ButtonPayload,),
    Variant.RECTANGLE: (EmptyPayload,),
    Variant.CIRCLE: (EmptyPayload,),
    Variant.SCROLL_VIEW: (ScrollViewPayload,),
    Variant.SPACER: (EmptyPayload,),
    Variant.DIVIDER: (EmptyPayload,),
}


# --- Common properties ---


@dataclass(frozen=True)
class CommonProperties:
    """Styling fields applicable to every variant.

    Every field is three-state: ``None`` means "not set, use the platform
    default", which is distinct from an explicit zero or empty string.
    """

    padding: float | None = None
    width: float | None = None
    height: float | None = None
    max_width: float | None = None
    max_height: float | None = None
    foreground_color: str | None = None
    background_color: str | None = None
    corner_radius: float | None = None
    clipped: bool | None = None
    aspect_ratio: float | None = None
    content_mode: str | None = None
    font: str | None = None  # JUN 1.1

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def set_fields(self) -> dict[str, object]:
        """Attribute name -> value for every field that is set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


# --- Node ---


def new_node_id() -> uuid.UUID:
    return uuid.uuid4()


@dataclass(frozen=True)
class Node:
    """One element of a UI tree.

    ``children`` is ``None`` when the source document had no ``children``
    key and an empty tuple when it had ``"children": []``. Lists passed in
    are converted to tuples so that a constructed tree cannot be mutated.
    """

    id: uuid.UUID
    variant: Variant
    payload: Payload
    common: CommonProperties = field(default_factory=CommonProperties)
    children: tuple[Node, ...] | None = None

    def __post_init__(self):
        allowed = VARIANT_PAYLOADS[self.variant]
        if not isinstance(self.payload, allowed):
            expected = " or ".join(t.__name__ for t in allowed)
            raise TypeError(
                f"{self.variant.value} node requires {expected}, "
                f"got {type(self.payload).__name__}"
            )
        if self.children is not None and not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def child_count(self) -> int:
        return len(self.children) if self.children else 0

    def walk(self):
        """Yield this node and every descendant, depth-first, in document order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))
