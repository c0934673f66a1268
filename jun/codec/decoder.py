"""Node decoder and tree assembler.

Turns one parsed JSON object into an immutable ``Node`` tree::

    {"type": "vstack", "properties": {"spacing": 8}, "children": [...]}

Per node:

1. ``id``: kept when it is a hyphenated UUID string, else generated.
2. ``type``: required string, matched case-insensitively against the
   dialect's dispatch table.
3. ``properties``: optional object; both the payload decoder and the common
   resolver read from it.
4. ``children``: optional array, decoded in order. Absent stays ``None``.

The tree is walked with an explicit stack, so a hostile document hits the
depth guard (``MaxDepthExceededError``) instead of Python's recursion limit.
A failure anywhere fails the whole tree; no partial trees are returned.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from jun.codec.common import decode_common
from jun.codec.dialects import Dialect, get_dialect
from jun.config import default_max_depth
from jun.errors import (
    MalformedPropertiesError,
    MaxDepthExceededError,
    MissingDiscriminatorError,
    UnknownVariantError,
)
from jun.models.node import CommonProperties, Node, Payload, Variant

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_NO_PROPERTIES: Mapping[str, Any] = MappingProxyType({})


@dataclass
class _Frame:
    """A node whose own fields are decoded but whose children are pending."""

    node_id: uuid.UUID
    variant: Variant
    payload: Payload
    common: CommonProperties
    raw_children: Sequence[Any] | None
    cursor: int = 0
    built: list[Node] = field(default_factory=list)

    def close(self) -> Node:
        children = tuple(self.built) if self.raw_children is not None else None
        return Node(
            id=self.node_id,
            variant=self.variant,
            payload=self.payload,
            common=self.common,
            children=children,
        )


def decode_node(
    data: Any,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> Node:
    """Decode one JSON object (and its subtree) into a ``Node``.

    Args:
        data:      Parsed JSON value for the root node.
        dialect:   Dialect or dialect name; defaults to ``JUN_DIALECT``.
        max_depth: Deepest allowed level, root being 1; defaults to
                   ``JUN_MAX_DEPTH``.

    Raises:
        MissingDiscriminatorError: a node is not an object or lacks ``type``.
        UnknownVariantError:       unknown ``type`` in a strict dialect.
        MalformedPropertiesError:  ``properties`` present but not an object.
        MaxDepthExceededError:     the tree is deeper than ``max_depth``.
    """
    return _decode_tree(data, get_dialect(dialect), _limit(max_depth))


def decode_children(
    raw_children: Any,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> tuple[Node, ...] | None:
    """Decode a ``children`` value on its own.

    Returns ``None`` for an absent (``None``) or non-array value, otherwise a
    tuple in array order. Error paths are relative to the array (``/1``).
    The elements count as depth 1.
    """
    if raw_children is None:
        return None
    if not isinstance(raw_children, list):
        logger.debug("Ignoring children: expected array, got %s", type(raw_children).__name__)
        return None
    resolved = get_dialect(dialect)
    limit = _limit(max_depth)
    return tuple(
        _decode_tree(item, resolved, limit, base_path=f"/{index}")
        for index, item in enumerate(raw_children)
    )


def _limit(max_depth: int | None) -> int:
    if max_depth is None:
        return default_max_depth()
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")
    return max_depth


def _decode_tree(data: Any, dialect: Dialect, max_depth: int, base_path: str = "") -> Node:
    stack: list[_Frame] = []
    stack.append(_open(data, dialect, stack, max_depth, base_path))

    while True:
        frame = stack[-1]
        if frame.raw_children is not None and frame.cursor < len(frame.raw_children):
            raw = frame.raw_children[frame.cursor]
            frame.cursor += 1
            stack.append(_open(raw, dialect, stack, max_depth, base_path))
            continue

        stack.pop()
        node = frame.close()
        if not stack:
            return node
        stack[-1].built.append(node)


def _path(stack: list[_Frame], base_path: str) -> str:
    """JSON Pointer of the node about to be opened on top of *stack*."""
    return base_path + "".join(f"/children/{frame.cursor - 1}" for frame in stack)


def _open(
    data: Any,
    dialect: Dialect,
    stack: list[_Frame],
    max_depth: int,
    base_path: str,
) -> _Frame:
    if len(stack) + 1 > max_depth:
        raise MaxDepthExceededError(max_depth, _path(stack, base_path))

    if not isinstance(data, Mapping):
        raise MissingDiscriminatorError(
            f"expected a JSON object with a 'type' field, got {type(data).__name__}",
            _path(stack, base_path),
        )

    node_id = _read_id(data.get("id"))

    type_name = data.get("type")
    if not isinstance(type_name, str):
        raise MissingDiscriminatorError(
            "missing or non-string 'type' field", _path(stack, base_path)
        )

    if "properties" in data:
        properties = data["properties"]
        if not isinstance(properties, Mapping):
            raise MalformedPropertiesError(
                f"'properties' must be an object, got {type(properties).__name__}",
                _path(stack, base_path),
            )
    else:
        properties = _NO_PROPERTIES

    schema = dialect.resolve(type_name)
    if schema is not None:
        variant = schema.variant
        payload = schema.decode(properties)
        claimed = schema.claimed_keys
    elif dialect.strict:
        raise UnknownVariantError(type_name, _path(stack, base_path))
    else:
        logger.debug(
            "Unknown component type %r at %s; substituting fallback",
            type_name,
            _path(stack, base_path) or "/",
        )
        variant, payload = dialect.fallback(type_name)
        claimed = frozenset()

    common = decode_common(properties, dialect, claimed)

    return _Frame(
        node_id=node_id,
        variant=variant,
        payload=payload,
        common=common,
        raw_children=_read_children(data),
    )


def _read_id(value: Any) -> uuid.UUID:
    if isinstance(value, str) and _UUID_RE.fullmatch(value):
        return uuid.UUID(value)
    return uuid.uuid4()


def _read_children(data: Mapping[str, Any]) -> Sequence[Any] | None:
    if "children" not in data:
        return None
    raw = data["children"]
    if isinstance(raw, list):
        return raw
    if raw is not None:
        logger.debug("Ignoring children: expected array, got %s", type(raw).__name__)
    return None
