"""Serializer — the inverse of the node decoder.

Every node becomes one flat JSON object::

    {"id": "...", "type": "button", "properties": {"label": "Go", "padding": 8}}

- ``id`` is always written (uppercase hyphenated UUID).
- ``type`` is the canonical variant name (``scrollView``, never ``scrollview``).
- ``properties`` holds payload fields, then common fields; unset fields are
  omitted and legacy aliases are never written.
- ``children`` is written only when the node has a children tuple, even an
  empty one.
"""

from __future__ import annotations

from typing import Any

from jun.codec.common import encode_common
from jun.codec.dialects import Dialect, get_dialect
from jun.config import default_max_depth
from jun.errors import MaxDepthExceededError
from jun.models.node import Node


def encode_node(
    node: Node,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> dict[str, Any]:
    """Encode *node* and its subtree into plain JSON-compatible dicts.

    Raises:
        TypeError:             a payload does not belong to the dialect
                               (e.g. a POC symbol image under ``jun-1.1``).
        MaxDepthExceededError: the tree is deeper than ``max_depth``.
    """
    resolved = get_dialect(dialect)
    limit = max_depth if max_depth is not None else default_max_depth()

    root = _encode_one(node, resolved)
    stack: list[tuple[Node, dict[str, Any], int, str]] = [(node, root, 1, "")]

    while stack:
        current, out, depth, path = stack.pop()
        if current.children is None:
            continue
        if current.children and depth + 1 > limit:
            raise MaxDepthExceededError(limit, f"{path}/children/0")
        encoded_children: list[dict[str, Any]] = []
        out["children"] = encoded_children
        pending = []
        for index, child in enumerate(current.children):
            child_out = _encode_one(child, resolved)
            encoded_children.append(child_out)
            pending.append((child, child_out, depth + 1, f"{path}/children/{index}"))
        stack.extend(reversed(pending))

    return root


def _encode_one(node: Node, dialect: Dialect) -> dict[str, Any]:
    schema = dialect.schema_for(node.variant)
    properties = schema.encode(node.payload)
    for key, value in encode_common(node.common, dialect).items():
        properties.setdefault(key, value)
    return {
        "id": str(node.id).upper(),
        "type": node.variant.value,
        "properties": properties,
    }
