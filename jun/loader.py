"""Loaders — turn raw documents into decoded trees and back.

These are thin wrappers: they parse text into plain Python values and hand
them to the node decoder. Parse failures surface as ``InvalidJSONError`` so
callers can tell a broken file apart from a document that breaks the JUN
contract (``DecodeError``).

YAML-authored documents (``.yaml``/``.yml``) are accepted by
``load_from_path``; YAML is a superset of JSON and is parsed with
``yaml.safe_load``.

Parsing and dumping run inside ``parser_recursion_budget`` so that any
document the decoder accepts (``max_depth`` levels) also gets through the
recursive ``json`` and PyYAML parsers.
"""

from __future__ import annotations

import json
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml

from jun.codec.decoder import decode_node
from jun.codec.dialects import Dialect, get_dialect
from jun.codec.encoder import encode_node
from jun.config import default_max_depth
from jun.errors import InvalidJSONError, JUNError, MaxDepthExceededError
from jun.models.node import Node

YAML_SUFFIXES = {".yaml", ".yml"}

# Interpreter frames used per node level (an object plus its children array).
_JSON_FRAMES_PER_LEVEL = 4
_YAML_FRAMES_PER_LEVEL = 12

PARSER_RECURSION_CEILING = 20_000

_budget_lock = threading.Lock()
_budget_users = 0
_saved_limit = 0


def load_from_string(
    text: str,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> Node:
    """Decode a JSON document held in a string."""
    return decode_node(parse_json(text, max_depth), dialect, max_depth)


def load_from_bytes(
    data: bytes,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> Node:
    """Decode a UTF-8 encoded JSON document."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidJSONError(f"Document is not valid UTF-8: {e}") from e
    return load_from_string(text, dialect, max_depth)


def load_from_path(
    path: str | Path,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> Node:
    """Decode a document file. ``.yaml``/``.yml`` files are read as YAML.

    Raises:
        FileNotFoundError: *path* does not exist.
    """
    path = Path(path)
    raw = path.read_bytes()
    if path.suffix.lower() in YAML_SUFFIXES:
        return decode_node(parse_yaml(raw, max_depth), dialect, max_depth)
    return load_from_bytes(raw, dialect, max_depth)


def dump_to_string(
    node: Node,
    dialect: str | Dialect | None = None,
    indent: int | None = 2,
) -> str:
    """Encode a tree as JSON text."""
    return dump_json(encode_node(node, get_dialect(dialect)), indent=indent)


def dump_json(data: Any, indent: int | None = 2, max_depth: int | None = None) -> str:
    with parser_recursion_budget(max_depth, _JSON_FRAMES_PER_LEVEL):
        return json.dumps(data, indent=indent, ensure_ascii=False)


def parse_json(text: str | bytes, max_depth: int | None = None) -> Any:
    """Strict JSON parse: ``NaN``/``Infinity`` literals are rejected."""
    with parser_recursion_budget(max_depth, _JSON_FRAMES_PER_LEVEL) as levels:
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise InvalidJSONError(f"Invalid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise InvalidJSONError(f"Document is not valid UTF-8: {e}") from e
        except RecursionError as e:
            raise _too_deep(max_depth, levels) from e


def parse_yaml(data: str | bytes, max_depth: int | None = None) -> Any:
    with parser_recursion_budget(max_depth, _YAML_FRAMES_PER_LEVEL) as levels:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise InvalidJSONError(f"Invalid YAML: {e}") from e
        except RecursionError as e:
            raise _too_deep(max_depth, levels) from e


@contextmanager
def parser_recursion_budget(max_depth: int | None, frames_per_level: int):
    """Raise the interpreter recursion limit for parsing *max_depth* levels.

    ``json`` and PyYAML recurse for every nested object and array, so a
    document inside the codec depth limit could otherwise exhaust the default
    interpreter limit. Yields the number of node levels the parser can now
    reach. The limit never goes above ``PARSER_RECURSION_CEILING``; the
    previous limit is restored once the last concurrent parse finishes.
    """
    global _budget_users, _saved_limit
    depth = _resolve_depth(max_depth)
    with _budget_lock:
        if _budget_users == 0:
            _saved_limit = sys.getrecursionlimit()
        _budget_users += 1
        wanted = min(_saved_limit + depth * frames_per_level, PARSER_RECURSION_CEILING)
        if wanted > sys.getrecursionlimit():
            sys.setrecursionlimit(wanted)
        levels = max(sys.getrecursionlimit() - _saved_limit, 0) // frames_per_level
    try:
        yield levels
    finally:
        with _budget_lock:
            _budget_users -= 1
            if _budget_users == 0:
                sys.setrecursionlimit(_saved_limit)


def _too_deep(max_depth: int | None, levels: int) -> JUNError:
    depth = _resolve_depth(max_depth)
    if levels >= depth:
        # every frame budgeted for max_depth levels was used up
        return MaxDepthExceededError(depth)
    return InvalidJSONError(
        f"Document nested too deeply for the parser (parser ceiling is {levels} levels, "
        f"max depth is {depth})"
    )


def _reject_constant(name: str) -> Any:
    raise InvalidJSONError(f"Invalid JSON: {name} is not a valid JSON number")


def _resolve_depth(max_depth: int | None) -> int:
    return max_depth if max_depth is not None else default_max_depth()
