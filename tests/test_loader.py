"""Tests for the document loaders."""

import json
import sys

import pytest

from jun import loader
from jun.errors import InvalidJSONError, MaxDepthExceededError, MissingDiscriminatorError
from jun.loader import (
    dump_to_string,
    load_from_bytes,
    load_from_path,
    load_from_string,
    parse_json,
)
from jun.models.node import Variant

DOCUMENT = {
    "type": "vstack",
    "properties": {"spacing": 10},
    "children": [
        {"type": "text", "properties": {"content": "Hello, Wörld", "fontSize": 20}},
        {"type": "button", "properties": {"buttonLabel": "OK"}},
    ],
}


def test_load_from_string():
    root = load_from_string(json.dumps(DOCUMENT))
    assert root.variant is Variant.VSTACK
    assert root.children[0].payload.content == "Hello, Wörld"
    assert root.children[1].payload.label == "OK"


def test_load_from_bytes():
    root = load_from_bytes(json.dumps(DOCUMENT, ensure_ascii=False).encode("utf-8"))
    assert root.children[0].payload.content == "Hello, Wörld"


def test_invalid_utf8():
    with pytest.raises(InvalidJSONError, match="UTF-8"):
        load_from_bytes(b'{"type": "text", "properties": {"content": "\xff"}}')


def test_invalid_json():
    with pytest.raises(InvalidJSONError):
        load_from_string('{"type": "text",')


def test_nan_literal_rejected():
    with pytest.raises(InvalidJSONError, match="NaN"):
        load_from_string('{"type": "vstack", "properties": {"spacing": NaN}}')


def test_parse_error_is_not_a_decode_error():
    with pytest.raises(InvalidJSONError) as excinfo:
        parse_json("[")
    assert excinfo.value.kind == "InvalidJSON"


def test_valid_json_invalid_document():
    with pytest.raises(MissingDiscriminatorError):
        load_from_string('"just a string"')


def test_deeply_nested_text_fails_cleanly():
    depth = 10_000
    text = '{"type":"vstack","children":[' * depth + '{"type":"text"}' + "]}" * depth
    with pytest.raises(MaxDepthExceededError):
        load_from_string(text)


def test_load_json_file(tmp_path):
    path = tmp_path / "screen.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    root = load_from_path(path)
    assert len(root.children) == 2


def test_load_yaml_file(tmp_path):
    path = tmp_path / "screen.yaml"
    path.write_text(
        "type: hstack\n"
        "properties:\n"
        "  spacing: 4\n"
        "children:\n"
        "  - type: text\n"
        "    properties:\n"
        "      content: Hi\n",
        encoding="utf-8",
    )
    root = load_from_path(path)
    assert root.variant is Variant.HSTACK
    assert root.payload.spacing == 4.0
    assert root.children[0].payload.content == "Hi"


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("type: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidJSONError, match="YAML"):
        load_from_path(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_from_path(tmp_path / "nope.json")


def test_dump_to_string_round_trip():
    root = load_from_string(json.dumps(DOCUMENT))
    text = dump_to_string(root)
    assert "buttonLabel" not in text
    assert "Wörld" in text
    assert load_from_string(text) == root


def test_dump_compact():
    root = load_from_string('{"type": "divider"}')
    assert "\n" not in dump_to_string(root, indent=None)


# --- Parser depth ---


def _chain_text(depth: int) -> str:
    """JSON text for a vstack chain *depth* levels deep, ending in a text node."""
    return '{"type":"vstack","children":[' * (depth - 1) + '{"type":"text"}' + "]}" * (depth - 1)


def _depth(node) -> int:
    depth = 1
    while node.children:
        node = node.children[0]
        depth += 1
    return depth


def test_json_at_max_depth_loads():
    root = load_from_string(_chain_text(500))
    assert _depth(root) == 500


def test_json_one_past_max_depth_fails_in_decoder():
    with pytest.raises(MaxDepthExceededError) as excinfo:
        load_from_string(_chain_text(501))
    assert excinfo.value.max_depth == 500
    assert excinfo.value.path.endswith("/children/0")


def test_json_depth_follows_env(monkeypatch):
    monkeypatch.setenv("JUN_MAX_DEPTH", "800")
    assert _depth(load_from_string(_chain_text(650))) == 650


def test_yaml_at_max_depth_loads(tmp_path):
    path = tmp_path / "deep.yaml"
    path.write_text(_chain_text(500), encoding="utf-8")
    assert _depth(load_from_path(path)) == 500


def test_parse_restores_recursion_limit():
    before = sys.getrecursionlimit()
    load_from_string(_chain_text(500))
    with pytest.raises(MaxDepthExceededError):
        load_from_string(_chain_text(10_000))
    assert sys.getrecursionlimit() == before


def test_parser_ceiling_reported_as_invalid_json(monkeypatch):
    monkeypatch.setattr(loader, "PARSER_RECURSION_CEILING", sys.getrecursionlimit())
    with pytest.raises(InvalidJSONError, match="nested too deeply for the parser"):
        load_from_string(_chain_text(100_000))


def test_dump_at_max_depth():
    text = dump_to_string(load_from_string(_chain_text(500)), indent=None)
    assert _depth(load_from_string(text)) == 500
