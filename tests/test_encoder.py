"""Tests for the node serializer."""

import json
import uuid

import pytest

from jun.codec.decoder import decode_node
from jun.codec.encoder import encode_node
from jun.errors import MaxDepthExceededError
from jun.models.node import (
    ButtonPayload,
    CommonProperties,
    EmptyPayload,
    LayoutPayload,
    Node,
    SymbolImagePayload,
    TextPayload,
    Variant,
    new_node_id,
)

SAMPLE = {
    "id": "6F9619FF-8B86-D011-B42D-00C04FC964FF",
    "type": "vstack",
    "properties": {"spacing": 10, "alignment": "center", "padding": 16, "backgroundColor": "white"},
    "children": [
        {"type": "text", "properties": {"content": "Title", "fontSize": 24, "fontWeight": "bold"}},
        {"type": "image", "properties": {"imageURL": "https://example.com/a.png", "resizable": True}},
        {"type": "button", "properties": {"label": "Go", "action": "submit", "cornerRadius": 8}},
        {"type": "scrollView", "properties": {"axis": "vertical"}, "children": []},
        {"type": "divider"},
    ],
}


def _chain(depth: int) -> Node:
    node = Node(id=new_node_id(), variant=Variant.SPACER, payload=EmptyPayload())
    for _ in range(depth - 1):
        node = Node(id=new_node_id(), variant=Variant.VSTACK, payload=LayoutPayload(), children=[node])
    return node


def test_round_trip_is_identity():
    tree = decode_node(SAMPLE)
    assert decode_node(encode_node(tree)) == tree


def test_round_trip_under_every_dialect():
    for dialect in ("poc", "jun-1.0", "jun-1.1"):
        tree = decode_node({"type": "hstack", "children": [{"type": "circle"}]}, dialect)
        assert decode_node(encode_node(tree, dialect), dialect) == tree


def test_output_shape():
    out = encode_node(decode_node(SAMPLE))
    assert list(out) == ["id", "type", "properties", "children"]
    assert out["id"] == "6F9619FF-8B86-D011-B42D-00C04FC964FF"
    assert out["type"] == "vstack"
    assert out["properties"] == {
        "spacing": 10,
        "alignment": "center",
        "padding": 16,
        "backgroundColor": "white",
    }
    assert [c["type"] for c in out["children"]] == ["text", "image", "button", "scrollView", "divider"]


def test_output_is_json_serializable():
    text = json.dumps(encode_node(decode_node(SAMPLE)))
    assert json.loads(text)["children"][0]["properties"]["content"] == "Title"


def test_id_written_uppercase():
    node_id = uuid.uuid4()
    node = Node(id=node_id, variant=Variant.DIVIDER, payload=EmptyPayload())
    assert encode_node(node)["id"] == str(node_id).upper()


def test_absent_children_omitted_empty_children_kept():
    absent = Node(id=new_node_id(), variant=Variant.ZSTACK, payload=LayoutPayload())
    empty = Node(id=new_node_id(), variant=Variant.ZSTACK, payload=LayoutPayload(), children=())
    assert "children" not in encode_node(absent)
    assert encode_node(empty)["children"] == []


def test_unset_fields_are_omitted():
    node = Node(id=new_node_id(), variant=Variant.TEXT, payload=TextPayload(content="x"))
    assert encode_node(node)["properties"] == {"content": "x"}


def test_properties_always_written():
    node = Node(id=new_node_id(), variant=Variant.SPACER, payload=EmptyPayload())
    assert encode_node(node)["properties"] == {}


def test_legacy_names_upgraded():
    node = decode_node({"type": "button", "properties": {"buttonLabel": "Old", "buttonAction": "tap"}})
    out = encode_node(node)
    assert out["properties"] == {"label": "Old", "action": "tap"}


def test_scroll_axis_upgraded():
    out = encode_node(decode_node({"type": "ScrollView", "properties": {"scrollAxis": "horizontal"}}))
    assert out["type"] == "scrollView"
    assert out["properties"] == {"axis": "horizontal"}


def test_integral_numbers_written_as_ints():
    node = Node(
        id=new_node_id(),
        variant=Variant.VSTACK,
        payload=LayoutPayload(spacing=10.0),
        common=CommonProperties(padding=2.5, width=100.0),
    )
    props = encode_node(node)["properties"]
    assert props["spacing"] == 10 and isinstance(props["spacing"], int)
    assert props["padding"] == 2.5
    assert isinstance(props["width"], int)


def test_zero_and_false_are_written():
    node = Node(
        id=new_node_id(),
        variant=Variant.RECTANGLE,
        payload=EmptyPayload(),
        common=CommonProperties(padding=0.0, clipped=False, foreground_color=""),
    )
    assert encode_node(node)["properties"] == {"padding": 0, "foregroundColor": "", "clipped": False}


def test_font_only_written_by_dialects_that_have_it():
    node = Node(
        id=new_node_id(),
        variant=Variant.TEXT,
        payload=TextPayload(content="a"),
        common=CommonProperties(font="body"),
    )
    assert encode_node(node, "jun-1.1")["properties"]["font"] == "body"
    assert "font" not in encode_node(node, "jun-1.0")["properties"]
    assert "font" not in encode_node(node, "poc")["properties"]


def test_symbol_image_needs_poc_dialect():
    node = Node(id=new_node_id(), variant=Variant.IMAGE, payload=SymbolImagePayload(image_name="star.fill"))
    assert encode_node(node, "poc")["properties"] == {"imageName": "star.fill"}
    with pytest.raises(TypeError):
        encode_node(node, "jun-1.1")


def test_fallback_node_encodes_as_text():
    node = decode_node({"type": "carousel", "properties": {"padding": 4}})
    out = encode_node(node)
    assert out["type"] == "text"
    assert out["properties"] == {"content": "Unknown type: carousel", "padding": 4}


def test_button_default_label_written():
    node = Node(id=new_node_id(), variant=Variant.BUTTON, payload=ButtonPayload())
    assert encode_node(node)["properties"] == {"label": "Button"}


def test_deep_tree_encodes_without_recursion():
    out = encode_node(_chain(500))
    depth = 1
    while "children" in out:
        out = out["children"][0]
        depth += 1
    assert depth == 500
    assert out["type"] == "spacer"


def test_encoder_depth_guard():
    with pytest.raises(MaxDepthExceededError) as excinfo:
        encode_node(_chain(501))
    assert excinfo.value.max_depth == 500
    encode_node(_chain(5), max_depth=5)
    with pytest.raises(MaxDepthExceededError):
        encode_node(_chain(6), max_depth=5)
