"""Tests for the JUN node data model."""

import dataclasses
import uuid

import pytest

from jun.models.node import (
    ButtonPayload,
    CommonProperties,
    EmptyPayload,
    ImagePayload,
    LayoutPayload,
    Node,
    SymbolImagePayload,
    TextPayload,
    Variant,
    new_node_id,
)


def _text(content: str = "Hello", **kwargs) -> Node:
    return Node(id=new_node_id(), variant=Variant.TEXT, payload=TextPayload(content=content), **kwargs)


# --- Variant ---


def test_variant_values_are_wire_names():
    assert Variant.SCROLL_VIEW.value == "scrollView"
    assert Variant.VSTACK.value == "vstack"
    assert Variant("rectangle") is Variant.RECTANGLE


def test_variant_qualified_names():
    assert Variant.VSTACK.qualified_name == "layout/vstack"
    assert Variant.CIRCLE.qualified_name == "shape/circle"
    assert Variant.TEXT.qualified_name == "text"
    assert Variant.SCROLL_VIEW.family == "scrollView"


# --- Payloads ---


def test_payload_defaults():
    assert TextPayload().content == ""
    assert TextPayload().font_size is None
    assert ButtonPayload().label == "Button"
    assert ButtonPayload().action is None
    assert LayoutPayload().spacing is None


def test_node_rejects_payload_of_other_variant():
    with pytest.raises(TypeError, match="text node requires TextPayload"):
        Node(id=new_node_id(), variant=Variant.TEXT, payload=ButtonPayload())


def test_image_accepts_both_addressing_payloads():
    url = Node(id=new_node_id(), variant=Variant.IMAGE, payload=ImagePayload(image_url="https://x"))
    symbol = Node(id=new_node_id(), variant=Variant.IMAGE, payload=SymbolImagePayload(image_name="star"))
    assert url.payload.image_url == "https://x"
    assert symbol.payload.image_name == "star"


def test_shapes_share_empty_payload():
    node = Node(id=new_node_id(), variant=Variant.CIRCLE, payload=EmptyPayload())
    assert node.common.is_empty


# --- Common properties ---


def test_common_properties_three_state():
    common = CommonProperties(padding=0.0, foreground_color="")
    assert common.padding == 0.0
    assert common.width is None
    assert not common.is_empty
    assert common.set_fields() == {"padding": 0.0, "foreground_color": ""}


def test_common_properties_empty():
    assert CommonProperties().is_empty
    assert CommonProperties().set_fields() == {}


# --- Node ---


def test_children_list_is_frozen_to_tuple():
    child = _text("child")
    parent = Node(
        id=new_node_id(),
        variant=Variant.VSTACK,
        payload=LayoutPayload(),
        children=[child],
    )
    assert isinstance(parent.children, tuple)
    assert parent.children == (child,)
    assert parent.child_count == 1


def test_absent_children_stay_none():
    node = _text()
    assert node.children is None
    assert node.child_count == 0


def test_nodes_are_immutable():
    node = _text()
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.variant = Variant.BUTTON
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.payload.content = "changed"


def test_equality_includes_id():
    node_id = uuid.uuid4()
    a = Node(id=node_id, variant=Variant.TEXT, payload=TextPayload(content="x"))
    b = Node(id=node_id, variant=Variant.TEXT, payload=TextPayload(content="x"))
    c = Node(id=uuid.uuid4(), variant=Variant.TEXT, payload=TextPayload(content="x"))
    assert a == b
    assert a != c


def test_walk_is_document_order():
    leaf_a = _text("a")
    leaf_b = _text("b")
    inner = Node(id=new_node_id(), variant=Variant.HSTACK, payload=LayoutPayload(), children=[leaf_a])
    root = Node(id=new_node_id(), variant=Variant.VSTACK, payload=LayoutPayload(), children=[inner, leaf_b])
    assert [n.id for n in root.walk()] == [root.id, inner.id, leaf_a.id, leaf_b.id]
