"""JUN (JSON UI Notation) — decode and encode declarative UI trees."""

from jun.codec.decoder import decode_children, decode_node
from jun.codec.dialects import JUN_1_0, JUN_1_1, POC, Dialect, available_dialects, get_dialect
from jun.codec.encoder import encode_node
from jun.errors import (
    DecodeError,
    InvalidJSONError,
    JUNError,
    MalformedPropertiesError,
    MaxDepthExceededError,
    MissingDiscriminatorError,
    UnknownDialectError,
    UnknownVariantError,
)
from jun.loader import dump_to_string, load_from_bytes, load_from_path, load_from_string
from jun.models.node import CommonProperties, Node, Variant

__version__ = "0.3.0"

__all__ = [
    "CommonProperties",
    "DecodeError",
    "Dialect",
    "InvalidJSONError",
    "JUNError",
    "JUN_1_0",
    "JUN_1_1",
    "MalformedPropertiesError",
    "MaxDepthExceededError",
    "MissingDiscriminatorError",
    "Node",
    "POC",
    "UnknownDialectError",
    "UnknownVariantError",
    "Variant",
    "available_dialects",
    "decode_children",
    "decode_node",
    "dump_to_string",
    "encode_node",
    "get_dialect",
    "load_from_bytes",
    "load_from_path",
    "load_from_string",
]
