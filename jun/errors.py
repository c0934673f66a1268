"""Error taxonomy for the JUN codec.

Only structural problems are hard failures. Field-level problems (a wrong
type for ``fontSize``, a missing ``label``) never reach this module; they
degrade to "not set" or to the field's documented default.
"""

from __future__ import annotations


class JUNError(Exception):
    """Base class for every error raised by the ``jun`` package."""


class InvalidJSONError(JUNError):
    """The raw document could not be parsed (bad JSON/YAML, bad UTF-8)."""

    kind = "InvalidJSON"


class UnknownDialectError(JUNError, KeyError):
    """No dialect is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown dialect: {name!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DecodeError(JUNError):
    """A structural failure while decoding a node tree.

    Attributes:
        path: JSON Pointer (RFC 6901) to the node that failed. The root
              node is ``""``; its second child is ``"/children/1"``.
    """

    kind = "DecodeError"

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        location = path or "/"
        super().__init__(f"{location}: {message}")


class MissingDiscriminatorError(DecodeError):
    kind = "MissingDiscriminator"


class UnknownVariantError(DecodeError):
    """Raised by strict dialects when ``type`` names no known variant."""

    kind = "UnknownVariant"

    def __init__(self, type_name: str, path: str = ""):
        self.type_name = type_name
        super().__init__(f"Unknown component type: {type_name}", path)


class MalformedPropertiesError(DecodeError):
    kind = "MalformedPropertiesObject"


class MaxDepthExceededError(DecodeError):
    kind = "MaxDepthExceeded"

    def __init__(self, max_depth: int, path: str = ""):
        self.max_depth = max_depth
        super().__init__(f"Tree exceeds maximum depth of {max_depth}", path)
