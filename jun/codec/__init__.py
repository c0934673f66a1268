"""The JUN wire codec.

The codec normalizes what renderers consume: a polymorphic node decoded
from a flat ``properties`` object, with legacy field names resolved and bad
cosmetic fields dropped instead of failing the document.
"""
