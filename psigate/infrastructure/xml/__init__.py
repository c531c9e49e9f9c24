"""
XML codec for gateway trees.
"""
from .codec import TreeDecodeError, decode, encode, encode_into, parse, serialize

__all__ = [
    "TreeDecodeError",
    "decode",
    "encode",
    "encode_into",
    "parse",
    "serialize",
]
