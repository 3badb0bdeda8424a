"""
Value tree module.

Contains the literal value nodes and the invocation parser.
"""

from __future__ import annotations

from .nodes import (
    ArrayValue,
    BoolValue,
    FlagToken,
    Invocation,
    JsonValue,
    NullValue,
    NumberValue,
    ObjectValue,
    StringValue,
    from_python,
    object_pairs_hook,
)
from .parser import InvocationParser, parse_invocation, parse_value

__all__ = [
    "ArrayValue",
    "BoolValue",
    "FlagToken",
    "Invocation",
    "InvocationParser",
    "JsonValue",
    "NullValue",
    "NumberValue",
    "ObjectValue",
    "StringValue",
    "from_python",
    "object_pairs_hook",
    "parse_invocation",
    "parse_value",
]
