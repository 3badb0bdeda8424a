"""
Value tree node definitions.

These nodes represent a parsed JSON-like literal before any type
inference. The set of node classes is closed: consumers dispatch on
exactly these six kinds.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ...errors import InvocationSyntaxError


@dataclass(frozen=True)
class JsonValue(ABC):
    """Base class for all value tree nodes."""

    @abstractmethod
    def to_python(self) -> Any:
        """Plain Python data (None, bool, float, str, list, dict) for this node."""


@dataclass(frozen=True)
class NullValue(JsonValue):
    def to_python(self) -> Any:
        return None


@dataclass(frozen=True)
class BoolValue(JsonValue):
    value: bool = False

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class NumberValue(JsonValue):
    """A number literal. Integers and floats share the f64 model."""

    value: float = 0.0

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class StringValue(JsonValue):
    value: str = ""

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class ArrayValue(JsonValue):
    items: tuple[JsonValue, ...] = ()

    def to_python(self) -> Any:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class ObjectValue(JsonValue):
    """An object literal; ``entries`` keeps the source key order."""

    entries: tuple[tuple[str, JsonValue], ...] = ()

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def to_python(self) -> Any:
        return {key: value.to_python() for key, value in self.entries}


@dataclass(frozen=True)
class FlagToken:
    """A raw ``@name`` or ``@name(arg, ...)`` directive."""

    name: str = ""
    args: tuple[str, ...] | None = None

    def __str__(self) -> str:
        if self.args is None:
            return f"@{self.name}"
        return f"@{self.name}({', '.join(self.args)})"


@dataclass(frozen=True)
class Invocation:
    """A complete parsed invocation: ``Identifier [FlagList] ObjectLiteral``."""

    name: str = ""
    flags: tuple[FlagToken, ...] = field(default_factory=tuple)
    value: ObjectValue = field(default_factory=ObjectValue)


def from_python(data: Any) -> JsonValue:
    """Convert decoded JSON data (dicts, lists, scalars) into a value tree.

    Args:
        data: Data as produced by ``json.load``

    Returns:
        The equivalent value tree

    Raises:
        InvocationSyntaxError: If the data holds a non-finite number or a
            type that has no JSON equivalent
    """
    if data is None:
        return NullValue()
    # bool before int: bool is an int subclass
    if isinstance(data, bool):
        return BoolValue(data)
    if isinstance(data, (int, float)):
        try:
            number = float(data)
        except OverflowError:
            number = math.inf
        if not math.isfinite(number):
            raise InvocationSyntaxError(f"Non-finite number {data!r} has no JSON representation")
        return NumberValue(number)
    if isinstance(data, str):
        return StringValue(data)
    if isinstance(data, (list, tuple)):
        return ArrayValue(tuple(from_python(item) for item in data))
    if isinstance(data, dict):
        return ObjectValue(tuple((str(key), from_python(value)) for key, value in data.items()))
    raise InvocationSyntaxError(f"Unsupported value of type {type(data).__name__}")


def object_pairs_hook(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """``json.load`` hook that rejects duplicate keys instead of keeping the last one."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise InvocationSyntaxError(f"Duplicate key {key!r} in object")
        result[key] = value
    return result
