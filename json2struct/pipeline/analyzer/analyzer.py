"""
Schema analyzer that infers struct definitions from a value tree.

Phase 2 of the pipeline. Inference runs in two passes:

1. Shape pass: compute the structural shape of every value, unifying the
   shapes of array elements (and, recursively, of their fields) into a
   single shape per position.
2. Resolve pass: turn shapes into named structs and field types,
   registering nested structs before the structs that reference them.

Keeping the passes apart lets a null or an empty array stay untyped until
every sibling in the same position has been seen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from ...errors import (
    AmbiguousEmptyArrayError,
    HeterogeneousArrayError,
    NameCollisionError,
    RecursionLimitExceeded,
    RootTypeError,
    TypeUnificationError,
)
from ..config import CodeGeneratorConfig, FlagSet
from ..value_tree.nodes import (
    ArrayValue,
    BoolValue,
    JsonValue,
    NullValue,
    NumberValue,
    ObjectValue,
    StringValue,
)
from .ir_nodes import Field, FieldType, ScalarKind, SchemaTree, TypeDef
from .name_resolver import NameRegistry, apply_casing, to_type_name

logger = logging.getLogger(__name__)


class ShapeKind(Enum):
    NULL = "null"  # Only null seen so far
    UNKNOWN = "unknown"  # Element of an empty array
    SCALAR = "scalar"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class Shape:
    """Structural type of a value position, before naming."""

    kind: ShapeKind = ShapeKind.UNKNOWN
    scalar: ScalarKind | None = None
    item: Shape | None = None
    fields: tuple[tuple[str, Shape], ...] = ()

    # Null was seen, or the key is missing from some of the unified objects
    nullable: bool = False

    def describe(self) -> str:
        if self.kind == ShapeKind.SCALAR:
            return self.scalar.value
        return self.kind.value


def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


class SchemaAnalyzer:
    """Infers a SchemaTree from a value tree."""

    def __init__(self, flags: FlagSet | None = None, config: CodeGeneratorConfig | None = None):
        """
        Initialize the analyzer.

        Args:
            flags: Directive flags (the casing policy names the fields)
            config: Code generation configuration
        """
        self.flags = flags or FlagSet()
        self.config = config or CodeGeneratorConfig()
        self.null_fallback = ScalarKind(self.config.null_fallback.value)

        # Set per analysis
        self.registry = NameRegistry()

    def analyze(self, root_name: str, value: JsonValue) -> SchemaTree:
        """
        Infer the structs described by ``value``.

        Args:
            root_name: Name of the primary struct
            value: Root of the value tree, must be an object

        Returns:
            SchemaTree with nested structs first and the root struct last

        Raises:
            InferenceError: If no consistent static type exists
        """
        if not isinstance(value, ObjectValue):
            raise RootTypeError(f"Root value must be an object, found {self._value_kind(value)}")

        self.registry = NameRegistry()
        shape = self._shape_of(value, "", 0)
        self._resolve_struct(shape, root_name, "")

        logger.debug("Inferred %d type(s) for %s", len(self.registry.types), root_name)
        return SchemaTree(root_name=root_name, types=dict(self.registry.types), source=value)

    @staticmethod
    def _value_kind(value: JsonValue) -> str:
        kinds = {
            NullValue: "null",
            BoolValue: "bool",
            NumberValue: "number",
            StringValue: "text",
            ArrayValue: "array",
            ObjectValue: "object",
        }
        return kinds[type(value)]

    def _shape_of(self, value: JsonValue, path: str, depth: int) -> Shape:
        """Compute the shape of a value, unifying array elements."""
        if depth > self.config.max_depth:
            raise RecursionLimitExceeded(f"Nesting deeper than {self.config.max_depth} levels", path)

        if isinstance(value, NullValue):
            return Shape(kind=ShapeKind.NULL)
        if isinstance(value, BoolValue):
            return Shape(kind=ShapeKind.SCALAR, scalar=ScalarKind.BOOL)
        if isinstance(value, NumberValue):
            return Shape(kind=ShapeKind.SCALAR, scalar=ScalarKind.NUMBER)
        if isinstance(value, StringValue):
            return Shape(kind=ShapeKind.SCALAR, scalar=ScalarKind.TEXT)
        if isinstance(value, ObjectValue):
            fields = tuple((key, self._shape_of(child, _child_path(path, key), depth + 1)) for key, child in value.entries)
            return Shape(kind=ShapeKind.OBJECT, fields=fields)
        if isinstance(value, ArrayValue):
            item_path = f"{path}[]"
            item = Shape(kind=ShapeKind.UNKNOWN)
            for element in value.items:
                element_shape = self._shape_of(element, item_path, depth + 1)
                item = self._unify(item, element_shape, item_path, HeterogeneousArrayError)
            return Shape(kind=ShapeKind.ARRAY, item=item)
        raise TypeError(f"Unexpected value node {type(value).__name__}")

    def _unify(self, a: Shape, b: Shape, path: str, conflict: type[Exception]) -> Shape:
        """
        Merge two shapes seen at the same position.

        Args:
            a: Shape accumulated so far
            b: Newly seen shape
            path: Key path of the position
            conflict: Error raised when the kinds are incompatible

        Returns:
            The unified shape
        """
        nullable = a.nullable or b.nullable

        if a.kind == ShapeKind.UNKNOWN:
            return replace(b, nullable=nullable)
        if b.kind == ShapeKind.UNKNOWN:
            return replace(a, nullable=nullable)
        if a.kind == ShapeKind.NULL:
            return replace(b, nullable=True)
        if b.kind == ShapeKind.NULL:
            return replace(a, nullable=True)

        if a.kind != b.kind or a.scalar != b.scalar:
            if conflict is HeterogeneousArrayError:
                message = f"Array mixes {a.describe()} and {b.describe()} elements"
            else:
                message = f"Incompatible types {a.describe()} and {b.describe()}"
            raise conflict(message, path)

        if a.kind == ShapeKind.SCALAR:
            return replace(a, nullable=nullable)

        if a.kind == ShapeKind.ARRAY:
            item_path = f"{path}[]"
            item = self._unify(a.item, b.item, item_path, conflict)
            return replace(a, item=item, nullable=nullable)

        # Objects: keep first-seen key order, keys missing on either side become nullable
        b_fields = dict(b.fields)
        a_keys = set()
        fields = []
        for key, shape in a.fields:
            a_keys.add(key)
            if key in b_fields:
                fields.append((key, self._unify(shape, b_fields[key], _child_path(path, key), TypeUnificationError)))
            else:
                fields.append((key, replace(shape, nullable=True)))
        for key, shape in b.fields:
            if key not in a_keys:
                fields.append((key, replace(shape, nullable=True)))
        return replace(a, fields=tuple(fields), nullable=nullable)

    def _resolve(self, shape: Shape, type_name: str, path: str) -> FieldType:
        """Resolve a shape into a field type, registering nested structs."""
        if shape.kind == ShapeKind.NULL:
            return FieldType.optional(FieldType.of_scalar(self.null_fallback))

        if shape.nullable:
            return FieldType.optional(self._resolve(replace(shape, nullable=False), type_name, path))

        if shape.kind == ShapeKind.SCALAR:
            return FieldType.of_scalar(shape.scalar)

        if shape.kind == ShapeKind.ARRAY:
            if shape.item.kind == ShapeKind.UNKNOWN:
                raise AmbiguousEmptyArrayError("Element type of empty array cannot be inferred", path)
            return FieldType.collection(self._resolve(shape.item, type_name, f"{path}[]"))

        if shape.kind == ShapeKind.OBJECT:
            type_def = self._resolve_struct(shape, type_name, path)
            return FieldType.reference(type_def.name)

        raise AmbiguousEmptyArrayError("Element type of empty array cannot be inferred", path)

    def _resolve_struct(self, shape: Shape, type_name: str, path: str) -> TypeDef:
        fields = []
        bindings: dict[str, str] = {}
        for key, child in shape.fields:
            child_path = _child_path(path, key)
            binding_name = apply_casing(key, self.flags.casing)
            if binding_name in bindings:
                raise NameCollisionError(
                    f"Keys {bindings[binding_name]!r} and {key!r} both map to field name {binding_name!r}",
                    child_path,
                )
            bindings[binding_name] = key

            child_type_name = to_type_name(key, singular=child.kind == ShapeKind.ARRAY)
            fields.append(Field(wire_name=key, binding_name=binding_name, type=self._resolve(child, child_type_name, child_path)))

        type_def = TypeDef(name=type_name, fields=tuple(fields), source_path=path)
        return self.registry.register(type_def)


def infer(root_name: str, value: JsonValue, flags: FlagSet | None = None, config: CodeGeneratorConfig | None = None) -> SchemaTree:
    """Infer the SchemaTree of ``value`` with the primary struct named ``root_name``."""
    return SchemaAnalyzer(flags, config).analyze(root_name, value)
