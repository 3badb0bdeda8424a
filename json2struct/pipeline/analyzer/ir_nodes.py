"""
IR (Intermediate Representation) node definitions.

These nodes represent the inferred schema, ready for assembly. Every
type is resolved: no Unknown element type or untyped null survives
inference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..value_tree.nodes import ObjectValue


class TypeKind(Enum):
    """Kind of field type in the IR."""

    SCALAR = "scalar"  # bool, f64, String
    OPTIONAL = "optional"  # Option<T>
    COLLECTION = "collection"  # Vec<T>
    REFERENCE = "reference"  # A generated struct


class ScalarKind(Enum):
    BOOL = "bool"
    NUMBER = "number"
    TEXT = "text"


@dataclass(frozen=True)
class FieldType:
    """A resolved field type.

    ``scalar`` is set for SCALAR, ``inner`` for OPTIONAL and COLLECTION,
    ``name`` for REFERENCE.
    """

    kind: TypeKind = TypeKind.SCALAR
    scalar: ScalarKind | None = None
    inner: FieldType | None = None
    name: str = ""

    @staticmethod
    def of_scalar(scalar: ScalarKind) -> FieldType:
        return FieldType(kind=TypeKind.SCALAR, scalar=scalar)

    @staticmethod
    def optional(inner: FieldType) -> FieldType:
        return FieldType(kind=TypeKind.OPTIONAL, inner=inner)

    @staticmethod
    def collection(inner: FieldType) -> FieldType:
        return FieldType(kind=TypeKind.COLLECTION, inner=inner)

    @staticmethod
    def reference(name: str) -> FieldType:
        return FieldType(kind=TypeKind.REFERENCE, name=name)

    def referenced_names(self) -> list[str]:
        """Names of the structs this type points at, directly or through wrappers."""
        if self.kind == TypeKind.REFERENCE:
            return [self.name]
        if self.inner is not None:
            return self.inner.referenced_names()
        return []

    def __str__(self) -> str:
        if self.kind == TypeKind.SCALAR:
            return self.scalar.value.capitalize()
        if self.kind == TypeKind.OPTIONAL:
            return f"Optional<{self.inner}>"
        if self.kind == TypeKind.COLLECTION:
            return f"Collection<{self.inner}>"
        return self.name


@dataclass(frozen=True)
class Field:
    """A field of a generated struct.

    Attributes:
        wire_name: Original JSON key, used as the serialization alias
        binding_name: Identifier after the casing policy was applied
        type: Resolved field type
    """

    wire_name: str = ""
    binding_name: str = ""
    type: FieldType = field(default_factory=FieldType)


@dataclass(frozen=True)
class TypeDef:
    """A generated struct: a name and its ordered fields."""

    name: str = ""
    fields: tuple[Field, ...] = ()

    # Key path of the first object that produced this type (for error messages)
    source_path: str = ""

    def field_map(self) -> dict[str, Field]:
        return {f.wire_name: f for f in self.fields}

    def same_shape(self, other: TypeDef) -> bool:
        """Whether both types declare the same fields, ignoring declaration order."""
        return self.field_map() == other.field_map()


@dataclass
class SchemaTree:
    """All structs inferred from one value tree.

    ``types`` is ordered so that every struct comes after the structs it
    references; the root struct is last.
    """

    root_name: str = ""
    types: dict[str, TypeDef] = field(default_factory=dict)

    # The value tree the schema was inferred from
    source: ObjectValue = field(default_factory=ObjectValue)

    @property
    def root(self) -> TypeDef:
        return self.types[self.root_name]

    def ordered(self) -> list[TypeDef]:
        return list(self.types.values())

    def same_structure(self, other: SchemaTree) -> bool:
        """Structural equality: same type names, each with the same fields."""
        if self.root_name != other.root_name or self.types.keys() != other.types.keys():
            return False
        return all(type_def.same_shape(other.types[name]) for name, type_def in self.types.items())
