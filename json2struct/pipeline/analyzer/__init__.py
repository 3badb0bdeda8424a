"""
Analyzer module.

Contains type inference, name resolution, and the IR.
"""

from __future__ import annotations

from .analyzer import SchemaAnalyzer, infer
from .ir_nodes import (
    Field,
    FieldType,
    ScalarKind,
    SchemaTree,
    TypeDef,
    TypeKind,
)
from .name_resolver import NameRegistry, apply_casing, to_type_name

__all__ = [
    "Field",
    "FieldType",
    "NameRegistry",
    "ScalarKind",
    "SchemaAnalyzer",
    "SchemaTree",
    "TypeDef",
    "TypeKind",
    "apply_casing",
    "infer",
    "to_type_name",
]
