"""
Pipeline - JSON literal to struct definitions.

This module provides a multi-phase architecture for generating typed
struct definitions from example data:

1. Phase 1 (Parser): Parse invocation text into a value tree and flags
2. Phase 2 (Analyzer): Infer and name structs, unifying array elements
3. Phase 3 (Assembler): Attach derives, rename policy and stored JSON
4. Phase 4 (Backend): Render the items as Rust source
5. Phase 5 (Writer): Optionally write the result atomically
"""

from __future__ import annotations

from .analyzer import (
    Field,
    FieldType,
    ScalarKind,
    SchemaAnalyzer,
    SchemaTree,
    TypeDef,
    TypeKind,
    apply_casing,
    infer,
)
from .assembler import ConstantItem, OutputItem, StructItem, assemble
from .atomic_writer import AtomicWriter
from .backends import RustBackend
from .config import (
    CasingMode,
    CodeGeneratorConfig,
    FlagSet,
    OutputConfig,
    OutputMode,
    ScalarFallback,
    parse_flag_string,
    parse_flags,
)
from .generator import PipelineGenerator
from .value_tree import Invocation, from_python, parse_invocation, parse_value

__all__ = [
    "AtomicWriter",
    "CasingMode",
    "CodeGeneratorConfig",
    "ConstantItem",
    "Field",
    "FieldType",
    "FlagSet",
    "Invocation",
    "OutputConfig",
    "OutputItem",
    "OutputMode",
    "PipelineGenerator",
    "RustBackend",
    "ScalarFallback",
    "ScalarKind",
    "SchemaAnalyzer",
    "SchemaTree",
    "StructItem",
    "TypeDef",
    "TypeKind",
    "apply_casing",
    "assemble",
    "from_python",
    "infer",
    "parse_flag_string",
    "parse_flags",
    "parse_invocation",
    "parse_value",
]
