"""json2struct

Generate serde-ready Rust structs from an example JSON literal.
Infers nested struct types, unifies array elements, applies field
casing policies and can keep the original data as a JSON constant.
"""

__version__ = "0.1.0"

from .errors import Json2StructError
from .pipeline import (
    CodeGeneratorConfig,
    FlagSet,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    apply_casing,
    assemble,
    infer,
    parse_flags,
    parse_invocation,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FlagSet",
    "Json2StructError",
    "OutputConfig",
    "OutputMode",
    "apply_casing",
    "assemble",
    "infer",
    "parse_flags",
    "parse_invocation",
]
