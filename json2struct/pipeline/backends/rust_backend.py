"""
Rust code generation backend.

Generates serde-derived Rust structs from assembled output items.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import FieldType, ScalarKind, TypeKind
from .base import CodeBackend

# Rust keywords that need escaping as field names
RUST_KEYWORDS = {
    "as",
    "async",
    "await",
    "break",
    "const",
    "continue",
    "crate",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "type",
    "unsafe",
    "use",
    "where",
    "while",
    "abstract",
    "become",
    "box",
    "do",
    "final",
    "gen",
    "macro",
    "override",
    "priv",
    "try",
    "typeof",
    "unsized",
    "virtual",
    "yield",
}

# Keywords that cannot be written as raw identifiers
NON_RAW_KEYWORDS = {"crate", "self", "Self", "super", "_"}


class RustBackend(CodeBackend):
    """Rust code generation backend."""

    TEMPLATE_LANG = "rust"
    FILE_EXTENSION = "rs"

    TYPE_MAP = {
        ScalarKind.BOOL: "bool",
        ScalarKind.NUMBER: "f64",
        ScalarKind.TEXT: "::std::string::String",
    }

    DERIVE_PATHS = {
        "Clone": "::std::clone::Clone",
        "Debug": "::std::fmt::Debug",
        "Deserialize": "::serde::Deserialize",
        "Serialize": "::serde::Serialize",
    }

    def translate_type(self, field_type: FieldType) -> str:
        """Translate IR type to Rust type string.

        Std types are written as absolute paths so that a generated struct
        named e.g. `String` or `Option` cannot shadow them.
        """
        if field_type.kind == TypeKind.SCALAR:
            return self.TYPE_MAP[field_type.scalar]
        if field_type.kind == TypeKind.OPTIONAL:
            return f"::std::option::Option<{self.translate_type(field_type.inner)}>"
        if field_type.kind == TypeKind.COLLECTION:
            return f"::std::vec::Vec<{self.translate_type(field_type.inner)}>"
        return field_type.name

    def translate_derive(self, derive: str) -> str:
        return self.DERIVE_PATHS.get(derive, derive)

    def escape_identifier(self, name: str) -> str:
        if name in NON_RAW_KEYWORDS:
            return f"{name}_"
        if name in RUST_KEYWORDS:
            return f"r#{name}"
        return name

    def serialized_name(self, identifier: str) -> str:
        # serde strips the raw identifier prefix
        return identifier.removeprefix("r#")

    def string_literal(self, text: str) -> str:
        escaped = []
        for char in text:
            if char == "\\":
                escaped.append("\\\\")
            elif char == '"':
                escaped.append('\\"')
            elif char == "\n":
                escaped.append("\\n")
            elif char == "\r":
                escaped.append("\\r")
            elif char == "\t":
                escaped.append("\\t")
            elif char == "\0":
                escaped.append("\\0")
            elif ord(char) < 0x20 or ord(char) == 0x7F:
                escaped.append(f"\\u{{{ord(char):x}}}")
            else:
                escaped.append(char)
        return '"' + "".join(escaped) + '"'
