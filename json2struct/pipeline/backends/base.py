"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.ir_nodes import Field, FieldType, ScalarKind
from ..assembler import ConstantItem, OutputItem, StructItem
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from scalar kinds to language types
    TYPE_MAP: dict[ScalarKind, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment marker
    COMMENT_PREFIX: str = "//"

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config or CodeGeneratorConfig()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            autoescape=False,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.struct_template = self.jinja_env.get_template(f"struct.{self.FILE_EXTENSION}.jinja2")
        self.constant_template = self.jinja_env.get_template(f"constant.{self.FILE_EXTENSION}.jinja2")

    def generate(self, items: list[OutputItem], generation_comment: str = "") -> str:
        """
        Generate code for the assembled items.

        Args:
            items: Output items in emission order
            generation_comment: Comment text for the top of the file, one entry per line

        Returns:
            Generated code as a string
        """
        comment = "\n".join(f"{self.COMMENT_PREFIX} {line}" for line in generation_comment.splitlines())
        blocks = []
        prefix = self.prefix_template.render(generation_comment=comment).rstrip("\n")
        if prefix:
            blocks.append(prefix)

        for item in items:
            if isinstance(item, StructItem):
                blocks.append(self.struct_template.render(self._prepare_struct_context(item)))
            elif isinstance(item, ConstantItem):
                blocks.append(self.constant_template.render(self._prepare_constant_context(item)))
            else:
                raise TypeError(f"Unexpected output item {type(item).__name__}")

        return "\n\n".join(blocks) + "\n"

    @abstractmethod
    def translate_type(self, field_type: FieldType) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            field_type: The field type

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def escape_identifier(self, name: str) -> str:
        """Escape a binding name that collides with a reserved word."""

    @abstractmethod
    def string_literal(self, text: str) -> str:
        """Quote text as a string literal of the target language."""

    def _prepare_struct_context(self, item: StructItem) -> dict[str, Any]:
        """
        Prepare the template context for a struct.

        Args:
            item: The struct to render

        Returns:
            Dictionary of template variables
        """
        return {
            "STRUCT_NAME": item.name,
            "DERIVES": [self.translate_derive(derive) for derive in item.derives],
            "RENAME_ALL": item.rename_all,
            "VISIBILITY": self._visibility(),
            "fields": [self._prepare_field_context(field, item.rename_all) for field in item.fields],
        }

    def _prepare_field_context(self, field: Field, rename_all: str | None) -> dict[str, Any]:
        """
        Prepare the template context for a field.

        A type-level rename policy renames every field, so the wire name is
        kept as an alias for deserialization. Without a policy, a wire name
        that differs from the emitted identifier becomes a rename.
        """
        name = self.escape_identifier(field.binding_name)
        if rename_all is None and self.serialized_name(name) != field.wire_name:
            attribute = "rename"
        else:
            attribute = "alias"

        return {
            "NAME": name,
            "TYPE": self.translate_type(field.type),
            "WIRE_NAME": self.string_literal(field.wire_name),
            "ATTRIBUTE": attribute,
        }

    def _prepare_constant_context(self, item: ConstantItem) -> dict[str, Any]:
        return {
            "CONSTANT_NAME": item.name,
            "JSON_LITERAL": self.string_literal(item.json_text),
            "VISIBILITY": self._visibility(),
        }

    def _visibility(self) -> str:
        return "pub " if self.config.public_types else ""

    def translate_derive(self, derive: str) -> str:
        return derive

    def serialized_name(self, identifier: str) -> str:
        """The name a serializer sees for an emitted identifier."""
        return identifier
