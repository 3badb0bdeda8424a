"""
Pipeline generator.

Runs the phases in order:

1. Parser: invocation text (or decoded JSON) -> value tree + flag tokens
2. Flags: flag tokens -> validated FlagSet
3. Analyzer: value tree -> SchemaTree
4. Assembler: SchemaTree + FlagSet -> output items
5. Backend: output items -> Rust source
"""

from __future__ import annotations

import logging
from typing import Any

from .. import __version__
from ..utils import to_pascal_case
from .analyzer import SchemaAnalyzer, SchemaTree
from .assembler import OutputItem, assemble
from .backends import RustBackend
from .config import CodeGeneratorConfig, FlagSet, parse_flag_string, parse_flags
from .value_tree import Invocation, from_python, parse_invocation

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates struct definitions for a single invocation."""

    def __init__(self, invocation: Invocation, config: CodeGeneratorConfig | None = None, command_line: str = ""):
        """
        Initialize the generator.

        Args:
            invocation: The parsed invocation
            config: Code generation configuration
            command_line: Command line recorded in the generation comment
        """
        self.invocation = invocation
        self.config = config or CodeGeneratorConfig()
        self.command_line = command_line
        self.flags: FlagSet = parse_flags(invocation.flags)

        self._schema: SchemaTree | None = None
        self._items: list[OutputItem] | None = None

    @classmethod
    def from_source(cls, source: str, config: CodeGeneratorConfig | None = None, command_line: str = "") -> PipelineGenerator:
        """Create a generator from invocation text such as ``User @debug {"a" => 1}``."""
        return cls(parse_invocation(source), config, command_line)

    @classmethod
    def from_json(
        cls,
        name: str,
        data: Any,
        flags: list[str] | tuple[str, ...] = (),
        config: CodeGeneratorConfig | None = None,
        command_line: str = "",
    ) -> PipelineGenerator:
        """
        Create a generator from decoded JSON data.

        Args:
            name: Root struct name; converted to PascalCase if not an identifier
            data: Data as produced by ``json.load``
            flags: Flags in command line form, e.g. ``["camel", "derive(PartialEq)"]``
            config: Code generation configuration
            command_line: Command line recorded in the generation comment
        """
        if not (name.isascii() and name.isidentifier()):
            name = to_pascal_case(name) or "Root"
        invocation = Invocation(
            name=name,
            flags=tuple(parse_flag_string(flag) for flag in flags),
            value=from_python(data),
        )
        return cls(invocation, config, command_line)

    def analyze(self) -> SchemaTree:
        if self._schema is None:
            logger.debug("Inferring types for %s", self.invocation.name)
            analyzer = SchemaAnalyzer(self.flags, self.config)
            self._schema = analyzer.analyze(self.invocation.name, self.invocation.value)
        return self._schema

    def assemble(self) -> list[OutputItem]:
        if self._items is None:
            self._items = assemble(self.analyze(), self.flags)
        return self._items

    def generate(self) -> str:
        """
        Generate Rust source for the invocation.

        Returns:
            The generated code

        Raises:
            Json2StructError: If any phase rejects the input
        """
        backend = RustBackend(self.config)
        code = backend.generate(self.assemble(), self._generation_comment())
        logger.debug("Generated %d line(s) for %s", code.count("\n"), self.invocation.name)
        return code

    def _generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        lines = [f"Generated by json2struct {__version__}"]
        if self.command_line:
            lines.append(f"Command line: {self.command_line}")
        return "\n".join(lines)
