"""
Configuration for the json2struct pipeline.

Two layers of configuration exist:

- FlagSet: the directive flags written at the invocation site
  (``@debug @camel @derive(PartialEq) @store_json``)
- CodeGeneratorConfig: generator-wide options, usually loaded from a
  JSON config file passed to the command line
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from ..errors import FlagConflictError, InvocationSyntaxError, UnknownFlagError
from .value_tree.nodes import FlagToken


class CasingMode(str, Enum):
    """Field naming convention applied to binding names."""

    SNAKE = "snake"
    CAMEL = "camel"
    PASCAL = "pascal"

    @property
    def rename_policy(self) -> str:
        """The serde ``rename_all`` value for this casing."""
        return _RENAME_POLICIES[self]


_RENAME_POLICIES = {
    CasingMode.SNAKE: "snake_case",
    CasingMode.CAMEL: "camelCase",
    CasingMode.PASCAL: "PascalCase",
}


class ScalarFallback(str, Enum):
    """Scalar kind given to fields that are only ever seen as null."""

    TEXT = "text"
    NUMBER = "number"
    BOOL = "bool"


@dataclass(frozen=True)
class FlagSet:
    """Validated directive flags of one invocation.

    Attributes:
        debug: Add the Debug derive
        casing: Casing policy for binding names, None to keep wire names
        extra_derives: Additional derive names, deduplicated, in first-seen order
        store_json: Emit a constant holding the canonical original data
    """

    debug: bool = False
    casing: CasingMode | None = None
    extra_derives: tuple[str, ...] = ()
    store_json: bool = False


_SIMPLE_FLAGS = {"debug", "store_json", "snake", "camel", "pascal"}
_ARGUMENT_FLAGS = {"derive"}
SUPPORTED_FLAGS = ("@debug", "@snake", "@camel", "@pascal", "@derive(...)", "@store_json")


def parse_flags(tokens: list[FlagToken] | tuple[FlagToken, ...]) -> FlagSet:
    """
    Validate raw flag tokens into a FlagSet.

    Args:
        tokens: Flags in the order they were written

    Returns:
        The validated FlagSet

    Raises:
        UnknownFlagError: If a flag name is not recognized
        FlagConflictError: If two different casing flags are given
        InvocationSyntaxError: If a flag's argument list is missing or unexpected
    """
    debug = False
    store_json = False
    casing: CasingMode | None = None
    extra_derives: list[str] = []

    for token in tokens:
        if token.name not in _SIMPLE_FLAGS and token.name not in _ARGUMENT_FLAGS:
            raise UnknownFlagError(f"Unknown flag: @{token.name}. Supported flags: {' '.join(SUPPORTED_FLAGS)}")

        if token.name in _SIMPLE_FLAGS and token.args is not None:
            raise InvocationSyntaxError(f"Flag @{token.name} takes no arguments")
        if token.name in _ARGUMENT_FLAGS and token.args is None:
            raise InvocationSyntaxError(f"Expected @{token.name}(...)")

        if token.name == "debug":
            debug = True
        elif token.name == "store_json":
            store_json = True
        elif token.name == "derive":
            for derive in token.args:
                if derive not in extra_derives:
                    extra_derives.append(derive)
        else:
            mode = CasingMode(token.name)
            if casing is not None and casing != mode:
                raise FlagConflictError(f"Conflicting casing flags: @{casing.value} and @{mode.value}")
            casing = mode

    return FlagSet(
        debug=debug,
        casing=casing,
        extra_derives=tuple(extra_derives),
        store_json=store_json,
    )


_FLAG_STRING_PATTERN = re.compile(r"^@?([A-Za-z_][A-Za-z0-9_]*)\s*(?:\((.*)\))?$")
_IDENT_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_flag_string(text: str) -> FlagToken:
    """Parse a command line flag such as ``camel``, ``@debug`` or ``derive(PartialEq, Eq)``."""
    match = _FLAG_STRING_PATTERN.match(text.strip())
    if not match:
        raise InvocationSyntaxError(f"Malformed flag {text!r}")
    name, arg_text = match.groups()
    if arg_text is None:
        return FlagToken(name=name)
    args = [arg.strip() for arg in arg_text.split(",") if arg.strip()]
    for arg in args:
        if not _IDENT_PATTERN.match(arg):
            raise InvocationSyntaxError(f"Expected identifier in @{name}(...), found {arg!r}")
    return FlagToken(name=name, args=tuple(args))


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to sanity check code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Scalar used for fields that are null everywhere they appear
    null_fallback: ScalarFallback = ScalarFallback.TEXT

    # Maximum object/array nesting depth accepted by inference
    max_depth: int = 128

    # Emit `pub` structs and fields
    public_types: bool = False

    # Add generation comment at top of file
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "null_fallback":
                config.null_fallback = ScalarFallback(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "null_fallback": self.null_fallback.value,
            "max_depth": self.max_depth,
            "public_types": self.public_types,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
