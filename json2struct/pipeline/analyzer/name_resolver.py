"""
Name resolver for case conversion and generated type names.

Converts JSON keys to binding names according to the casing policy,
derives struct names for nested objects, and keeps the registry that
detects struct name collisions.
"""

from __future__ import annotations

import logging

from ...errors import NameCollisionError
from ...utils import (
    sanitize_identifier,
    singularize,
    split_words,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)
from ..config import CasingMode
from .ir_nodes import TypeDef

logger = logging.getLogger(__name__)

# Type names that are reserved in the generated code
RESERVED_TYPE_NAMES = {"Self"}

_CASE_CONVERTERS = {
    CasingMode.SNAKE: to_snake_case,
    CasingMode.CAMEL: to_camel_case,
    CasingMode.PASCAL: to_pascal_case,
}

_EMPTY_BINDING_NAME = "field"


def _has_casing(text: str, casing: CasingMode) -> bool:
    """True if converting text to the casing would leave it as it is."""
    if not text.isidentifier():
        return False
    body = text
    if text.startswith("_") and text[1:] and not text[1:].isidentifier():
        # leading-digit guard, e.g. "_1st_place"
        body = text[1:]
    if casing is CasingMode.SNAKE:
        return body == body.lower() and "__" not in body and not body.startswith("_") and not body.endswith("_")
    if "_" in body:
        return False
    if casing is CasingMode.CAMEL:
        return not body[0].isupper()
    return not body[0].islower()


def apply_casing(wire_name: str, casing: CasingMode | None) -> str:
    """
    Convert a JSON key into a binding name.

    Args:
        wire_name: The original JSON key
        casing: Casing policy, or None to keep the key as written

    Returns:
        A valid identifier, Unicode letters included. A name already in
        the requested casing is returned unchanged, so the function is
        idempotent for every casing mode ("a_b" -> "AB" -> "AB" in
        PascalCase).
    """
    if casing is None:
        return sanitize_identifier(wire_name) or _EMPTY_BINDING_NAME
    if _has_casing(wire_name, casing):
        return wire_name

    convert = _CASE_CONVERTERS[casing]
    return sanitize_identifier(convert(wire_name) or convert(_EMPTY_BINDING_NAME))


def to_type_name(wire_name: str, singular: bool = False) -> str:
    """
    Derive a struct name from the key that owns a nested object.

    Args:
        wire_name: The owning JSON key
        singular: Use the singular of the last word (for array elements)

    Returns:
        A PascalCase type name, e.g. "employees" -> "Employee" when singular
    """
    words = split_words(wire_name)
    if singular and words:
        words[-1] = singularize(words[-1])
    name = to_pascal_case(" ".join(words))

    if not name:
        return "Type"
    if not name.isidentifier():
        name = "Type" + name
    if name in RESERVED_TYPE_NAMES:
        name = name + "Type"
    return name


class NameRegistry:
    """Flat registry of the structs inferred for one invocation."""

    def __init__(self):
        self.types: dict[str, TypeDef] = {}

    def register(self, type_def: TypeDef) -> TypeDef:
        """
        Register a struct, reusing an existing struct of the same name and shape.

        Args:
            type_def: The newly inferred struct

        Returns:
            The registered struct (the existing one on reuse)

        Raises:
            NameCollisionError: If the name is taken by a differently shaped struct
        """
        existing = self.types.get(type_def.name)
        if existing is None:
            self.types[type_def.name] = type_def
            return type_def

        if existing.same_shape(type_def):
            logger.debug("Reusing type %s for %s", existing.name, type_def.source_path or "<root>")
            return existing

        raise NameCollisionError(
            f"Type name {type_def.name!r} is already used by a differently shaped object at '{existing.source_path or '<root>'}'",
            type_def.source_path,
        )
