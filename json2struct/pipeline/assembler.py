"""
Definition assembler.

Phase 3 of the pipeline: combine the inferred SchemaTree with the
directive flags into the ordered list of items to emit.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from ..utils import to_upper_snake_case
from .analyzer.ir_nodes import Field, SchemaTree
from .config import FlagSet

logger = logging.getLogger(__name__)

BASE_DERIVES = ("Clone", "Deserialize", "Serialize")
DEBUG_DERIVE = "Debug"
CONSTANT_SUFFIX = "JSON_VALUE"


@dataclass(frozen=True)
class StructItem:
    """A struct ready for emission.

    Attributes:
        name: Struct name
        fields: Fields in declaration order
        derives: Derive names in emission order
        rename_all: Type-level serde rename policy, e.g. "camelCase"
    """

    name: str = ""
    fields: tuple[Field, ...] = ()
    derives: tuple[str, ...] = ()
    rename_all: str | None = None


@dataclass(frozen=True)
class ConstantItem:
    """A constant holding the canonical JSON text of the original literal."""

    name: str = ""
    json_text: str = ""


OutputItem = StructItem | ConstantItem


def derive_list(flags: FlagSet) -> tuple[str, ...]:
    """Base derives, then Debug if requested, then extra derives; no duplicates."""
    derives = list(BASE_DERIVES)
    if flags.debug:
        derives.append(DEBUG_DERIVE)
    for derive in flags.extra_derives:
        if derive not in derives:
            derives.append(derive)
    return tuple(derives)


def constant_name(root_name: str) -> str:
    """Name of the stored JSON constant, e.g. "UserProfile" -> "USER_PROFILE_JSON_VALUE"."""
    return f"{to_upper_snake_case(root_name)}_{CONSTANT_SUFFIX}"


def canonical_json(data) -> str:
    """Compact JSON with object keys sorted, for byte-identical output across runs."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def assemble(schema: SchemaTree, flags: FlagSet) -> list[OutputItem]:
    """
    Build the ordered items to emit.

    Args:
        schema: The inferred schema; read, never modified
        flags: The directive flags

    Returns:
        One StructItem per struct (referenced structs first), followed by a
        ConstantItem when ``flags.store_json`` is set
    """
    derives = derive_list(flags)
    rename_all = flags.casing.rename_policy if flags.casing is not None else None

    items: list[OutputItem] = [
        StructItem(
            name=type_def.name,
            fields=type_def.fields,
            derives=derives,
            rename_all=rename_all,
        )
        for type_def in schema.ordered()
    ]

    if flags.store_json:
        items.append(
            ConstantItem(
                name=constant_name(schema.root_name),
                json_text=canonical_json(schema.source.to_python()),
            )
        )

    logger.debug("Assembled %d item(s) for %s", len(items), schema.root_name)
    return items
