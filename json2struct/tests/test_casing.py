"""
Tests for binding names, generated type names and the type registry.
"""

import pytest

from json2struct.errors import NameCollisionError
from json2struct.pipeline.analyzer import Field, FieldType, ScalarKind, TypeDef
from json2struct.pipeline.analyzer.name_resolver import NameRegistry, apply_casing, to_type_name
from json2struct.pipeline.config import CasingMode

KEYS = [
    "first_name",
    "companyName",
    "HTTPServer",
    "user-id",
    "1st_place",
    "a1b",
    "",
    "ALL_CAPS",
    "x",
    "with space",
    "type",
    "a_b",
    "x_y_z",
    "point_x_y",
    "名前",
    "café_name",
    "naïve",
    "Straße",
]
MODES = [None, CasingMode.SNAKE, CasingMode.CAMEL, CasingMode.PASCAL]


@pytest.mark.parametrize("casing", MODES)
@pytest.mark.parametrize("key", KEYS)
def test_apply_casing_is_idempotent(key, casing):
    once = apply_casing(key, casing)
    assert apply_casing(once, casing) == once
    assert once.isidentifier()


@pytest.mark.parametrize(
    "key,casing,expected",
    [
        ("first_name", None, "first_name"),
        ("first-name", None, "first_name"),
        ("2fa", None, "_2fa"),
        ("", None, "field"),
        ("companyName", CasingMode.SNAKE, "company_name"),
        ("HTTPServer", CasingMode.SNAKE, "http_server"),
        ("company_name", CasingMode.CAMEL, "companyName"),
        ("company_name", CasingMode.PASCAL, "CompanyName"),
        ("1st_place", CasingMode.CAMEL, "_1StPlace"),
        ("", CasingMode.SNAKE, "field"),
        ("", CasingMode.PASCAL, "Field"),
        ("a_b", CasingMode.PASCAL, "AB"),
        ("AB", CasingMode.PASCAL, "AB"),
        ("x_y_z", CasingMode.CAMEL, "xYZ"),
        ("point_x_y", CasingMode.PASCAL, "PointXY"),
        ("HTTPServer", CasingMode.PASCAL, "HTTPServer"),
        ("名前", None, "名前"),
        ("名字", None, "名字"),
        ("naïve", None, "naïve"),
        ("naïve-key", None, "naïve_key"),
        ("café_name", CasingMode.SNAKE, "café_name"),
        ("caféName", CasingMode.SNAKE, "café_name"),
        ("café_name", CasingMode.PASCAL, "CaféName"),
        ("Straße", CasingMode.SNAKE, "straße"),
    ],
)
def test_apply_casing(key, casing, expected):
    assert apply_casing(key, casing) == expected


@pytest.mark.parametrize(
    "key,singular,expected",
    [
        ("details", False, "Details"),
        ("home_address", False, "HomeAddress"),
        ("employees", True, "Employee"),
        ("child_categories", True, "ChildCategory"),
        ("2fa_codes", True, "Type2FaCode"),
        ("self", False, "SelfType"),
        ("!!!", False, "Type"),
        ("aliases", True, "Alias"),
        ("news", True, "News"),
        ("café_items", True, "CaféItem"),
        ("名前", False, "名前"),
    ],
)
def test_to_type_name(key, singular, expected):
    assert to_type_name(key, singular=singular) == expected


def _type_def(name, *fields, path=""):
    return TypeDef(
        name=name,
        fields=tuple(Field(wire_name=key, binding_name=key, type=FieldType.of_scalar(scalar)) for key, scalar in fields),
        source_path=path,
    )


class TestNameRegistry:
    def test_register_new_type(self):
        registry = NameRegistry()
        info = _type_def("Info", ("x", ScalarKind.NUMBER))
        assert registry.register(info) is info
        assert list(registry.types) == ["Info"]

    def test_same_shape_is_reused(self):
        registry = NameRegistry()
        first = _type_def("Info", ("x", ScalarKind.NUMBER), ("y", ScalarKind.TEXT), path="a.info")
        second = _type_def("Info", ("y", ScalarKind.TEXT), ("x", ScalarKind.NUMBER), path="b.info")

        assert registry.register(first) is first
        assert registry.register(second) is first
        assert len(registry.types) == 1

    def test_different_shape_collides(self):
        registry = NameRegistry()
        registry.register(_type_def("Info", ("x", ScalarKind.NUMBER), path="a.info"))

        with pytest.raises(NameCollisionError) as excinfo:
            registry.register(_type_def("Info", ("x", ScalarKind.TEXT), path="b.info"))

        assert excinfo.value.path == "b.info"
        assert "a.info" in str(excinfo.value)
