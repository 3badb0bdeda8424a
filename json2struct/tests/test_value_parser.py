"""
Tests for the invocation parser and the value tree helpers.
"""

from __future__ import annotations

import json

import pytest

from json2struct.errors import InvocationSyntaxError
from json2struct.pipeline.value_tree import (
    ArrayValue,
    BoolValue,
    FlagToken,
    JsonValue,
    NullValue,
    NumberValue,
    ObjectValue,
    StringValue,
    from_python,
    object_pairs_hook,
    parse_invocation,
    parse_value,
)


def test_parse_simple_invocation():
    invocation = parse_invocation('User {"first_name" => "John", "age" => 30}')

    assert invocation.name == "User"
    assert invocation.flags == ()
    assert invocation.value == ObjectValue(
        (
            ("first_name", StringValue("John")),
            ("age", NumberValue(30.0)),
        )
    )


def test_parse_flags():
    invocation = parse_invocation("Company @debug @camel @derive(PartialEq, Eq) @store_json {}")

    assert invocation.flags == (
        FlagToken("debug"),
        FlagToken("camel"),
        FlagToken("derive", ("PartialEq", "Eq")),
        FlagToken("store_json"),
    )
    assert invocation.value == ObjectValue(())


def test_parse_empty_derive_list():
    invocation = parse_invocation("T @derive() {}")
    assert invocation.flags == (FlagToken("derive", ()),)


def test_key_order_is_preserved():
    invocation = parse_invocation('T {"z" => 1, "a" => 2, "m" => 3}')
    assert invocation.value.keys() == ["z", "a", "m"]


def test_nested_values_and_trailing_commas():
    source = """
    Company {
        // comment lines are ignored
        "name" => "Acme",
        "active" => true,
        "parent" => null,
        "tags" => ["a", "b",],
        "address" => {"city": "Paris", "zip": false,},
    }
    """
    value = parse_invocation(source).value

    entries = dict(value.entries)
    assert entries["active"] == BoolValue(True)
    assert entries["parent"] == NullValue()
    assert entries["tags"] == ArrayValue((StringValue("a"), StringValue("b")))
    assert entries["address"] == ObjectValue((("city", StringValue("Paris")), ("zip", BoolValue(False))))


@pytest.mark.parametrize(
    "literal,expected",
    [
        ("1_000", 1000.0),
        ("2.5e3", 2500.0),
        ("-4", -4.0),
        ("7u8", 7.0),
        ("0.25f64", 0.25),
    ],
)
def test_number_literals(literal, expected):
    assert parse_value(literal) == NumberValue(expected)


@pytest.mark.parametrize("literal", ["1e400", "-1e400", "1" + "0" * 400])
def test_out_of_range_number_literals(literal):
    with pytest.raises(InvocationSyntaxError) as excinfo:
        parse_invocation('T {"big" => ' + literal + "}")
    assert "out of range" in str(excinfo.value)


def test_string_escapes():
    value = parse_value(r'"a\"b\n\t\\ \u{1F600}"')
    assert value == StringValue('a"b\n\t\\ \U0001f600')


def test_parse_value_array():
    assert parse_value('[1, "a"]') == ArrayValue((NumberValue(1.0), StringValue("a")))


@pytest.mark.parametrize(
    "source,message",
    [
        ('{"a" => 1}', "Expected type name"),
        ('User {"a" => 1', "Expected '}'"),
        ('User {"a" => "unterminated}', "Unterminated string literal"),
        ('User {a => 1}', "Object key must be a string literal"),
        ('User {"a" => 1, "a" => 2}', "Duplicate key 'a'"),
        ('User {"a" 1}', "Expected '=>'"),
        ('User {"a" => 1} trailing', "Expected end of input"),
        ('User {"a" => "\\q"}', "Unknown escape sequence"),
        ("User @ {}", "Expected flag name"),
        ("User @derive(1) {}", "Expected identifier in @derive"),
    ],
)
def test_syntax_errors(source, message):
    with pytest.raises(InvocationSyntaxError) as excinfo:
        parse_invocation(source)
    assert message in str(excinfo.value)


def test_syntax_error_position():
    with pytest.raises(InvocationSyntaxError) as excinfo:
        parse_invocation('User {\n  "a" => ?\n}')

    assert excinfo.value.line == 2
    assert excinfo.value.column == 10
    assert "Unexpected character '?'" in str(excinfo.value)


def test_from_python_preserves_order_and_kinds():
    value = from_python({"b": True, "a": 1, "c": [None, "x"], "d": {"e": 2.5}})

    assert value == ObjectValue(
        (
            ("b", BoolValue(True)),
            ("a", NumberValue(1.0)),
            ("c", ArrayValue((NullValue(), StringValue("x")))),
            ("d", ObjectValue((("e", NumberValue(2.5)),))),
        )
    )


def test_from_python_rejects_non_finite_numbers():
    with pytest.raises(InvocationSyntaxError):
        from_python({"a": float("nan")})


@pytest.mark.parametrize("text", ["1e400", "1" + "0" * 400])
def test_from_python_rejects_overflowing_json_numbers(text):
    with pytest.raises(InvocationSyntaxError):
        from_python(json.loads('{"a": ' + text + "}", object_pairs_hook=object_pairs_hook))


def test_json_value_base_is_abstract():
    with pytest.raises(TypeError):
        JsonValue()


def test_to_python_round_trip():
    data = {"name": "x", "scores": [1.0, 2.5], "meta": {"ok": False, "none": None}}
    assert from_python(data).to_python() == data


def test_object_pairs_hook_rejects_duplicates():
    with pytest.raises(InvocationSyntaxError):
        json.loads('{"a": 1, "a": 2}', object_pairs_hook=object_pairs_hook)
