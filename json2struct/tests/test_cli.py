"""
Tests for the json2struct command line.
"""

import json

import pytest
from click.testing import CliRunner

from json2struct import __version__
from json2struct.json2struct import json2struct

COMPANY_SOURCE = """
Company @camel @store_json {
    "company_name" => "Acme Corp",
    "employees" => [
        {"id" => 1, "details" => {"email" => "john@example.com"}},
        {"id" => 2},
    ],
}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def company_file(tmp_path):
    path = tmp_path / "company.j2s"
    path.write_text(COMPANY_SOURCE, encoding="utf-8")
    return path


def test_invocation_file_to_output_file(runner, company_file, tmp_path):
    output = tmp_path / "company.rs"

    result = runner.invoke(json2struct, [str(company_file), str(output)])

    assert result.exit_code == 0, result.output
    code = output.read_text(encoding="utf-8")
    assert code.startswith(f"// Generated by json2struct {__version__}\n")
    assert "// Command line: json2struct company.j2s" in code
    assert code.index("struct Details {") < code.index("struct Employee {") < code.index("struct Company {")
    assert "    details: ::std::option::Option<Details>," in code
    assert "static COMPANY_JSON_VALUE" in code


def test_json_file_to_stdout(runner, tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"user_name": "a", "tags": ["x"]}), encoding="utf-8")

    result = runner.invoke(json2struct, [str(path), "-", "--name", "Account", "-f", "camel", "-f", "derive(PartialEq)"])

    assert result.exit_code == 0, result.output
    assert "struct Account {" in result.output
    assert '#[serde(rename_all = "camelCase")]' in result.output
    assert "    userName: ::std::string::String," in result.output
    assert "    tags: ::std::vec::Vec<::std::string::String>," in result.output
    assert "::serde::Serialize, PartialEq)]" in result.output


def test_json_file_name_is_root_name(runner, tmp_path):
    path = tmp_path / "user_profile.json"
    path.write_text('{"id": 1}', encoding="utf-8")

    result = runner.invoke(json2struct, [str(path), "-"])

    assert result.exit_code == 0, result.output
    assert "struct UserProfile {" in result.output


def test_cli_flags_and_name_extend_invocation(runner, company_file):
    result = runner.invoke(json2struct, [str(company_file), "-", "-n", "Firm", "-f", "debug"])

    assert result.exit_code == 0, result.output
    assert "struct Firm {" in result.output
    assert "static FIRM_JSON_VALUE" in result.output
    assert "::std::fmt::Debug" in result.output


def test_existing_output_requires_force(runner, company_file, tmp_path):
    output = tmp_path / "company.rs"
    output.write_text("// old\n", encoding="utf-8")

    result = runner.invoke(json2struct, [str(company_file), str(output)])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert output.read_text(encoding="utf-8") == "// old\n"

    result = runner.invoke(json2struct, [str(company_file), str(output), "--force"])
    assert result.exit_code == 0, result.output
    assert "struct Company {" in output.read_text(encoding="utf-8")


def test_config_file(runner, company_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"public_types": True, "add_generation_comment": False}), encoding="utf-8")

    result = runner.invoke(json2struct, [str(company_file), "-", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("#[derive(")
    assert "pub struct Company {" in result.output


def test_inference_error_is_reported(runner, tmp_path):
    path = tmp_path / "mixed.j2s"
    path.write_text('Mixed {"values" => [1, "two"]}', encoding="utf-8")

    result = runner.invoke(json2struct, [str(path), "-"])

    assert result.exit_code == 1
    assert "values[]: Array mixes number and text elements" in result.output


def test_syntax_error_is_reported(runner, tmp_path):
    path = tmp_path / "broken.j2s"
    path.write_text('Broken {"a" => }', encoding="utf-8")

    result = runner.invoke(json2struct, [str(path), "-"])

    assert result.exit_code == 1
    assert "line 1, column 16" in result.output


def test_unknown_flag_is_reported(runner, company_file):
    result = runner.invoke(json2struct, [str(company_file), "-", "-f", "verbose"])

    assert result.exit_code == 1
    assert "Unknown flag: @verbose" in result.output


def test_invalid_json_is_reported(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"a": ', encoding="utf-8")

    result = runner.invoke(json2struct, [str(path), "-"])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_missing_input(runner, tmp_path):
    result = runner.invoke(json2struct, [str(tmp_path / "missing.j2s"), "-"])
    assert result.exit_code == 2
