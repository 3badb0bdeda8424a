"""
Tests for the atomic output writer.
"""

import pytest

from json2struct.errors import OutputError
from json2struct.pipeline import AtomicWriter, OutputConfig, OutputMode

VALID_RUST = """// Generated by json2struct
#[derive(::std::clone::Clone)]
struct User {
    #[serde(alias = "name")]
    name: String,
}
"""


def test_writes_new_file(tmp_path):
    target = tmp_path / "out" / "user.rs"

    AtomicWriter().write(target, VALID_RUST)

    assert target.read_text(encoding="utf-8") == VALID_RUST
    assert [p.name for p in target.parent.iterdir()] == ["user.rs"]


def test_existing_file_is_an_error_by_default(tmp_path):
    target = tmp_path / "user.rs"
    target.write_text("old", encoding="utf-8")

    with pytest.raises(OutputError):
        AtomicWriter().write(target, VALID_RUST)

    assert target.read_text(encoding="utf-8") == "old"


def test_force_overwrites(tmp_path):
    target = tmp_path / "user.rs"
    target.write_text("old", encoding="utf-8")

    AtomicWriter(OutputConfig(mode=OutputMode.FORCE)).write(target, VALID_RUST)

    assert target.read_text(encoding="utf-8") == VALID_RUST


def test_non_atomic_write(tmp_path):
    target = tmp_path / "user.rs"

    AtomicWriter(OutputConfig(atomic_write=False)).write(target, VALID_RUST)

    assert target.read_text(encoding="utf-8") == VALID_RUST


@pytest.mark.parametrize(
    "content",
    [
        "// nothing here\n",
        "struct User {\n    name: String,\n",
        "struct User {\n    name: Vec<String>,\n}\n)",
    ],
)
def test_invalid_content_is_not_written(tmp_path, content):
    target = tmp_path / "user.rs"

    with pytest.raises(OutputError):
        AtomicWriter().write(target, content)

    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_delimiters_inside_strings_and_comments_are_ignored(tmp_path):
    target = tmp_path / "user.rs"
    content = '// a comment with an open brace {\nstruct User {\n    #[serde(rename = "a{b")]\n    a_b: f64,\n}\n'

    AtomicWriter().write(target, content)

    assert target.exists()


def test_validation_can_be_disabled(tmp_path):
    target = tmp_path / "notes.txt"

    AtomicWriter(OutputConfig(validate_before_write=False)).write(target, "plain text {")

    assert target.read_text(encoding="utf-8") == "plain text {"


def test_custom_validator(tmp_path):
    seen = []
    writer = AtomicWriter(validate_rust=seen.append)

    writer.write(tmp_path / "user.rs", "anything")

    assert seen == ["anything"]
