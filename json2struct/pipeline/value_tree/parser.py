"""
Invocation parser that builds a value tree.

Phase 1 of the pipeline: turn invocation text of the form

    Company @camel @derive(PartialEq) {
        "company_name" => "Acme",
        "employees" => [{"id" => 1}],
    }

into an Invocation (root name, raw flag tokens, value tree) without
interpreting the flags or inferring any types.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from ...errors import InvocationSyntaxError
from .nodes import (
    ArrayValue,
    BoolValue,
    FlagToken,
    Invocation,
    JsonValue,
    NullValue,
    NumberValue,
    ObjectValue,
    StringValue,
)

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<skip>\s+|//[^\n]*|/\*.*?\*/)
    |(?P<string>"(?:[^"\\]|\\.|\\\n)*")
    |(?P<number>-?[0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9_]+)?(?:[iuf](?:8|16|32|64|128|size))?)
    |(?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<arrow>=>)
    |(?P<punct>[{}\[\](),:@])
    |(?P<unterminated>")
    |(?P<error>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE_PATTERN = re.compile(r"\\(u\{[0-9a-fA-F]{1,6}\}|x[0-7][0-9a-fA-F]|\n\s*|.)", re.DOTALL)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}

_NUMBER_SUFFIX = re.compile(r"[iuf](?:8|16|32|64|128|size)$")

_KEYWORDS = {"true": BoolValue(True), "false": BoolValue(False), "null": NullValue()}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    offset: int


class InvocationParser:
    """Recursive descent parser for invocation text."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = self._tokenize(text)
        self.index = 0

    def parse_invocation(self) -> Invocation:
        """
        Parse ``Identifier [FlagList] ObjectLiteral``.

        Returns:
            Invocation with the root name, raw flags and root object

        Raises:
            InvocationSyntaxError: On any deviation from the grammar
        """
        name = self._expect("ident", "type name").text
        flags = self._parse_flags()
        value = self._parse_object("")
        self._expect("eof", "end of input")
        return Invocation(name=name, flags=flags, value=value)

    def parse_document(self) -> JsonValue:
        """Parse a single standalone value literal."""
        value = self._parse_value("")
        self._expect("eof", "end of input")
        return value

    def _tokenize(self, text: str) -> list[Token]:
        tokens = []
        for match in _TOKEN_PATTERN.finditer(text):
            kind = match.lastgroup
            if kind == "skip":
                continue
            if kind == "unterminated":
                raise self._error("Unterminated string literal", match.start())
            if kind == "error":
                raise self._error(f"Unexpected character {match.group()!r}", match.start())
            tokens.append(Token(kind, match.group(), match.start()))
        tokens.append(Token("eof", "", len(text)))
        return tokens

    def _error(self, message: str, offset: int) -> InvocationSyntaxError:
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return InvocationSyntaxError(message, line, column)

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != "eof":
            self.index += 1
        return token

    def _at(self, text: str) -> bool:
        token = self._peek()
        return token.kind in ("punct", "arrow") and token.text == text

    def _accept(self, text: str) -> bool:
        if self._at(text):
            self._advance()
            return True
        return False

    def _expect(self, kind: str, description: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise self._error(f"Expected {description}, found {self._describe(token)}", token.offset)
        return self._advance()

    def _expect_punct(self, text: str) -> Token:
        token = self._peek()
        if not self._at(text):
            raise self._error(f"Expected '{text}', found {self._describe(token)}", token.offset)
        return self._advance()

    @staticmethod
    def _describe(token: Token) -> str:
        if token.kind == "eof":
            return "end of input"
        return repr(token.text)

    def _parse_flags(self) -> tuple[FlagToken, ...]:
        flags = []
        while self._accept("@"):
            name = self._expect("ident", "flag name after '@'").text
            args = None
            if self._accept("("):
                args = []
                while not self._at(")"):
                    args.append(self._expect("ident", f"identifier in @{name}(...)").text)
                    if not self._accept(","):
                        break
                self._expect_punct(")")
                args = tuple(args)
            flags.append(FlagToken(name=name, args=args))
        return tuple(flags)

    def _parse_value(self, path: str) -> JsonValue:
        token = self._peek()
        if self._at("{"):
            return self._parse_object(path)
        if self._at("["):
            return self._parse_array(path)
        if token.kind == "string":
            self._advance()
            return StringValue(self._unescape(token))
        if token.kind == "number":
            self._advance()
            return NumberValue(self._parse_number(token))
        if token.kind == "ident" and token.text in _KEYWORDS:
            self._advance()
            return _KEYWORDS[token.text]
        raise self._error(f"Unsupported literal {self._describe(token)}", token.offset)

    def _parse_object(self, path: str) -> ObjectValue:
        self._expect_punct("{")
        entries: list[tuple[str, JsonValue]] = []
        seen: set[str] = set()
        while not self._at("}"):
            key_token = self._peek()
            if key_token.kind != "string":
                raise self._error(f"Object key must be a string literal, found {self._describe(key_token)}", key_token.offset)
            self._advance()
            key = self._unescape(key_token)
            if key in seen:
                raise self._error(f"Duplicate key {key!r} in object at '{path or '<root>'}'", key_token.offset)
            seen.add(key)
            if not (self._accept("=>") or self._accept(":")):
                token = self._peek()
                raise self._error(f"Expected '=>' after key {key!r}, found {self._describe(token)}", token.offset)
            child_path = f"{path}.{key}" if path else key
            entries.append((key, self._parse_value(child_path)))
            if not self._accept(","):
                break
        self._expect_punct("}")
        return ObjectValue(tuple(entries))

    def _parse_array(self, path: str) -> ArrayValue:
        self._expect_punct("[")
        items = []
        while not self._at("]"):
            items.append(self._parse_value(f"{path}[]"))
            if not self._accept(","):
                break
        self._expect_punct("]")
        return ArrayValue(tuple(items))

    def _parse_number(self, token: Token) -> float:
        text = _NUMBER_SUFFIX.sub("", token.text).replace("_", "")
        try:
            number = float(text)
        except ValueError:
            raise self._error(f"Invalid number literal {token.text!r}", token.offset) from None
        if not math.isfinite(number):
            raise self._error(f"Number literal {token.text!r} is out of range", token.offset)
        return number

    def _unescape(self, token: Token) -> str:
        body = token.text[1:-1]

        def replace(match: re.Match) -> str:
            escape = match.group(1)
            if escape.startswith("u{"):
                code_point = int(escape[2:-1], 16)
                if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
                    raise self._error(f"Invalid unicode escape '\\{escape}'", token.offset + match.start() + 1)
                return chr(code_point)
            if escape.startswith("x") and len(escape) == 3:
                return chr(int(escape[1:], 16))
            if escape.startswith("\n"):
                return ""
            if escape in _SIMPLE_ESCAPES:
                return _SIMPLE_ESCAPES[escape]
            raise self._error(f"Unknown escape sequence '\\{escape}'", token.offset + match.start() + 1)

        return _ESCAPE_PATTERN.sub(replace, body)


def parse_invocation(text: str) -> Invocation:
    """Parse invocation text into an Invocation."""
    return InvocationParser(text).parse_invocation()


def parse_value(text: str) -> JsonValue:
    """Parse a standalone value literal such as ``{"a" => [1, 2]}``."""
    return InvocationParser(text).parse_document()
