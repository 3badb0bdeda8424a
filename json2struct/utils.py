"""
Utility functions for identifier case conversion.
"""

import re

# Matched against a string of character classes (see _char_classes):
# acronym runs ("HTTP" in "HTTPServer"), capitalized or lowercase words, digit runs
_WORD_PATTERN = re.compile(r"A+(?!a)|A?a+|0+")

_PLURAL_ES_ENDINGS = ("sses", "shes", "ches", "xes", "zes", "iases", "tuses")
_SINGULAR_S_ENDINGS = ("ss", "us", "is")
_UNCOUNTABLE_WORDS = {"news", "series", "species", "means", "physics"}


def is_identifier_char(char: str) -> bool:
    """True for characters allowed after the first position of an identifier, Unicode letters included."""
    return ("_" + char).isidentifier()


def _char_classes(text: str) -> str:
    # "A" upper, "a" lower or uncased letter, "0" digit, " " separator
    classes = []
    for char in text:
        if char == "_" or not is_identifier_char(char):
            classes.append(" ")
        elif char.isdecimal():
            classes.append("0")
        elif char.isupper():
            classes.append("A")
        else:
            classes.append("a")
    return "".join(classes)


def split_words(text: str) -> list[str]:
    """Split text into words on separators, case boundaries and digit runs.

    Letters outside ASCII are word characters too; scripts without case
    (e.g. "名前") form a single lowercase word.

    Examples:
        "first_name" -> ["first", "name"]
        "firstName" -> ["first", "Name"]
        "HTTPServer" -> ["HTTP", "Server"]
        "address-2" -> ["address", "2"]
        "caféName" -> ["café", "Name"]
    """
    return [text[match.start() : match.end()] for match in _WORD_PATTERN.finditer(_char_classes(text))]


def to_snake_case(text: str) -> str:
    """Convert text to lower_snake_case."""
    return "_".join(word.lower() for word in split_words(text))


def to_camel_case(text: str) -> str:
    """Convert text to lowerCamelCase."""
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "first 3 rows" -> "First3Rows"
    """
    return "".join(word.capitalize() for word in split_words(text))


def to_upper_snake_case(text: str) -> str:
    """Convert text to UPPER_SNAKE_CASE, e.g. "UserProfile" -> "USER_PROFILE"."""
    return to_snake_case(text).upper()


def singularize(word: str) -> str:
    """Best-effort English singular of a single word.

    Examples:
        "employees" -> "employee"
        "categories" -> "category"
        "boxes" -> "box"
        "aliases" -> "alias"
        "status" -> "status"
        "news" -> "news"
    """
    lower = word.lower()
    if lower in _UNCOUNTABLE_WORDS:
        return word
    if len(word) > 3 and lower.endswith("ies"):
        return word[:-3] + ("Y" if word[-3].isupper() else "y")
    if lower.endswith(_PLURAL_ES_ENDINGS):
        return word[:-2]
    if lower.endswith(_SINGULAR_S_ENDINGS):
        return word
    if len(word) > 1 and lower.endswith("s"):
        return word[:-1]
    return word


def sanitize_identifier(text: str) -> str:
    """Replace every character that cannot appear in an identifier with "_".

    Unicode letters are kept ("café" stays "café"). A result that would
    start with a digit gets a leading "_".
    """
    sanitized = "".join(char if is_identifier_char(char) else "_" for char in text)
    if sanitized and not sanitized.isidentifier():
        return "_" + sanitized
    return sanitized
