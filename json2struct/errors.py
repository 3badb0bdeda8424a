"""
Error taxonomy for the json2struct pipeline.

Every error is terminal for the invocation that raised it: a schema that
fails any check never produces a partial set of definitions.
"""

from __future__ import annotations


class Json2StructError(Exception):
    """Base class for all errors raised by the pipeline."""

    pass


class InvocationSyntaxError(Json2StructError):
    """Raised when the invocation text does not match the grammar.

    Attributes:
        line: 1-based line of the offending token (0 when unknown)
        column: 1-based column of the offending token (0 when unknown)
    """

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        if line:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class FlagError(Json2StructError):
    """Raised when the directive flag list is invalid."""

    pass


class UnknownFlagError(FlagError):
    pass


class FlagConflictError(FlagError):
    pass


class InferenceError(Json2StructError):
    """Raised when no static type can be inferred for the literal.

    Attributes:
        path: Key path of the offending value, e.g. ``employees[].details``
    """

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class RootTypeError(InferenceError):
    pass


class TypeUnificationError(InferenceError):
    pass


class HeterogeneousArrayError(InferenceError):
    pass


class AmbiguousEmptyArrayError(InferenceError):
    pass


class NameCollisionError(InferenceError):
    pass


class RecursionLimitExceeded(InferenceError):
    pass


class OutputError(Json2StructError):
    """Raised when generated output cannot be written.

    This can happen when:
    - The output file exists and the output mode forbids overwriting
    - The rendered code fails the pre-write sanity check
    """

    pass
