"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputError
from .config import OutputConfig, OutputMode

logger = logging.getLogger(__name__)

_RUST_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_RUST_LINE_COMMENT = re.compile(r"^\s*//[^\n]*", re.MULTILINE)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Validate the content
    2. Write to a temporary file in the same directory
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, output: OutputConfig | None = None, validate_rust: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            output: Output handling configuration
            validate_rust: Optional validation function for Rust code
        """
        self.output = output or OutputConfig()
        self._validate_rust = validate_rust or self._default_validate_rust

    def write(self, path: Path, content: str) -> None:
        """Write content to file, honoring the configured output mode.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OutputError: If the file exists in error mode, or validation fails
            OSError: If file operations fail
        """
        if self.output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise OutputError(f"Output file already exists: {path}. Use force mode to overwrite.")

        if self.output.validate_before_write:
            self._validate_rust(content)

        if not self.output.atomic_write:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise

        logger.debug("Wrote %d bytes to %s", len(content), path)

    @staticmethod
    def _default_validate_rust(code: str) -> None:
        """Basic structural check of generated Rust code.

        Raises:
            OutputError: If the code has no definitions or unbalanced delimiters
        """
        stripped = _RUST_STRING_LITERAL.sub('""', _RUST_LINE_COMMENT.sub("", code))

        if "struct " not in stripped:
            raise OutputError("Generated Rust code has no struct definitions")

        for open_char, close_char in ("{}", "()", "[]"):
            opened = stripped.count(open_char)
            closed = stripped.count(close_char)
            if opened != closed:
                raise OutputError(f"Generated Rust code has unbalanced '{open_char}{close_char}': {opened} open, {closed} close")
