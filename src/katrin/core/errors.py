"""
Error types for KATRIN script lexing, parsing, and project loading.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .lexer import Token, TokenType


class KatrinError(Exception):
    """Base exception for all KATRIN errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(KatrinError):
    """
    Raised when script syntax cannot be parsed.

    Examples:
    - Unknown instruction at statement start
    - Wrong token after an instruction keyword
    - Script ends in the middle of an instruction
    """

    pass


class UnexpectedInstructionError(ParseError):
    """Raised when the lookahead token does not start any instruction."""

    def __init__(
        self,
        message: str,
        token: Token,
        context: Optional["ErrorContext"] = None,
    ):
        self.token = token
        super().__init__(message, context)


class UnexpectedTokenKindError(ParseError):
    """
    Raised when an expected token kind is not the one found.

    Attributes:
        expected: Token kinds that would have been accepted
        actual: Kind that was found (EOF when input ran out)
        token: Offending token, or None when the token list was exhausted
    """

    def __init__(
        self,
        message: str,
        expected: tuple[TokenType, ...],
        actual: TokenType,
        token: Optional[Token] = None,
        context: Optional["ErrorContext"] = None,
    ):
        self.expected = expected
        self.actual = actual
        self.token = token
        super().__init__(message, context)

    @property
    def at_end_of_input(self) -> bool:
        return self.actual == TokenType.EOF


class ManifestError(KatrinError):
    """
    Raised when a katrin.toml project manifest cannot be loaded.

    Examples:
    - Invalid TOML syntax
    - Wrong value types for known keys
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the script where error occurred (None for in-memory text)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source snippet around the error location
    """

    file: Path | None
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "main.kat:10:5"
        """
        location = f"{self.file or '<script>'}:{self.line}:{self.column}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + max(self.column - 1, 0)
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(text: str, line: int, radius: int = 2) -> str:
    """Return the source lines around ``line`` (1-indexed), ``radius`` on each side."""
    lines = text.split("\n")
    start = max(1, line - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start - 1 : end])


def make_manifest_error(message: str, file: Path | None = None) -> ManifestError:
    """Helper to create a ManifestError, with file context when known."""
    if file:
        return ManifestError(f"{file}: {message}")
    return ManifestError(message)
