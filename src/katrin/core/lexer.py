"""
Lexer/Tokenizer for KATRIN scripts.

Converts raw script text into a stream of tokens with source location tracking.
The lexer never raises: anything it cannot classify becomes an UNKNOWN token
and validation is left to the parser.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class TokenType(Enum):
    """Token types in KATRIN scripts."""

    # Keywords
    ASSETS = "Assets"
    CALL = "call"
    BACKGROUND = "background"
    PLAY = "play"
    SAY = "say"
    WAIT = "wait"
    END = "end"
    LOAD_SCRIPT = "load_script"

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    INTEGER = "INTEGER"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","

    # Special
    EOF = "EOF"
    UNKNOWN = "UNKNOWN"

    def describe(self) -> str:
        """Human-readable name used in diagnostics."""
        if self is TokenType.EOF:
            return "end of input"
        if self in KEYWORDS.values():
            return f"keyword '{self.value}'"
        if len(self.value) == 1:
            return f"'{self.value}'"
        return self.value.lower()


# Reserved words. Lookup is case-sensitive ("Assets" but "say").
KEYWORDS: Mapping[str, TokenType] = MappingProxyType(
    {
        "Assets": TokenType.ASSETS,
        "call": TokenType.CALL,
        "background": TokenType.BACKGROUND,
        "play": TokenType.PLAY,
        "say": TokenType.SAY,
        "wait": TokenType.WAIT,
        "end": TokenType.END,
        "load_script": TokenType.LOAD_SCRIPT,
    }
)

PUNCTUATION: Mapping[str, TokenType] = MappingProxyType(
    {
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ",": TokenType.COMMA,
    }
)


@dataclass(frozen=True)
class Token:
    """
    A single token in a script.

    Attributes:
        type: Type of token
        value: Lexeme (string literals carry their inner text)
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Identifiers, keywords, strings and numbers are stamped with the cursor
    position *after* the lexeme was scanned. Single-character tokens and EOF
    carry the position of the character itself.
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for KATRIN scripts.

    Scans the source text on demand with next_token(); the cursor only moves
    forward.
    """

    def __init__(self, text: str):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
        """
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip whitespace characters, newlines included."""
        while True:
            ch = self.current_char()
            if ch is None or not ch.isspace():
                break
            self.advance()

    def read_identifier(self) -> str:
        """Read an identifier or keyword (maximal munch)."""
        start = self.pos
        current = self.current_char()
        while current and (current.isalpha() or current.isdecimal() or current == "_"):
            self.advance()
            current = self.current_char()
        return self.text[start : self.pos]

    def read_number(self) -> str:
        """Read a run of decimal digits."""
        start = self.pos
        current = self.current_char()
        while current and current.isdecimal():
            self.advance()
            current = self.current_char()
        return self.text[start : self.pos]

    def read_string(self) -> str | None:
        """
        Read a double-quoted string literal.

        Returns:
            Inner text of the literal, or None if there is no closing quote.
            In the unterminated case only the opening quote is consumed.
        """
        closing = self.text.find('"', self.pos + 1)
        if closing == -1:
            self.advance()
            return None

        value = self.text[self.pos + 1 : closing]
        while self.pos <= closing:
            self.advance()
        return value

    def next_token(self) -> Token:
        """
        Scan the next token.

        Returns:
            The next token, or an EOF token once the input is exhausted.
            Calling again after EOF keeps returning EOF.
        """
        self.skip_whitespace()

        ch = self.current_char()
        if ch is None:
            return Token(TokenType.EOF, "", self.line, self.column)

        # Identifiers and keywords
        if ch.isalpha() or ch == "_":
            value = self.read_identifier()
            token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
            return Token(token_type, value, self.line, self.column)

        # Strings
        if ch == '"':
            text = self.read_string()
            if text is None:
                return Token(TokenType.UNKNOWN, "", self.line, self.column)
            return Token(TokenType.STRING, text, self.line, self.column)

        # Numbers
        if ch.isdecimal():
            value = self.read_number()
            return Token(TokenType.NUMBER, value, self.line, self.column)

        token_type = PUNCTUATION.get(ch, TokenType.UNKNOWN)
        token = Token(token_type, ch, self.line, self.column)
        self.advance()
        return token

    def tokenize(self) -> list[Token]:
        """
        Tokenize the remaining source text.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens


def tokenize(text: str) -> list[Token]:
    """
    Convenience function to tokenize script text.

    Args:
        text: Source text

    Returns:
        List of tokens
    """
    lexer = Lexer(text)
    return lexer.tokenize()
