"""Core KATRIN functionality: lexer, parser, instruction IR, lint, project manifest."""

from . import ir
from .errors import (
    ErrorContext,
    KatrinError,
    ManifestError,
    ParseError,
    UnexpectedInstructionError,
    UnexpectedTokenKindError,
)
from .lexer import KEYWORDS, Lexer, Token, TokenType, tokenize
from .lint import lint_program
from .manifest import ProjectManifest, discover_scripts, load_manifest
from .parser import Parser, parse_script

__all__ = [
    "ir",
    "ErrorContext",
    "KatrinError",
    "ManifestError",
    "ParseError",
    "UnexpectedInstructionError",
    "UnexpectedTokenKindError",
    "KEYWORDS",
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "lint_program",
    "ProjectManifest",
    "discover_scripts",
    "load_manifest",
    "Parser",
    "parse_script",
]
