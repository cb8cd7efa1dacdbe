"""
Script parser for KATRIN.

Converts the token stream from the lexer into a Program.
Implements recursive descent parsing, one production per instruction kind:

    Assets       → "Assets" "{" <any token>* "}"
    Call         → "call" IDENTIFIER [ "(" [ IDENTIFIER ("," IDENTIFIER)* ] ")" ]
    Background   → "background" IDENTIFIER
    Play         → "play" IDENTIFIER
    Say          → "say" STRING
    Wait         → "wait" NUMBER
    End          → "end"
    LoadScript   → "load_script" STRING

There is no error recovery: the first failure aborts the whole parse.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from . import ir
from .errors import (
    ErrorContext,
    UnexpectedInstructionError,
    UnexpectedTokenKindError,
    extract_snippet,
)
from .lexer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser for KATRIN scripts.

    Consumes a fully materialized token list and builds a Program.
    """

    def __init__(self, tokens: list[Token], file: Path | None = None, source: str | None = None):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            source: Original script text, used for error snippets when given
        """
        self.tokens = tokens
        self.file = file
        self.source = source
        self.pos = 0

    def peek(self) -> Token | None:
        """Get the lookahead token without consuming it, or None past the end."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token | None:
        """Consume and return the lookahead token, or None past the end."""
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def at_end(self) -> bool:
        """True once the token list is exhausted or the lookahead is EOF."""
        token = self.peek()
        return token is None or token.type == TokenType.EOF

    def expect(self, *token_types: TokenType) -> Token:
        """
        Consume the next token, requiring it to be one of ``token_types``.

        Raises:
            UnexpectedTokenKindError: If the token has another kind, or the
                input ends first.
        """
        token = self.advance()
        actual = token.type if token is not None else TokenType.EOF
        if token is None or actual not in token_types:
            expected = " or ".join(t.describe() for t in token_types)
            raise UnexpectedTokenKindError(
                f"Expected {expected}, got {actual.describe()}",
                expected=token_types,
                actual=actual,
                token=token,
                context=self._context(token),
            )
        return token

    def parse(self) -> ir.Program:
        """
        Parse the whole token list.

        Returns:
            Program with instructions in source order

        Raises:
            ParseError: On the first syntax error, or on tokens following EOF
        """
        instructions: list[ir.Instruction] = []
        while not self.at_end():
            instructions.append(self.parse_instruction())

        # EOF must be the last token of the list
        if self.pos + 1 < len(self.tokens):
            trailing = self.tokens[self.pos + 1]
            raise UnexpectedTokenKindError(
                f"Expected no tokens after end of input, got {trailing.type.describe()}",
                expected=(TokenType.EOF,),
                actual=trailing.type,
                token=trailing,
                context=self._context(trailing),
            )
        return ir.Program(instructions=tuple(instructions))

    def parse_instruction(self) -> ir.Instruction:
        """Parse one instruction, dispatching on the lookahead kind."""
        token = self.peek()
        handler = _PRODUCTIONS.get(token.type) if token is not None else None
        if handler is None:
            if token is None or token.type == TokenType.EOF:
                raise UnexpectedTokenKindError(
                    "Expected an instruction, got end of input",
                    expected=tuple(_PRODUCTIONS),
                    actual=TokenType.EOF,
                    token=token,
                    context=self._context(token),
                )
            raise UnexpectedInstructionError(
                f"Unknown instruction: {token.value!r}",
                token=token,
                context=self._context(token),
            )
        return handler(self)

    # Productions

    def parse_assets(self) -> ir.AssetsInstruction:
        self.expect(TokenType.ASSETS)
        self.expect(TokenType.LBRACE)

        names: list[str] = []
        while not self.at_end() and self.peek().type != TokenType.RBRACE:
            names.append(self.advance().value)

        self.expect(TokenType.RBRACE)
        return ir.AssetsInstruction(names=tuple(names))

    def parse_call(self) -> ir.CallInstruction:
        self.expect(TokenType.CALL)
        action = self.expect(TokenType.IDENTIFIER).value

        arguments: list[str] = []
        lookahead = self.peek()
        if lookahead is not None and lookahead.type == TokenType.LPAREN:
            self.advance()
            closing = self.peek()
            if closing is None or closing.type != TokenType.RPAREN:
                arguments.append(self.expect(TokenType.IDENTIFIER).value)
                while True:
                    separator = self.peek()
                    if separator is None or separator.type != TokenType.COMMA:
                        break
                    self.advance()
                    arguments.append(self.expect(TokenType.IDENTIFIER).value)
            self.expect(TokenType.RPAREN)

        return ir.CallInstruction(action=action, arguments=tuple(arguments))

    def parse_background(self) -> ir.BackgroundInstruction:
        self.expect(TokenType.BACKGROUND)
        return ir.BackgroundInstruction(name=self.expect(TokenType.IDENTIFIER).value)

    def parse_play(self) -> ir.PlayInstruction:
        self.expect(TokenType.PLAY)
        return ir.PlayInstruction(track=self.expect(TokenType.IDENTIFIER).value)

    def parse_say(self) -> ir.SayInstruction:
        self.expect(TokenType.SAY)
        return ir.SayInstruction(text=self.expect(TokenType.STRING).value)

    def parse_wait(self) -> ir.WaitInstruction:
        self.expect(TokenType.WAIT)
        # The lexer emits digit runs as NUMBER; INTEGER is accepted for
        # token lists built by other producers.
        duration = self.expect(TokenType.NUMBER, TokenType.INTEGER).value
        return ir.WaitInstruction(duration=duration)

    def parse_end(self) -> ir.EndInstruction:
        self.expect(TokenType.END)
        return ir.EndInstruction()

    def parse_load_script(self) -> ir.LoadScriptInstruction:
        self.expect(TokenType.LOAD_SCRIPT)
        return ir.LoadScriptInstruction(path=self.expect(TokenType.STRING).value)

    def _context(self, token: Token | None) -> ErrorContext:
        """Build error context for ``token``, falling back to the last token seen."""
        anchor = token or (self.tokens[-1] if self.tokens else None)
        if anchor is None:
            return ErrorContext(file=self.file, line=1, column=1)
        snippet = extract_snippet(self.source, anchor.line) if self.source else None
        return ErrorContext(
            file=self.file,
            line=anchor.line,
            column=anchor.column,
            snippet=snippet,
        )


_PRODUCTIONS: dict[TokenType, Callable[[Parser], ir.Instruction]] = {
    TokenType.ASSETS: Parser.parse_assets,
    TokenType.CALL: Parser.parse_call,
    TokenType.BACKGROUND: Parser.parse_background,
    TokenType.PLAY: Parser.parse_play,
    TokenType.SAY: Parser.parse_say,
    TokenType.WAIT: Parser.parse_wait,
    TokenType.END: Parser.parse_end,
    TokenType.LOAD_SCRIPT: Parser.parse_load_script,
}


def parse_script(text: str, file: Path | None = None) -> ir.Program:
    """
    Parse script text into a Program.

    Args:
        text: Script source
        file: Source file path (for error reporting)

    Returns:
        Parsed Program

    Raises:
        ParseError: On the first syntax error
    """
    tokens = tokenize(text)
    program = Parser(tokens, file, source=text).parse()
    logger.debug(
        "Parsed %s: %d tokens, %d instructions", file or "<script>", len(tokens), len(program)
    )
    return program
