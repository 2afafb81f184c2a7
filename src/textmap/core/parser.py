"""
Recursive descent parser for textmap source.

Grammar::

    translation_unit := (assignment | block)* EOF
    block            := identifier "{" assignment* "}"
    assignment       := identifier "=" value ";"
    value            := INT | FLOAT | STRING | "true" | "false"   (case-insensitive)

The parser has no knowledge of entity kinds; that is the compiler's job.
"""

from __future__ import annotations

from pathlib import Path

from . import ast
from .errors import make_parse_error
from .lexer import Token, TokenType, tokenize
from .location import Span

BOOL_LITERALS = {"true": True, "false": False}


class Parser:
    """
    Parser producing a span-annotated :class:`ast.TranslationUnit`.

    Uses one token of lookahead after an identifier to tell assignments
    from blocks.
    """

    def __init__(self, tokens: list[Token], text: str, file: Path | str | None = None):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            text: Source text (for error context)
            file: Source name (for error reporting)
        """
        self.tokens = tokens
        self.text = text
        self.file = file
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise make_parse_error(
                f"Expected {_describe(token_type)}, got {_describe_token(token)}",
                self.text,
                token.start,
                self.file,
            )
        return self.advance()

    def parse_translation_unit(self) -> ast.TranslationUnit:
        expressions: list[ast.AssignmentExpr | ast.Block] = []
        while self.current_token().type != TokenType.EOF:
            if self.peek_token().type == TokenType.LBRACE:
                expressions.append(self.parse_block())
            else:
                expressions.append(self.parse_assignment())
        return ast.TranslationUnit(expressions=expressions)

    def parse_identifier(self) -> ast.Identifier:
        token = self.expect(TokenType.IDENTIFIER)
        return ast.Identifier(name=str(token.value), span=token.span)

    def parse_block(self) -> ast.Block:
        identifier = self.parse_identifier()
        self.expect(TokenType.LBRACE)

        assignments = []
        while self.current_token().type != TokenType.RBRACE:
            if self.current_token().type == TokenType.EOF:
                token = self.current_token()
                raise make_parse_error(
                    f"Unterminated block '{identifier.name}', expected '}}'",
                    self.text,
                    token.start,
                    self.file,
                )
            assignments.append(self.parse_assignment())

        closing = self.advance()
        return ast.Block(
            identifier=identifier,
            assignments=assignments,
            span=Span(start=identifier.span.start, end=closing.end),
        )

    def parse_assignment(self) -> ast.AssignmentExpr:
        identifier = self.parse_identifier()
        self.expect(TokenType.EQUALS)
        value = self.parse_value()
        semicolon = self.expect(TokenType.SEMICOLON)
        return ast.AssignmentExpr(
            identifier=identifier,
            value=value,
            span=Span(start=identifier.span.start, end=semicolon.end),
        )

    def parse_value(self) -> ast.Value:
        token = self.current_token()

        if token.type == TokenType.INT:
            kind = ast.ValueKind.INT
        elif token.type == TokenType.FLOAT:
            kind = ast.ValueKind.FLOAT
        elif token.type == TokenType.STRING:
            kind = ast.ValueKind.STR
        elif token.type == TokenType.IDENTIFIER and str(token.value).lower() in BOOL_LITERALS:
            self.advance()
            return ast.Value(
                kind=ast.ValueKind.BOOL,
                value=BOOL_LITERALS[str(token.value).lower()],
                span=token.span,
            )
        else:
            raise make_parse_error(
                f"Expected a value, got {_describe_token(token)}",
                self.text,
                token.start,
                self.file,
            )

        self.advance()
        return ast.Value(kind=kind, value=token.value, span=token.span)


def _describe(token_type: TokenType) -> str:
    if token_type == TokenType.IDENTIFIER:
        return "identifier"
    if token_type == TokenType.EOF:
        return "end of input"
    return f"'{token_type.value}'"


def _describe_token(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.IDENTIFIER:
        return f"identifier '{token.value}'"
    if token.type == TokenType.STRING:
        return "string literal"
    if token.type in (TokenType.INT, TokenType.FLOAT):
        return f"number {token.value}"
    return f"'{token.value}'"


def parse_textmap(text: str, file: Path | str | None = None) -> ast.TranslationUnit:
    """
    Parse textmap source into a translation unit.

    Raises:
        ParseError: On the first syntax error; no partial tree is returned
    """
    tokens = tokenize(text, file)
    return Parser(tokens, text, file).parse_translation_unit()
