"""
Lexer/Tokenizer for textmap source.

Converts raw textmap text into a stream of tokens with byte-offset tracking.
Whitespace, ``// line`` comments and ``/* block */`` comments are skipped
between tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import make_parse_error
from .location import Span
from .number import INT32_MAX, INT32_MIN


class TokenType(Enum):
    """Token types in the textmap grammar."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    INT = "INT"
    FLOAT = "FLOAT"
    STRING = "STRING"

    # Punctuation
    EQUALS = "="
    SEMICOLON = ";"
    LBRACE = "{"
    RBRACE = "}"

    # Special
    EOF = "EOF"


PUNCTUATION = {
    "=": TokenType.EQUALS,
    ";": TokenType.SEMICOLON,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

STRING_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
}


@dataclass
class Token:
    """
    A single token in the textmap source.

    Attributes:
        type: Type of token
        value: Decoded value (text for identifiers, int/float/str for literals)
        start: Byte offset of the first byte of the token
        end: Byte offset one past the last byte of the token
    """

    type: TokenType
    value: str | int | float
    start: int
    end: int

    @property
    def span(self) -> Span:
        return Span(start=self.start, end=self.end)

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.start}..{self.end})"


def _is_ident_start(ch: str | None) -> bool:
    return ch is not None and (ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z"))


def _is_ident_char(ch: str | None) -> bool:
    return _is_ident_start(ch) or (ch is not None and "0" <= ch <= "9")


def _is_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


def _is_hex_digit(ch: str | None) -> bool:
    return ch is not None and ch in "0123456789abcdefABCDEF"


class Lexer:
    """
    Lexer for textmap source.

    Tracks both the character position (for indexing into the text) and the
    byte offset (for spans) so diagnostics are exact for non-ASCII comments
    and strings.
    """

    def __init__(self, text: str, file: Path | str | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source name (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.offset = 0
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating the byte offset."""
        if self.pos < len(self.text):
            ch = self.text[self.pos]
            self.offset += 1 if ch < "\x80" else len(ch.encode("utf-8"))
            self.pos += 1

    def error(self, message: str, offset: int | None = None):
        return make_parse_error(
            message, self.text, self.offset if offset is None else offset, self.file
        )

    def skip_whitespace_and_comments(self) -> None:
        """Skip any run of whitespace, line comments and block comments."""
        while True:
            ch = self.current_char()
            if ch is None:
                return
            if ch.isspace():
                self.advance()
            elif ch == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            elif ch == "/" and self.peek_char() == "*":
                start = self.offset
                self.advance()
                self.advance()
                while not (self.current_char() == "*" and self.peek_char() == "/"):
                    if self.current_char() is None:
                        raise self.error("Unterminated block comment", start)
                    self.advance()
                self.advance()
                self.advance()
            else:
                return

    def read_string(self) -> str:
        """Read a double-quoted string with ``\\\\``, ``\\"`` and ``\\n`` escapes."""
        start = self.offset
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None:
                raise self.error("Unterminated string literal", start)
            if current == '"':
                break

            if current == "\\":
                escape_offset = self.offset
                self.advance()
                escape_char = self.current_char()
                if escape_char not in STRING_ESCAPES:
                    raise self.error(f"Invalid escape sequence: \\{escape_char or ''}", escape_offset)
                chars.append(STRING_ESCAPES[escape_char])
                self.advance()
            else:
                chars.append(current)
                self.advance()

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> tuple[TokenType, int | float]:
        """
        Read a decimal integer, hexadecimal integer or float.

        Returns:
            Tuple of (token type, value)
        """
        start = self.offset
        begin = self.pos

        if self.current_char() == "0" and self.peek_char() in ("x", "X"):
            self.advance()
            self.advance()
            digits_start = self.pos
            while _is_hex_digit(self.current_char()):
                self.advance()
            digits = self.text[digits_start : self.pos]
            if not digits:
                raise self.error("Expected hexadecimal digits after '0x'", start)
            value = int(digits, 16)
            if value > INT32_MAX:
                raise self.error(f"Integer literal 0x{digits} does not fit in 32 bits", start)
            return TokenType.INT, value

        if self.current_char() in ("-", "+"):
            self.advance()

        mantissa_digits = 0
        while _is_digit(self.current_char()):
            self.advance()
            mantissa_digits += 1

        is_float = False
        if self.current_char() == "." and (mantissa_digits or _is_digit(self.peek_char())):
            is_float = True
            self.advance()
            while _is_digit(self.current_char()):
                self.advance()
                mantissa_digits += 1

        if mantissa_digits == 0:
            raise self.error("Expected a number", start)

        if self.current_char() in ("e", "E"):
            sign = self.peek_char()
            digits_at = 2 if sign in ("-", "+") else 1
            if _is_digit(self.peek_char(digits_at)):
                is_float = True
                for _ in range(digits_at):
                    self.advance()
                while _is_digit(self.current_char()):
                    self.advance()

        text = self.text[begin : self.pos]
        if is_float:
            return TokenType.FLOAT, float(text)

        value = int(text)
        if not INT32_MIN <= value <= INT32_MAX:
            raise self.error(f"Integer literal {text} does not fit in 32 bits", start)
        return TokenType.INT, value

    def read_identifier(self) -> str:
        """Read an identifier."""
        begin = self.pos
        while _is_ident_char(self.current_char()):
            self.advance()
        return self.text[begin : self.pos]

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: If syntax error encountered
        """
        while True:
            self.skip_whitespace_and_comments()

            ch = self.current_char()
            if ch is None:
                break

            start = self.offset

            if ch == '"':
                value: str | int | float = self.read_string()
                token_type = TokenType.STRING

            elif _is_digit(ch) or (
                ch in ("-", "+", ".") and (_is_digit(self.peek_char()) or self.peek_char() == ".")
            ):
                token_type, value = self.read_number()

            elif _is_ident_start(ch):
                value = self.read_identifier()
                token_type = TokenType.IDENTIFIER

            elif ch in PUNCTUATION:
                self.advance()
                value = ch
                token_type = PUNCTUATION[ch]

            else:
                raise self.error(f"Unexpected character: {ch!r}")

            self.tokens.append(Token(token_type, value, start, self.offset))

        self.tokens.append(Token(TokenType.EOF, "", self.offset, self.offset))
        return self.tokens


def tokenize(text: str, file: Path | str | None = None) -> list[Token]:
    """
    Convenience function to tokenize textmap text.

    Args:
        text: Source text
        file: Source name

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
