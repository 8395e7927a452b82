"""
G-Code token parser: turns the tokens of one line into a Block.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .ast_nodes import (
    Address, AddressKind, Block, Chunk,
    Comment, DoubleAddress, IntAddress, Percent, Word, WordAddress,
)
from .errors import (
    NumericFormatError, ParserError, UnexpectedTokenError,
)
from .lexer import classify, is_num_char

# Integer addresses are 32-bit signed on the controller side
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


class TokenStream:
    """Read cursor over a copied sequence of token strings."""

    def __init__(self, tokens: Sequence[str]):
        self.tokens = tuple(tokens)
        self.pos = 0

    def chars_left(self) -> bool:
        return self.pos < len(self.tokens)

    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at the token at offset, or None past the end."""
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return None
        return self.tokens[idx]

    def advance(self) -> str:
        """Return the current token and move past it."""
        token = self.tokens[self.pos]
        self.pos += 1
        return token


class BlockParser:
    """
    Parser for the tokens of a single block.

    Grammar: ['/'] ['N' int] chunk*
    """

    def __init__(self, tokens: Sequence[str], line: int = 1):
        self.stream = TokenStream(tokens)
        self.line = line

    def error(self, cls: type[ParserError], message: str, token: Optional[str] = None,
              offset: int = 0) -> ParserError:
        return cls(message, token=token, line=self.line, index=self.stream.pos + offset)

    def expect(self, what: str) -> str:
        """Take the current token, failing if the line has ended."""
        if not self.stream.chars_left():
            raise self.error(UnexpectedTokenError, f"Expected {what}, got end of line")
        return self.stream.advance()

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def parse_int(self) -> int:
        token = self.expect("an integer")
        try:
            value = int(token, 10)
        except ValueError:
            raise self.error(
                NumericFormatError, f"Cannot convert {token!r} to an integer", token, -1
            ) from None
        if not INT_MIN <= value <= INT_MAX:
            raise self.error(
                NumericFormatError, f"{token!r} is out of range for an integer", token, -1
            )
        return value

    def parse_double(self) -> float:
        token = self.expect("a number")
        try:
            value = float(token)
        except ValueError:
            raise self.error(
                NumericFormatError, f"Cannot convert {token!r} to a double", token, -1
            ) from None
        if not math.isfinite(value):
            raise self.error(
                NumericFormatError, f"{token!r} is out of range for a double", token, -1
            )
        return value

    def parse_address(self, letter: str) -> Address:
        try:
            kind = classify(letter)
        except ParserError as exc:
            raise exc.located(self.line, self.stream.pos - 1) from None
        if kind is AddressKind.INTEGER:
            return IntAddress(self.parse_int())
        return DoubleAddress(self.parse_double())

    # ------------------------------------------------------------------
    # Block prefix
    # ------------------------------------------------------------------

    def parse_slash(self) -> bool:
        if self.stream.peek() == "/":
            self.stream.advance()
            return True
        return False

    def parse_line_number(self) -> Optional[int]:
        if self.stream.peek() == "N":
            self.stream.advance()
            return self.parse_int()
        return None

    # ------------------------------------------------------------------
    # Chunks
    # ------------------------------------------------------------------

    def parse_line_comment(self) -> Comment:
        """Everything after ';' up to the end of the line, joined as-is."""
        self.stream.advance()
        parts = []
        while self.stream.chars_left():
            parts.append(self.stream.advance())
        return Comment(";", ";", "".join(parts))

    def parse_delimited_comment(self, left: str, right: str) -> Comment:
        token = self.stream.advance()
        return Comment(left, right, token[1:-1])

    def parse_chunk(self) -> Chunk:
        """Parse one chunk starting at the current token."""
        token = self.stream.peek()

        if token.startswith("["):
            return self.parse_delimited_comment("[", "]")
        if token.startswith("("):
            return self.parse_delimited_comment("(", ")")
        if token == "%":
            self.stream.advance()
            return Percent()
        if token == ";":
            return self.parse_line_comment()

        if len(token) != 1:
            raise self.error(
                UnexpectedTokenError, f"Expected an address letter, got {token!r}", token
            )
        following = self.stream.peek(1)
        if following is None:
            raise self.error(
                UnexpectedTokenError, f"Expected a value or word after {token!r}, got end of line",
                token,
            )

        self.stream.advance()
        if not is_num_char(following[0]):
            return Word(token)
        return WordAddress(token, self.parse_address(token))

    def parse(self) -> Block:
        """Parse all tokens into a block."""
        deleted = self.parse_slash()
        line_number = self.parse_line_number()

        chunks = []
        while self.stream.chars_left():
            chunks.append(self.parse_chunk())

        return Block(line_number=line_number, deleted=deleted, chunks=chunks)


def parse_block(tokens: Sequence[str], line: int = 1) -> Block:
    """Parse the tokens of one line into a Block."""
    if not tokens:
        return Block()
    return BlockParser(tokens, line).parse()
