"""
Error types raised while lexing and parsing G-code text.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


class GCodeSyntaxError(ValueError):
    """Base class for every input error found by the lexer or the parser."""


@dataclass(eq=False)
class LexerError(GCodeSyntaxError):
    """Lexer error with position information."""
    message: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"Lexer Error at L{self.line}, C{self.column}: {self.message}"


@dataclass(eq=False)
class ParserError(GCodeSyntaxError):
    """Parser error with the offending token and its position in the line."""
    message: str
    token: Optional[str] = None
    line: Optional[int] = None
    index: Optional[int] = None

    def located(self, line: int, index: int) -> ParserError:
        """Return a copy of this error pinned to a line and token index."""
        return replace(self, line=line, index=index)

    def __str__(self) -> str:
        where = []
        if self.line is not None:
            where.append(f"L{self.line}")
        if self.index is not None:
            where.append(f"token {self.index}")
        if self.token is not None:
            where.append(repr(self.token))
        if where:
            return f"Parser Error at {', '.join(where)}: {self.message}"
        return f"Parser Error: {self.message}"


class UnexpectedTokenError(ParserError):
    """A required token is missing or has the wrong shape."""


class UnknownAddressLetterError(ParserError):
    """A word-address letter outside the classified set."""


class NumericFormatError(ParserError):
    """A numeric token cannot be converted to an int or a float."""
