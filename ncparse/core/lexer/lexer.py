"""
G-Code Lexer: splits one line of NC text into token strings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from ..errors import LexerError
from .tokens import COMMENT_DELIMITERS, WHITESPACE, is_num_char


class LineLexer:
    """
    Character-level lexer for a single block of G-code.

    Tokens are plain strings: a numeric run, a whole (possibly nested)
    delimited comment including its delimiters, or one character.
    """

    def __init__(self, text: str, line: int = 1):
        self.text = text
        self.pos = 0
        self.line = line

    @property
    def current_char(self) -> str | None:
        """Get current character or None at end of line."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    @property
    def column(self) -> int:
        return self.pos + 1

    def chars_left(self) -> bool:
        return self.pos < len(self.text)

    def advance(self) -> None:
        if self.pos < len(self.text):
            self.pos += 1

    def skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def read_number(self) -> str:
        """Read a run of digits, dots and minus signs."""
        start = self.pos
        while self.current_char is not None and is_num_char(self.current_char):
            self.advance()
        return self.text[start:self.pos]

    def read_comment(self, open_char: str, close_char: str) -> str:
        """Read a nested comment, delimiters included."""
        start = self.pos
        depth = 0
        while True:
            char = self.current_char
            if char == open_char:
                depth += 1
            elif char == close_char:
                depth -= 1
            self.advance()
            if not self.chars_left() or depth <= 0:
                break
        return self.text[start:self.pos]

    def next_token(self) -> str:
        """Get next token; the caller checks chars_left() first."""
        char = self.current_char

        if is_num_char(char):
            return self.read_number()

        if char in COMMENT_DELIMITERS:
            return self.read_comment(char, COMMENT_DELIMITERS[char])

        if char in (")", "]"):
            raise LexerError(f"Unmatched closing delimiter '{char}'", self.line, self.column)

        self.advance()
        return char

    def tokenize(self) -> list[str]:
        """Tokenize the whole line."""
        return list(self)

    def __iter__(self) -> Iterator[str]:
        self.skip_whitespace()
        while self.chars_left():
            yield self.next_token()
            self.skip_whitespace()


def lex_line(text: str, line: int = 1) -> list[str]:
    """Tokenize one line of G-code."""
    return LineLexer(text, line).tokenize()


def tokenize(text: str) -> list[list[str]]:
    """Tokenize every non-empty line of a program."""
    return [
        lex_line(line_text, number)
        for number, line_text in enumerate(text.split("\n"), start=1)
        if line_text
    ]


def tokenize_file(path: str | Path) -> list[list[str]]:
    """Convenience function to tokenize a G-code file."""
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return tokenize(text)
