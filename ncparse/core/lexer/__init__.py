"""
G-Code Lexer module: line tokenizer and address classifier.
"""

from .tokens import (
    ADDRESS_KINDS,
    NUM_CHARS,
    classify,
    is_num_char,
)
from .lexer import (
    LineLexer,
    LexerError,
    lex_line,
    tokenize,
    tokenize_file,
)

__all__ = [
    # Classifier
    "ADDRESS_KINDS",
    "NUM_CHARS",
    "classify",
    "is_num_char",
    # Lexer
    "LineLexer",
    "LexerError",
    "lex_line",
    "tokenize",
    "tokenize_file",
]
