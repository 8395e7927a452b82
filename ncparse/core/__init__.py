from ncparse.core.ast_nodes import (
    Address, AddressKind, DoubleAddress, IntAddress,
    Chunk, ChunkKind, Comment, Percent, Word, WordAddress, word_double, word_int,
    Block, Program,
    ContractViolation, AddressTypeError, ChunkTypeError, BlockError,
)
from ncparse.core.errors import (
    GCodeSyntaxError, LexerError, ParserError,
    UnexpectedTokenError, UnknownAddressLetterError, NumericFormatError,
)
from ncparse.core.lexer import classify, lex_line, tokenize, tokenize_file
from ncparse.core.parser import parse_block
from ncparse.core.program import (
    parse_file, parse_program, parse_program_preserving_text, parse_string,
)

__all__ = [
    "Address", "AddressKind", "DoubleAddress", "IntAddress",
    "Chunk", "ChunkKind", "Comment", "Percent", "Word", "WordAddress",
    "word_double", "word_int",
    "Block", "Program",
    "ContractViolation", "AddressTypeError", "ChunkTypeError", "BlockError",
    "GCodeSyntaxError", "LexerError", "ParserError",
    "UnexpectedTokenError", "UnknownAddressLetterError", "NumericFormatError",
    "classify", "lex_line", "tokenize", "tokenize_file",
    "parse_block",
    "parse_file", "parse_program", "parse_program_preserving_text", "parse_string",
]
