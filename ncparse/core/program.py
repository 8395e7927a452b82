"""
Program assembler: splits program text into lines and parses each one.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .ast_nodes import Block, Program
from .errors import GCodeSyntaxError
from .lexer import lex_line
from .parser import parse_block

logger = logging.getLogger(__name__)


def _parse_blocks(text: str) -> list[Block]:
    blocks = []
    for number, line_text in enumerate(text.split("\n"), start=1):
        if not line_text:
            continue
        try:
            block = parse_block(lex_line(line_text, number), number)
        except GCodeSyntaxError:
            logger.debug("Failed to parse line %d: %r", number, line_text)
            raise
        blocks.append(block)
    logger.debug("Parsed %d blocks", len(blocks))
    return blocks


def parse_program(text: str) -> Program:
    """Parse G-code text into a Program, one block per non-empty line."""
    return Program(_parse_blocks(text))


def parse_program_preserving_text(text: str) -> Program:
    """Like parse_program, but each block keeps its canonical rendering."""
    return Program([block.with_debug_text() for block in _parse_blocks(text)])


# ============================================================================
# Convenience functions
# ============================================================================

def parse_string(text: str, preserve_text: bool = False) -> Program:
    """Parse a G-code string."""
    if preserve_text:
        return parse_program_preserving_text(text)
    return parse_program(text)


def parse_file(path: str | Path, preserve_text: bool = False) -> Program:
    """Parse a G-code file."""
    path = Path(path)
    logger.info("Parsing file: %s", path)
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_string(text, preserve_text=preserve_text)
