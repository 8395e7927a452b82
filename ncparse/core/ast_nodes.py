"""
Data model produced by the G-code parser: addresses, chunks, blocks, programs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Iterator, Optional

import numpy as np


class ContractViolation(TypeError):
    """An accessor was used on the wrong variant of a value."""


class AddressTypeError(ContractViolation):
    """Integer accessor on a double address, or the reverse."""


class ChunkTypeError(ContractViolation):
    """Variant-specific accessor used on another chunk variant."""


class BlockError(ContractViolation):
    """Line number read from a block that has none."""


# ============================================================================
# Addresses
# ============================================================================

class AddressKind(Enum):
    """Value kind carried by a word address."""
    INTEGER = auto()
    DOUBLE = auto()


class Address(ABC):
    """Typed numeric value attached to an address letter."""

    kind: AddressKind

    def int_value(self) -> int:
        raise AddressTypeError(f"{self!r} does not hold an integer")

    def double_value(self) -> float:
        raise AddressTypeError(f"{self!r} does not hold a double")

    @abstractmethod
    def render(self) -> str:
        """Textual form used when printing a block."""

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class IntAddress(Address):
    value: int

    kind = AddressKind.INTEGER

    def int_value(self) -> int:
        return self.value

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DoubleAddress(Address):
    value: float

    kind = AddressKind.DOUBLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def double_value(self) -> float:
        return self.value

    def render(self) -> str:
        # Positional only: an exponent would not re-lex as one numeric token.
        return np.format_float_positional(np.float64(self.value), trim="-")


# ============================================================================
# Chunks
# ============================================================================

class ChunkKind(Enum):
    """The four chunk variants."""
    COMMENT = auto()
    WORD_ADDRESS = auto()
    PERCENT = auto()
    WORD = auto()


class Chunk(ABC):
    """
    One lexical element of a block.

    The accessors below are defined for every chunk but only succeed on the
    variant that owns the field; anything else raises ChunkTypeError.
    """

    kind: ChunkKind

    def _wrong_variant(self, accessor: str) -> ChunkTypeError:
        return ChunkTypeError(f"{accessor}() is not defined for {self.kind.name} chunks")

    def get_left_delim(self) -> str:
        raise self._wrong_variant("get_left_delim")

    def get_right_delim(self) -> str:
        raise self._wrong_variant("get_right_delim")

    def get_comment_text(self) -> str:
        raise self._wrong_variant("get_comment_text")

    def get_word(self) -> str:
        raise self._wrong_variant("get_word")

    def get_address(self) -> Address:
        raise self._wrong_variant("get_address")

    def get_single_word(self) -> str:
        raise self._wrong_variant("get_single_word")

    @abstractmethod
    def render(self) -> str:
        """Textual form of the chunk."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly form of the chunk."""

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Comment(Chunk):
    """Delimited comment; the delimiters are not part of ``text``."""
    left_delim: str
    right_delim: str
    text: str

    kind = ChunkKind.COMMENT

    def get_left_delim(self) -> str:
        return self.left_delim

    def get_right_delim(self) -> str:
        return self.right_delim

    def get_comment_text(self) -> str:
        return self.text

    def render(self) -> str:
        return f"{self.left_delim}{self.text}{self.right_delim}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "comment",
            "left_delim": self.left_delim,
            "right_delim": self.right_delim,
            "text": self.text,
        }


@dataclass(frozen=True)
class WordAddress(Chunk):
    """Letter plus typed value, e.g. ``G1`` or ``X-2.5``."""
    letter: str
    address: Address

    kind = ChunkKind.WORD_ADDRESS

    def get_word(self) -> str:
        return self.letter

    def get_address(self) -> Address:
        return self.address

    def render(self) -> str:
        return f"{self.letter}{self.address.render()}"

    def to_dict(self) -> dict[str, Any]:
        if self.address.kind is AddressKind.INTEGER:
            value: Any = self.address.int_value()
        else:
            value = self.address.double_value()
        return {
            "type": "word_address",
            "letter": self.letter,
            "kind": self.address.kind.name.lower(),
            "value": value,
        }


@dataclass(frozen=True)
class Percent(Chunk):
    """Bare ``%`` program marker."""

    kind = ChunkKind.PERCENT

    def render(self) -> str:
        return "%"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "percent"}


@dataclass(frozen=True)
class Word(Chunk):
    """Standalone character with no value."""
    character: str

    kind = ChunkKind.WORD

    def get_single_word(self) -> str:
        return self.character

    def render(self) -> str:
        return self.character

    def to_dict(self) -> dict[str, Any]:
        return {"type": "word", "character": self.character}


def word_int(letter: str, value: int) -> WordAddress:
    """Build an integer word address such as ``G1``."""
    return WordAddress(letter, IntAddress(value))


def word_double(letter: str, value: float) -> WordAddress:
    """Build a double word address such as ``X1.5``."""
    return WordAddress(letter, DoubleAddress(value))


# ============================================================================
# Program Structure
# ============================================================================

@dataclass(frozen=True)
class Block:
    """A single block (line) of G-code."""
    line_number: Optional[int] = None
    deleted: bool = False
    chunks: tuple[Chunk, ...] = ()
    debug_text: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chunks", tuple(self.chunks))

    def has_line_number(self) -> bool:
        return self.line_number is not None

    def get_line_number(self) -> int:
        if self.line_number is None:
            raise BlockError("block has no line number")
        return self.line_number

    def is_deleted(self) -> bool:
        return self.deleted

    def size(self) -> int:
        return len(self.chunks)

    def get_chunk(self, i: int) -> Chunk:
        if not 0 <= i < len(self.chunks):
            raise IndexError(f"chunk index {i} out of range for block of {len(self.chunks)}")
        return self.chunks[i]

    def with_debug_text(self, text: Optional[str] = None) -> Block:
        """Return a copy carrying ``text``, or this block's own rendering."""
        return replace(self, debug_text=self.render() if text is None else text)

    def render(self) -> str:
        parts = []
        if self.line_number is not None:
            parts.append(f"N{self.line_number} ")
        for chunk in self.chunks:
            parts.append(chunk.render() + " ")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "line_number": self.line_number,
            "deleted": self.deleted,
            "chunks": [chunk.to_dict() for chunk in self.chunks],
        }
        if self.debug_text is not None:
            data["debug_text"] = self.debug_text
        return data

    def __len__(self) -> int:
        return len(self.chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __getitem__(self, i: int) -> Chunk:
        return self.chunks[i]

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Program:
    """Root node for a G-code program: one block per non-empty line."""
    blocks: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))

    def num_blocks(self) -> int:
        return len(self.blocks)

    def get_block(self, i: int) -> Block:
        if not 0 <= i < len(self.blocks):
            raise IndexError(f"block index {i} out of range for program of {len(self.blocks)}")
        return self.blocks[i]

    def render(self) -> str:
        return "".join(block.render() + "\n" for block in self.blocks)

    def to_dict(self) -> list[dict[str, Any]]:
        return [block.to_dict() for block in self.blocks]

    def axis_table(self, letters: str = "XYZ") -> np.ndarray:
        """
        Tabulate word-address values per block.

        Row i holds, for each letter, the last value that letter takes on
        block i, or NaN when the block does not carry it. Letters match
        case-insensitively. No modal carry-over is applied.
        """
        columns = {letter.upper(): col for col, letter in enumerate(letters)}
        table = np.full((len(self.blocks), len(letters)), np.nan)
        for row, block in enumerate(self.blocks):
            for chunk in block.chunks:
                if chunk.kind is not ChunkKind.WORD_ADDRESS:
                    continue
                col = columns.get(chunk.get_word().upper())
                if col is None:
                    continue
                address = chunk.get_address()
                if address.kind is AddressKind.INTEGER:
                    table[row, col] = address.int_value()
                else:
                    table[row, col] = address.double_value()
        return table

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __getitem__(self, i: int) -> Block:
        return self.blocks[i]

    def __str__(self) -> str:
        return self.render()
