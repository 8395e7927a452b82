"""
Token helpers and the address-letter classifier.
"""

from __future__ import annotations

from ..ast_nodes import AddressKind
from ..errors import UnknownAddressLetterError


# Characters that start (and continue) a numeric token
NUM_CHARS = frozenset("0123456789.-")

# Whitespace skipped between tokens
WHITESPACE = frozenset(" \t\r\n\v\f")

# Paired comment delimiters that nest
COMMENT_DELIMITERS: dict[str, str] = {
    "(": ")",
    "[": "]",
}


# Address letter to value kind mapping (upper case; lookups fold case)
ADDRESS_KINDS: dict[str, AddressKind] = {
    # Linear axes
    "X": AddressKind.DOUBLE,
    "Y": AddressKind.DOUBLE,
    "Z": AddressKind.DOUBLE,

    # Rotary axes
    "A": AddressKind.DOUBLE,
    "B": AddressKind.DOUBLE,
    "C": AddressKind.DOUBLE,

    # Secondary linear axes
    "U": AddressKind.DOUBLE,
    "V": AddressKind.DOUBLE,
    "W": AddressKind.DOUBLE,

    # Arc center offsets
    "I": AddressKind.DOUBLE,
    "J": AddressKind.DOUBLE,
    "K": AddressKind.DOUBLE,

    # Feed, radius, peck depth, spindle speed, extrusion
    "F": AddressKind.DOUBLE,
    "R": AddressKind.DOUBLE,
    "Q": AddressKind.DOUBLE,
    "S": AddressKind.DOUBLE,
    "E": AddressKind.DOUBLE,

    # Codes and indices
    "G": AddressKind.INTEGER,   # Preparatory
    "M": AddressKind.INTEGER,   # Miscellaneous
    "H": AddressKind.INTEGER,   # Tool length offset
    "D": AddressKind.INTEGER,   # Cutter radius offset
    "T": AddressKind.INTEGER,   # Tool
    "N": AddressKind.INTEGER,   # Block number
    "O": AddressKind.INTEGER,   # Program number
    "P": AddressKind.INTEGER,   # Parameter / dwell / subprogram
    "L": AddressKind.INTEGER,   # Loop count
}


def is_num_char(c: str) -> bool:
    """True for a character that can appear in a numeric token."""
    return len(c) == 1 and c in NUM_CHARS


def classify(letter: str) -> AddressKind:
    """Get the value kind for an address letter."""
    kind = ADDRESS_KINDS.get(letter.upper())
    if kind is None:
        raise UnknownAddressLetterError(
            f"Unknown address letter: {letter!r}", token=letter
        )
    return kind
