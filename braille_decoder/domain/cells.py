from __future__ import annotations

"""Braille cell normalisation.

Every input character becomes one dot value:
  - 0..63 for the Unicode Braille Patterns block (six-dot cells only)
  - NEWLINE for "\\n"
  - NOT_BRAILLE for anything else (passed through unchanged by the decoder)
"""

from typing import Final, Iterable


BRAILLE_BASE: Final[int] = 0x2800
CELL_COUNT: Final[int] = 64

NEWLINE: Final[int] = 255
NOT_BRAILLE: Final[int] = -1

BLANK: Final[int] = 0


def cell_value(ch: str) -> int:
    code = ord(ch)
    if BRAILLE_BASE <= code < BRAILLE_BASE + CELL_COUNT:
        return code - BRAILLE_BASE
    if ch == "\n":
        return NEWLINE
    return NOT_BRAILLE


def normalize(text: str) -> list[int]:
    return [cell_value(ch) for ch in text]


def cell_char(dot: int) -> str:
    """Inverse of cell_value() for cells and the newline sentinel."""
    if dot == NEWLINE:
        return "\n"
    if 0 <= dot < CELL_COUNT:
        return chr(BRAILLE_BASE + dot)
    raise ValueError("Not a Braille dot value: %r" % (dot,))


def parse_cells(pattern: Iterable[str]) -> tuple[int, ...]:
    """Convert a string of Braille characters (e.g. "⠍⠗") to dot values.

    Raises:
        ValueError: if any character is outside the six-dot Braille block.
    """
    dots = tuple(cell_value(ch) for ch in pattern)
    if any(d < 0 or d >= CELL_COUNT for d in dots):
        raise ValueError("Not a Braille cell pattern: %r" % (pattern,))
    return dots
