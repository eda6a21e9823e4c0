# sanvox/errors.py
"""Errors raised while translating a transcript into SAN.

- `ParseError` : the transcript is not a move the grammar understands.
  It also subclasses `SyntaxError`, so callers catching parse failures the
  usual way keep working.
- `InvalidEnPassant` : "x captures y en passant" named a rank other than 4 or 5.
"""

from __future__ import annotations
from typing import Iterable, Tuple


class MoveError(Exception):
    """Base class for everything `MoveTranslator.parse` raises on bad input."""


def _caret_snippet(src: str, pos: int) -> str:
    """Single-line snippet of `src` with a caret (^) under offset `pos`."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return f"{src[start:end]}\n{' ' * (pos - start)}^"


class ParseError(MoveError, SyntaxError):
    def __init__(self, text: str, pos: int, expected: Iterable[str] = ()):
        self.text = text
        self.pos = pos
        self.expected: Tuple[str, ...] = tuple(expected)
        if self.expected:
            what = "expected one of {" + ", ".join(self.expected) + "}"
        else:
            what = "no move recognised"
        super().__init__(f"Parse error at column {pos + 1}: {what}\n" + _caret_snippet(text, pos))


class InvalidEnPassant(MoveError):
    def __init__(self, rank: str):
        self.rank = rank
        super().__init__("Invalid en passant capture")
