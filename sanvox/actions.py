# sanvox/actions.py
"""Semantic actions for the move grammar.

Every action is called as ``fn(value, **labels)`` where `value` is what the
alternative matched (a string, or a nested list of fragments for a sequence)
and `labels` holds the ``name:expr`` captures of that alternative. Actions
are pure: they only build SAN fragments.
"""

from __future__ import annotations
from typing import Any, Callable, Dict

from .errors import InvalidEnPassant

PIECE_LETTERS = {"king": "K", "queen": "Q", "rook": "R", "bishop": "B", "knight": "N"}

# en passant is spoken naming the square the captured pawn stands on;
# SAN names the square the capturing pawn lands on, one rank behind it
EN_PASSANT_LANDING = {
    "4": "3",  # black capturing a white pawn
    "5": "4",  # white capturing a black pawn
}


def assemble(value: Any) -> str:
    """Concatenate fragments in match order, skipping unmatched optionals."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return "".join(assemble(v) for v in value)


def resolve_en_passant_rank(rank: str) -> str:
    try:
        return EN_PASSANT_LANDING[rank]
    except KeyError:
        raise InvalidEnPassant(rank)


def _const(fragment: str) -> Callable[..., str]:
    def action(value: Any, **labels: Any) -> str:
        return fragment
    action.__name__ = f"const_{fragment!r}"
    return action


def join(value: Any, **labels: Any) -> str:
    return assemble(value)


def lower(value: Any, **labels: Any) -> str:
    return assemble(value).lower()


def promotion(value: Any, piece: str) -> str:
    return "=" + piece


def castle(value: Any, side: str) -> str:
    return "O-O" if "king" in side.lower() else "O-O-O"


def resign(value: Any, player: str) -> str:
    # the side that resigns loses
    return "1-0" if player.lower() == "black" else "0-1"


def en_passant(value: Any, parts: Any, dest_file: str, dest_rank: str) -> str:
    return assemble(parts) + dest_file + resolve_en_passant_rank(dest_rank)


ACTIONS: Dict[str, Callable[..., Any]] = {
    "join": join,
    "lower": lower,
    "empty": _const(""),
    "capture": _const("x"),
    "check": _const("+"),
    "checkmate": _const("#"),
    "promotion": promotion,
    "castle": castle,
    "resign": resign,
    "en_passant": en_passant,
}
ACTIONS.update({name: _const(letter) for name, letter in PIECE_LETTERS.items()})
