import pytest

from sanvox.actions import (
    ACTIONS, PIECE_LETTERS, assemble, castle, en_passant, promotion, resign,
    resolve_en_passant_rank,
)
from sanvox.errors import InvalidEnPassant


def test_en_passant_landing_rank():
    assert resolve_en_passant_rank("4") == "3"
    assert resolve_en_passant_rank("5") == "4"


@pytest.mark.parametrize("rank", ["1", "2", "3", "6", "7", "8"])
def test_en_passant_other_ranks(rank):
    with pytest.raises(InvalidEnPassant) as exc:
        resolve_en_passant_rank(rank)
    assert exc.value.rank == rank


def test_en_passant_action():
    assert en_passant(None, parts=["f", "", "x"], dest_file="g", dest_rank="4") == "fxg3"


def test_assemble():
    assert assemble(["B", ["", "a"], None, ["x", ["e", "4"]]]) == "Baxe4"
    assert assemble(None) == ""
    assert assemble("O-O") == "O-O"


def test_castle_resign_promotion():
    assert castle("castle kingside", side="KingSide") == "O-O"
    assert castle("castle queenside", side="queenside") == "O-O-O"
    assert resign(None, player="Black") == "1-0"
    assert resign(None, player="white") == "0-1"
    assert promotion(None, piece="N") == "=N"


def test_constant_actions():
    for name, letter in PIECE_LETTERS.items():
        assert ACTIONS[name]("whatever") == letter
    assert ACTIONS["capture"]("takes") == "x"
    assert ACTIONS["check"]("check") == "+"
    assert ACTIONS["checkmate"]("mate") == "#"
    assert ACTIONS["empty"]([" ", " "]) == ""
    assert ACTIONS["lower"]("E") == "e"
    assert ACTIONS["join"](["c", "8"]) == "c8"
