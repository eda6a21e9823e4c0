import pytest

from sanvox import (
    AliasTable, InvalidEnPassant, MoveError, MoveTranslator, ParseError, text_to_san,
)

FIXTURES = [
    ("bishop to D7", "Bd7"),
    ("rook A1", "Ra1"),
    ("queen captures H8", "Qxh8"),
    ("king takes F5", "Kxf5"),
    ("knight a to B4", "Nab4"),
    ("Bishop 2 h8", "B2h8"),
    ("Queen C2D3", "Qc2d3"),
    ("F captures G4 en passant", "fxg3"),
    ("a takes b5 en passant", "axb4"),
    ("E5", "e5"),
    ("h take G6", "hxg6"),
    ("c8 promote to Queen", "c8=Q"),
    ("F captures E8 promote to knight", "fxe8=N"),
    ("rook takes b7 mate", "Rxb7#"),
    ("Bishop A c3 check", "Bac3+"),
    ("E7 check", "e7+"),
    ("castle kingside", "O-O"),
    ("castle Queenside", "O-O-O"),
    ("Black Resigns", "1-0"),
    ("white resigns", "0-1"),
]


@pytest.fixture(scope="module")
def translator():
    return MoveTranslator()


@pytest.mark.parametrize("text, expected", FIXTURES)
def test_fixture_table(translator, text, expected):
    assert translator.parse(text) == expected


@pytest.mark.parametrize("text, expected", FIXTURES)
def test_case_insensitive(translator, text, expected):
    assert translator.parse(text.upper()) == expected
    assert translator.parse(text.lower()) == expected


def test_invalid_en_passant(translator):
    with pytest.raises(InvalidEnPassant) as exc:
        translator.parse("g takes h7 en passant")
    assert exc.value.rank == "7"
    assert str(exc.value) == "Invalid en passant capture"
    assert isinstance(exc.value, MoveError)


def test_plain_capture_onto_same_square_is_fine(translator):
    assert translator.parse("g takes h7") == "gxh7"


@pytest.mark.parametrize("text, expected", [
    ("bishop a takes e4", "Baxe4"),
    ("knight moves to f3", "Nf3"),
    ("knight move to f3", "Nf3"),
    ("queen h4 takes e1", "Qh4xe1"),
    ("rook 1 a1", "R1a1"),
    ("c takes d8 promote to rook check", "cxd8=R+"),
    ("f captures g4 en passant check", "fxg3+"),
    ("castle queenside check", "O-O-O+"),
    ("castle kingside mate", "O-O#"),
    ("queen f7 checkmate", "Qf7#"),
    ("night to c3", "Nc3"),
])
def test_more_phrasings(translator, text, expected):
    assert translator.parse(text) == expected


def test_ambiguous_destination_is_reproduced_verbatim(translator):
    # no board knowledge: two rooks could reach d1, the output is still Rd1
    assert translator.parse("rook to d1") == "Rd1"


def test_whitespace_runs_and_surrounding_spaces(translator):
    assert translator.parse("bishop   to    D7") == "Bd7"
    assert translator.parse("  bishop to D7  ") == "Bd7"
    assert translator.parse("QueenC2D3") == "Qc2d3"


def test_deterministic(translator):
    assert [translator.parse("rook takes b7 mate") for _ in range(3)] == ["Rxb7#"] * 3
    for _ in range(3):
        with pytest.raises(ParseError):
            translator.parse("rook takes")


@pytest.mark.parametrize("text", [
    "E5 x",
    "castle kingside please",
    "bishop to D7 check!",
    "white resigns check",
    "rook A1 A",
])
def test_trailing_garbage_fails(translator, text):
    with pytest.raises(ParseError):
        translator.parse(text)


@pytest.mark.parametrize("text", [
    "",
    "check",
    "bishop",
    "pawn to e4",
    "king to i9",
    "castle",
])
def test_not_a_move(translator, text):
    with pytest.raises(ParseError):
        translator.parse(text)


def test_parse_error_reports_farthest_position(translator):
    with pytest.raises(ParseError) as exc:
        translator.parse("bishop to z9")
    err = exc.value
    assert err.pos == 10
    assert "[a-h]i" in err.expected
    assert isinstance(err, SyntaxError)
    assert "^" in str(err)


def test_parse_error_expects_end_of_input(translator):
    with pytest.raises(ParseError) as exc:
        translator.parse("E5 x")
    assert exc.value.pos == 3
    assert "end of input" in exc.value.expected


def test_rejects_non_string(translator):
    with pytest.raises(TypeError):
        translator.parse(None)


def test_to_san_alias(translator):
    assert translator.to_san("E5") == "e5"


def test_text_to_san():
    assert text_to_san("castle kingside") == "O-O"


# ---- aliases ----

def test_default_aliases_accept_night():
    tr = MoveTranslator()
    assert tr.parse("NIGHT to C3") == "Nc3"
    assert tr.parse("night takes e5 check") == "Nxe5+"


def test_empty_alias_table_disables_defaults():
    tr = MoveTranslator(aliases={})
    with pytest.raises(ParseError):
        tr.parse("night to c3")
    assert tr.parse("knight to c3") == "Nc3"


@pytest.mark.parametrize("canonical, aliased", [
    ("queen takes H8", "queen tax H8"),
    ("queen takes H8", "queen TEX H8"),
    ("rook 4 a1", "rook store a1"),
    ("queen to h4", "queen to hfour"),
    ("b4", "p4"),
    ("a takes b5 en passant", "a takes b5 on passant"),
])
def test_alias_substitution_invariance(canonical, aliased):
    tr = MoveTranslator(aliases={
        "takes": ["tex", "tax"],
        "4": ["store", "four"],
        "b": ["p"],
        "en passant": ["on passant"],
    })
    assert tr.parse(aliased) == tr.parse(canonical)


def test_aliases_tried_in_declared_order():
    first_wins = MoveTranslator(aliases={"takes": ["tak", "takin"]})
    with pytest.raises(ParseError):
        first_wins.parse("queen takin h8")
    assert MoveTranslator(aliases={"takes": ["takin", "tak"]}).parse("queen takin h8") == "Qxh8"


def test_canonical_form_tried_before_alias():
    # "f" is itself a file, so "for" is never read as the digit alias here
    tr = MoveTranslator(aliases={"4": ["for"]})
    with pytest.raises(ParseError):
        tr.parse("rook for a1")


def test_instances_do_not_share_aliases():
    loose = MoveTranslator(aliases={"captures": ["kaptures"]})
    strict = MoveTranslator(aliases={})
    assert loose.parse("queen kaptures h8") == "Qxh8"
    with pytest.raises(ParseError):
        strict.parse("queen kaptures h8")


def test_accepts_alias_table_instance():
    tr = MoveTranslator(aliases=AliasTable({"rook": ["brook"]}))
    assert tr.parse("brook a1") == "Ra1"


def test_castle_and_resign_via_alias():
    tr = MoveTranslator(aliases={"kingside": ["king side"], "black": ["block"]})
    assert tr.parse("castle king side") == "O-O"
    assert tr.parse("block resigns") == "1-0"
