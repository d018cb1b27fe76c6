from __future__ import annotations

from scrabkeeper.core.board import Board
from scrabkeeper.core.scoring import score_placement
from scrabkeeper.core.types import Direction, PlacedTile, Tile
from scrabkeeper.core.words import extract_words, infer_direction


def _new(r: int, c: int, ch: str) -> PlacedTile:
    return PlacedTile(r, c, Tile(ch), is_new=True)


def _board(*tiles: tuple[int, int, str]) -> Board:
    b = Board()
    b.place_tiles([PlacedTile(r, c, Tile(ch), is_new=False) for r, c, ch in tiles])
    return b


def test_main_word_on_empty_board() -> None:
    found = extract_words(Board(), [_new(7, 7, "C"), _new(7, 8, "A"), _new(7, 9, "T")])
    assert found.main_word is not None
    assert found.main_word.text == "CAT"
    assert found.cross_words == []


def test_main_word_includes_existing_tiles_before_and_after() -> None:
    b = _board((7, 6, "C"), (7, 8, "T"))
    found = extract_words(b, [_new(7, 7, "A")], Direction.HORIZONTAL)
    assert found.main_word is not None
    assert found.main_word.text == "CAT"
    assert [t.is_new for t in found.main_word.tiles] == [False, True, False]


def test_cross_words_from_each_new_tile() -> None:
    b = _board((7, 7, "A"), (7, 8, "T"))
    found = extract_words(b, [_new(6, 7, "H"), _new(6, 8, "I")], Direction.HORIZONTAL)
    assert [w.text for w in found.all_words] == ["HI", "HA", "IT"]
    assert all(w.direction is Direction.VERTICAL for w in found.cross_words)


def test_single_letter_runs_are_not_words() -> None:
    b = _board((7, 7, "A"))
    found = extract_words(b, [_new(8, 7, "S")], Direction.HORIZONTAL)
    # horizontalne je S samo, vertikalne vznikne AS
    assert found.main_word is None
    assert [w.text for w in found.cross_words] == ["AS"]


def test_infer_direction() -> None:
    assert infer_direction([_new(3, 3, "A")]) is Direction.HORIZONTAL
    assert infer_direction([_new(3, 3, "A"), _new(4, 3, "B")]) is Direction.VERTICAL


def test_empty_pending_gives_nothing() -> None:
    found = extract_words(Board(), [])
    assert found.main_word is None
    assert found.all_words == []


def test_shared_cross_word_is_reported_once() -> None:
    # dve nove kocky pod sebou, hlavny smer vodorovne -> obe vidia ten isty zvisly usek
    pending = [_new(7, 7, "A"), _new(8, 7, "T")]
    found = extract_words(Board(), pending, Direction.HORIZONTAL)
    assert found.main_word is None
    assert [w.text for w in found.cross_words] == ["AT"]

    res = score_placement(Board(), pending, Direction.HORIZONTAL)
    assert [bd.word for bd in res.words] == ["AT"]
    assert res.total == (1 + 1) * 2
