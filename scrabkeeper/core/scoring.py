from __future__ import annotations

from collections.abc import Mapping, Sequence

from .board import Board
from .tiles import get_tile_points, letter_value
from .types import Direction, PlacedTile, Premium, ScoreBreakdown, ScoreResult
from .words import extract_words

BINGO_BONUS = 50
BINGO_TILE_COUNT = 7


def breakdown_word(
    board: Board,
    tiles: Sequence[PlacedTile],
    tile_points: Mapping[str, int] | None = None,
) -> ScoreBreakdown:
    """Vypocita skore jedneho slova s rozpisom.

    Prémie DL/TL/DW/TW (a stred) sa uplatnia len na novych kockach (`is_new`);
    uz potvrdena kocka prispeje iba hodnotou pismena. Blank je vzdy 0.
    """
    points = tile_points if tile_points is not None else get_tile_points()
    word_multiplier = 1
    base = 0
    letter_bonus = 0
    for t in tiles:
        value = letter_value(t.tile, points)
        base += value
        if not t.is_new:
            continue
        premium = board.premium_at(t.row, t.col)
        if premium == Premium.DL:
            letter_bonus += value  # +1x dalsi nasobok (2x celkovo)
        elif premium == Premium.TL:
            letter_bonus += value * 2  # +2x (3x celkovo)
        elif premium in (Premium.DW, Premium.CENTER):
            word_multiplier *= 2
        elif premium == Premium.TW:
            word_multiplier *= 3
    word = "".join(t.letter for t in tiles)
    return ScoreBreakdown(
        word=word,
        base_points=base,
        letter_bonus_points=letter_bonus,
        word_multiplier=word_multiplier,
        total=(base + letter_bonus) * word_multiplier,
    )


def score_word(
    board: Board,
    tiles: Sequence[PlacedTile],
    tile_points: Mapping[str, int] | None = None,
) -> int:
    return breakdown_word(board, tiles, tile_points).total


def score_placement(
    board: Board,
    pending: Sequence[PlacedTile],
    direction: Direction | None = None,
    *,
    tile_points: Mapping[str, int] | None = None,
    bingo_bonus: int = BINGO_BONUS,
) -> ScoreResult:
    """Skore celeho tahu: hlavne slovo + krizove slova + bonus za 7 kociek.

    Predpoklad: tah uz presiel validaciou (`rules.validate`).
    """
    if not pending:
        return ScoreResult()
    points = tile_points if tile_points is not None else get_tile_points()
    found = extract_words(board, pending, direction)
    breakdowns = [breakdown_word(board, w.tiles, points) for w in found.all_words]
    total = sum(bd.total for bd in breakdowns)
    new_count = len(pending)
    bingo = new_count == BINGO_TILE_COUNT
    if bingo:
        total += bingo_bonus
    return ScoreResult(total=total, words=breakdowns, new_tile_count=new_count, bingo=bingo)
