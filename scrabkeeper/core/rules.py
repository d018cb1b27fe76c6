"""Pravidlá kladenia slova na dosku (bez slovníka).

Validácia vracia druh chyby (`PlacementError`), nie len bool, aby UI
vedelo odlíšiť „oprav konflikty“ od „neplatné umiestnenie“ či „musí
prejsť stredom“.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .board import Board
from .types import Direction, PlacedTile, PlacementRequest, Tile


class PlacementError(Enum):
    """Dôvod, prečo návrh ťahu nie je možné položiť."""

    EMPTY = "empty"
    NOT_IN_LINE = "not_in_line"
    OUT_OF_BOUNDS = "out_of_bounds"
    LETTER_CONFLICT = "letter_conflict"
    NO_NEW_TILES = "no_new_tiles"
    MUST_COVER_CENTER = "must_cover_center"
    DISCONNECTED = "disconnected"


_ERROR_MESSAGES: dict[PlacementError, str] = {
    PlacementError.EMPTY: "Enter a word to place",
    PlacementError.NOT_IN_LINE: "Tiles must form one unbroken row or column",
    PlacementError.OUT_OF_BOUNDS: "Word does not fit on the board",
    PlacementError.LETTER_CONFLICT: "Letter conflict - change word to match existing tiles",
    PlacementError.NO_NEW_TILES: "Word must place at least one new tile",
    PlacementError.MUST_COVER_CENTER: "First word must cover the center star",
    PlacementError.DISCONNECTED: "Word must connect to existing tiles on the board",
}


@dataclass
class ValidationResult:
    """Výsledok validácie návrhu.

    - ok: či sa dá návrh položiť
    - error: druh chyby (alebo None pri úspechu)
    - new_tiles: kocky, ktoré by sa reálne položili (bez polí, cez ktoré
      slovo iba prechádza)
    """

    ok: bool
    error: PlacementError | None = None
    new_tiles: list[PlacedTile] = field(default_factory=list)


def describe_error(error: PlacementError) -> str:
    """Krátka hláška pre UI k danému druhu chyby."""
    return _ERROR_MESSAGES[error]


def is_conflict(error: PlacementError | None) -> bool:
    """Či ide o chybu typu „oprav konflikty“ (vs. „neplatné umiestnenie“)."""
    return error is PlacementError.LETTER_CONFLICT


def covers_center(board: Board, cells: list[tuple[int, int]]) -> bool:
    """Ci prvy tah prechadza stredom."""
    return board.center in cells


def connected_to_existing(board: Board, request: PlacementRequest) -> bool:
    """Či sa návrh dotýka existujúcich kociek.

    Stačí jedno z:
    - slovo prechádza cez potvrdenú kocku,
    - nové pole má suseda kolmo na smer slova,
    - potvrdená kocka leží tesne pred začiatkom alebo za koncom slova.
    """
    cells = request.cells()
    pr, pc = request.direction.perpendicular.step
    for r, c in cells:
        if board.has_tile(r, c):
            return True
        if board.has_tile(r - pr, c - pc) or board.has_tile(r + pr, c + pc):
            return True

    dr, dc = request.direction.step
    first_r, first_c = cells[0]
    last_r, last_c = cells[-1]
    return board.has_tile(first_r - dr, first_c - dc) or board.has_tile(last_r + dr, last_c + dc)


def validate(board: Board, request: PlacementRequest) -> ValidationResult:
    """Overí návrh voči potvrdeným kockám na doske.

    Poradie pravidiel: hranice, konflikt písmen, aspoň jedna nová kocka,
    stred pri prvom ťahu, spojitosť pri ďalších ťahoch.
    """
    if not request.letters:
        return ValidationResult(False, PlacementError.EMPTY)

    cells = request.cells()
    if not all(board.inside(r, c) for r, c in cells):
        return ValidationResult(False, PlacementError.OUT_OF_BOUNDS)

    new_tiles: list[PlacedTile] = []
    for (r, c), tile in zip(cells, request.letters):
        existing = board.tile_at(r, c)
        if existing is None:
            new_tiles.append(PlacedTile(r, c, tile, is_new=True))
            continue
        # blank aj bezna kocka sa porovnavaju len podla pismena
        if existing.letter.upper() != tile.letter.upper():
            return ValidationResult(False, PlacementError.LETTER_CONFLICT)

    if not new_tiles:
        return ValidationResult(False, PlacementError.NO_NEW_TILES)

    if board.is_empty():
        if not covers_center(board, cells):
            return ValidationResult(False, PlacementError.MUST_COVER_CENTER)
    elif not connected_to_existing(board, request):
        return ValidationResult(False, PlacementError.DISCONNECTED)

    return ValidationResult(True, None, new_tiles)


def placements_in_line(tiles: list[PlacedTile]) -> Direction | None:
    """Ci su vsetky polozene kocky v jednom riadku alebo stlpci."""
    rows = {t.row for t in tiles}
    cols = {t.col for t in tiles}
    if len(rows) == 1:
        return Direction.HORIZONTAL
    if len(cols) == 1:
        return Direction.VERTICAL
    return None


def request_from_pending(
    board: Board,
    pending: Sequence[PlacedTile],
    direction: Direction | None = None,
) -> PlacementRequest | None:
    """Zostaví návrh ťahu z jednotlivo položených kociek.

    Úsek ide od prvej po poslednú čakajúcu kocku a medzery musia vyplniť
    potvrdené kocky. Vráti None, ak kocky nie sú v jednom riadku/stĺpci
    alebo je v úseku prázdne pole.
    """
    if not pending:
        return None
    line = placements_in_line(list(pending))
    if line is None:
        return None
    if len(pending) > 1 or direction is None:
        direction = line
    by_pos = {t.pos: t.tile for t in pending}
    first = min(pending, key=lambda t: (t.row, t.col))
    last = max(pending, key=lambda t: (t.row, t.col))
    dr, dc = direction.step
    length = (last.row - first.row) + (last.col - first.col) + 1

    letters: list[Tile] = []
    for i in range(length):
        pos = (first.row + dr * i, first.col + dc * i)
        tile = by_pos.get(pos) or board.tile_at(*pos)
        if tile is None:
            return None
        letters.append(tile)
    return PlacementRequest(first.row, first.col, direction, tuple(letters))


def validate_pending(
    board: Board,
    pending: Sequence[PlacedTile],
    direction: Direction | None = None,
) -> ValidationResult:
    """Overí čakajúce kocky rovnakými pravidlami ako `validate`."""
    if not pending:
        return ValidationResult(False, PlacementError.EMPTY)
    request = request_from_pending(board, pending, direction)
    if request is None:
        return ValidationResult(False, PlacementError.NOT_IN_LINE)
    return validate(board, request)
