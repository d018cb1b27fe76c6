"""Odvodenie slov, ktoré vytvorí čakajúci (nepotvrdený) ťah.

Hlavné slovo ide v smere ťahu a zahŕňa aj potvrdené kocky pred a za
novými kockami. Krížové slová sa hľadajú kolmo, iba z nových kociek.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .board import Board
from .rules import placements_in_line
from .types import Direction, PlacedTile, Word


@dataclass
class ExtractedWords:
    """Hlavné slovo (alebo None, ak má menej ako 2 písmená) + krížové slová."""

    main_word: Word | None = None
    cross_words: list[Word] = field(default_factory=list)

    @property
    def all_words(self) -> list[Word]:
        head = [self.main_word] if self.main_word is not None else []
        return head + self.cross_words


class _Overlay:
    """Pohľad na dosku s čakajúcimi kockami položenými „navrch“."""

    def __init__(self, board: Board, pending: Sequence[PlacedTile]) -> None:
        self.board = board
        self.pending = {t.pos: t for t in pending}

    def at(self, row: int, col: int) -> PlacedTile | None:
        p = self.pending.get((row, col))
        if p is not None:
            return PlacedTile(row, col, p.tile, is_new=True)
        tile = self.board.tile_at(row, col)
        if tile is None:
            return None
        return PlacedTile(row, col, tile, is_new=False)

    def run(self, row: int, col: int, direction: Direction) -> list[PlacedTile]:
        """Celý súvislý úsek kociek cez (row, col) v danom smere."""
        dr, dc = direction.step
        r, c = row, col
        while self.at(r - dr, c - dc) is not None:
            r -= dr
            c -= dc
        tiles: list[PlacedTile] = []
        tile = self.at(r, c)
        while tile is not None:
            tiles.append(tile)
            r += dr
            c += dc
            tile = self.at(r, c)
        return tiles


def infer_direction(pending: Sequence[PlacedTile]) -> Direction:
    """Smer čakajúcich kociek: jeden riadok (aj jediná kocka) = vodorovne, inak zvislo."""
    return placements_in_line(list(pending)) or Direction.VERTICAL


def extract_words(
    board: Board,
    pending: Sequence[PlacedTile],
    direction: Direction | None = None,
) -> ExtractedWords:
    """Nájde hlavné + všetky nové krížové slová pre čakajúce kocky.

    Predpoklad: ťah už prešiel `rules.validate`; pre neplatný ťah
    výsledok nie je definovaný.
    """
    if not pending:
        return ExtractedWords()
    if direction is None:
        direction = infer_direction(pending)
    view = _Overlay(board, pending)

    # hlavne slovo: od prvej novej kocky v smere tahu
    first = min(pending, key=lambda t: (t.row, t.col))
    main_tiles = view.run(first.row, first.col, direction)
    main_word = Word(main_tiles, direction) if len(main_tiles) >= 2 else None

    # krizove slova: pre kazdu novu kocku kolmy smer, rovnaky usek len raz
    cross_dir = direction.perpendicular
    cross_words: list[Word] = []
    seen: set[frozenset[tuple[int, int]]] = set()
    for tile in sorted(pending, key=lambda t: (t.row, t.col)):
        run = view.run(tile.row, tile.col, cross_dir)
        if len(run) < 2:  # jednopismenne sa nepocita
            continue
        word = Word(run, cross_dir)
        if word.positions in seen:
            continue
        seen.add(word.positions)
        cross_words.append(word)

    return ExtractedWords(main_word, cross_words)
