from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .types import PlacedTile, Premium, Tile

BOARD_SIZE = 15

# standardne rozlozenie je pribalene v scrabkeeper/assets/
DEFAULT_PREMIUMS_PATH = Path(__file__).resolve().parent.parent / "assets" / "premiums.json"

_PREMIUM_TAGS: dict[str, Premium] = {p.value: p for p in Premium}


@dataclass
class Cell:
    """Bunka na doske."""
    letter: str | None = None  # potvrdene pismeno
    is_blank: bool = False        # ci je to blank (0 bodov)
    premium: Premium | None = None  # DL/TL/DW/TW/CENTER, po vytvoreni sa nemeni

    @property
    def tile(self) -> Tile | None:
        if self.letter is None:
            return None
        return Tile(self.letter, self.is_blank)


class Board:
    """Model dosky NxN s premiami; drzi iba potvrdene kocky.

    Rozlozenie premii sa nacita z JSON (zoznam riadkov so znackami
    "DL"/"TL"/"DW"/"TW"/"ST"/""), alebo sa preda priamo cez `layout`.
    """
    def __init__(
        self,
        premiums_path: str | None = None,
        *,
        layout: Sequence[Sequence[str]] | None = None,
    ) -> None:
        if layout is None:
            layout = self._read_layout(premiums_path or str(DEFAULT_PREMIUMS_PATH))
        self.size = len(layout)
        if self.size == 0 or any(len(row) != self.size for row in layout):
            raise ValueError("Rozlozenie premii musi byt stvorcova mriezka")
        self.cells: list[list[Cell]] = [
            [Cell() for _ in range(self.size)] for _ in range(self.size)
        ]
        self._load_premiums(layout)
        self.center = self._find_center()

    @staticmethod
    def _read_layout(path: str) -> list[list[str]]:
        p = Path(path)
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Neplatny subor premii: {path}")
        return data

    def _load_premiums(self, layout: Sequence[Sequence[str]]) -> None:
        for r in range(self.size):
            for c in range(self.size):
                tag = layout[r][c] or ""
                if not tag:
                    continue
                try:
                    self.cells[r][c].premium = _PREMIUM_TAGS[tag]
                except KeyError:
                    raise ValueError(f"Neznama premia {tag!r} na ({r},{c})") from None

    def _find_center(self) -> tuple[int, int]:
        # hviezda z rozlozenia, inak geometricky stred
        for r in range(self.size):
            for c in range(self.size):
                if self.cells[r][c].premium is Premium.CENTER:
                    return (r, c)
        return (self.size // 2, self.size // 2)

    def inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def tile_at(self, row: int, col: int) -> Tile | None:
        """Potvrdena kocka na poli (alebo None, aj mimo dosky)."""
        if not self.inside(row, col):
            return None
        return self.cells[row][col].tile

    def has_tile(self, row: int, col: int) -> bool:
        return self.inside(row, col) and self.cells[row][col].letter is not None

    def premium_at(self, row: int, col: int) -> Premium | None:
        return self.cells[row][col].premium

    def is_empty(self) -> bool:
        return not any(cell.letter for row in self.cells for cell in row)

    def place_tiles(self, tiles: Iterable[PlacedTile]) -> None:
        """Potvrdi kocky na dosku; obsadene pole je chyba volajuceho."""
        tiles = list(tiles)
        for t in tiles:
            if not self.inside(t.row, t.col):
                raise ValueError(f"Pole ({t.row},{t.col}) je mimo dosky")
            if self.has_tile(t.row, t.col):
                raise ValueError(f"Pole ({t.row},{t.col}) je uz obsadene")
        for t in tiles:
            cell = self.cells[t.row][t.col]
            cell.letter = t.letter
            cell.is_blank = t.is_blank

    def remove_tiles(self, positions: Iterable[tuple[int, int]]) -> None:
        """Odstrani kocky (pouzite pri 'Undo' posledneho tahu)."""
        for r, c in positions:
            cell = self.cells[r][c]
            cell.letter = None
            cell.is_blank = False

    def clear(self) -> None:
        for row in self.cells:
            for cell in row:
                cell.letter = None
                cell.is_blank = False

    def committed_tiles(self) -> list[PlacedTile]:
        """Vsetky potvrdene kocky po riadkoch (is_new=False)."""
        out: list[PlacedTile] = []
        for r in range(self.size):
            for c in range(self.size):
                tile = self.cells[r][c].tile
                if tile is not None:
                    out.append(PlacedTile(r, c, tile, is_new=False))
        return out
