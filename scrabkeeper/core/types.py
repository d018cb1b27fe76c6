from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Pozn.: Komentare su v slovencine, API a nazvy v anglictine.

class Direction(Enum):
    """Smer kladenia slova na doske."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> tuple[int, int]:
        """Posun (dr, dc) o jedno pole v tomto smere."""
        return (0, 1) if self is Direction.HORIZONTAL else (1, 0)

    @property
    def perpendicular(self) -> Direction:
        return Direction.VERTICAL if self is Direction.HORIZONTAL else Direction.HORIZONTAL


class Premium(Enum):
    """Premiove polia na doske."""
    DL = "DL"  # Double Letter
    TL = "TL"  # Triple Letter
    DW = "DW"  # Double Word
    TW = "TW"  # Triple Word
    CENTER = "ST"  # stredova hviezda, boduje ako DW


def normalise_letter(letter: str) -> str:
    """Vrati pismeno v UPPERCASE, ak upper() zachova jeden znak (napr. 'ß' ostane 'ß')."""
    upper = letter.upper()
    return upper if len(upper) == 1 else letter


@dataclass(frozen=True)
class Tile:
    """Jedna kocka: pismeno + explicitny priznak blanku.

    Blank nesie pismeno, ktore zastupuje, ale vzdy ma hodnotu 0 bodov.
    """
    letter: str
    is_blank: bool = False

    def __post_init__(self) -> None:
        if len(self.letter) != 1 or not self.letter.isalpha():
            raise ValueError(f"Neplatne pismeno kocky: {self.letter!r}")
        object.__setattr__(self, "letter", normalise_letter(self.letter))


@dataclass(frozen=True)
class PlacedTile:
    """Kocka na konkretnej suradnici; `is_new` = sucast aktualneho (nepotvrdeneho) tahu."""
    row: int
    col: int
    tile: Tile
    is_new: bool = True

    @property
    def letter(self) -> str:
        return self.tile.letter

    @property
    def is_blank(self) -> bool:
        return self.tile.is_blank

    @property
    def pos(self) -> tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class PlacementRequest:
    """Navrh tahu: zaciatok, smer a cele slovo vratane pismen, ktore uz na doske su."""
    start_row: int
    start_col: int
    direction: Direction
    letters: tuple[Tile, ...]

    def cells(self) -> list[tuple[int, int]]:
        """Suradnice, ktore by slovo obsadilo (bez kontroly hranic)."""
        dr, dc = self.direction.step
        return [
            (self.start_row + dr * i, self.start_col + dc * i)
            for i in range(len(self.letters))
        ]

    @property
    def word(self) -> str:
        return "".join(t.letter for t in self.letters)


@dataclass
class Word:
    """Suvisly usek kociek v jednom smere (hlavne alebo krizove slovo)."""
    tiles: list[PlacedTile]
    direction: Direction

    @property
    def text(self) -> str:
        return "".join(t.letter for t in self.tiles)

    @property
    def positions(self) -> frozenset[tuple[int, int]]:
        return frozenset(t.pos for t in self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)


@dataclass
class ScoreBreakdown:
    """Detailne skore jedneho slova."""
    word: str
    base_points: int
    letter_bonus_points: int
    word_multiplier: int
    total: int


@dataclass
class ScoreResult:
    """Vysledok skorovania celeho tahu."""
    total: int = 0
    words: list[ScoreBreakdown] = field(default_factory=list)
    new_tile_count: int = 0
    bingo: bool = False


TilePoints = dict[str, int]
