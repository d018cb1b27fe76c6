from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .types import Tile, TilePoints, normalise_letter

log = logging.getLogger("scrabkeeper.tiles")

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class LetterSet:
    """Bodové hodnoty písmen jedného jazyka.

    Pre iné jazyky ako angličtinu obsahuje iba písmená navyše
    (Ä, Ñ, …); základná anglická tabuľka sa k nim vždy pridá.
    """

    code: str
    language: str
    points: tuple[tuple[str, int], ...]

    @property
    def tile_points(self) -> TilePoints:
        return dict(self.points)


# --- Zabudované sady -----------------------------------------------------

_ENGLISH_POINTS: dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2, "H": 4, "I": 1,
    "J": 8, "K": 5, "L": 1, "M": 3, "N": 1, "O": 1, "P": 3, "Q": 10, "R": 1,
    "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8, "Y": 4, "Z": 10,
}

_LANGUAGE_EXTRAS: dict[str, tuple[str, dict[str, int]]] = {
    "de": ("German", {"Ä": 6, "Ö": 8, "Ü": 6, "ß": 10}),
    "fr": (
        "French",
        {
            "É": 2, "È": 4, "Ê": 4, "Ë": 4, "À": 4, "Â": 4, "Î": 4,
            "Ï": 4, "Ô": 4, "Ù": 4, "Û": 4, "Ç": 4, "Œ": 10,
        },
    ),
    "es": ("Spanish", {"Ñ": 8, "Á": 4, "É": 4, "Í": 4, "Ó": 4, "Ú": 4, "Ü": 6}),
}

LETTER_SETS: dict[str, LetterSet] = {
    DEFAULT_LANGUAGE: LetterSet(
        DEFAULT_LANGUAGE, "English", tuple(sorted(_ENGLISH_POINTS.items()))
    ),
    **{
        code: LetterSet(code, name, tuple(sorted(extra.items())))
        for code, (name, extra) in _LANGUAGE_EXTRAS.items()
    },
}


def get_letter_set(code: str) -> LetterSet:
    """Vráti sadu písmen pre kód jazyka (`en`, `de`, `fr`, `es`)."""

    key = code.strip().lower()
    try:
        return LETTER_SETS[key]
    except KeyError:
        raise ValueError(
            f"Neznámy jazyk: {code!r}. Podporované: {', '.join(sorted(LETTER_SETS))}"
        ) from None


def get_tile_points(
    languages: Iterable[str] | None = None,
    custom: Mapping[str, int] | None = None,
) -> TilePoints:
    """Zostaví tabuľku bodov pre dané jazyky (+ voliteľné vlastné hodnoty).

    - Angličtina je základ, vždy prítomná.
    - Pri zmiešaných hrách sa sady zlúčia; pri kolízii (napr. 'É' vo fr aj es)
      vyhráva jazyk uvedený neskôr.
    - `custom` prepíše čokoľvek predtým.
    """

    points: TilePoints = dict(LETTER_SETS[DEFAULT_LANGUAGE].points)
    for code in languages or ():
        if code.strip().lower() == DEFAULT_LANGUAGE:
            continue
        points.update(get_letter_set(code).points)
    for letter, value in (custom or {}).items():
        if value < 0:
            raise ValueError(f"Záporná hodnota písmena {letter!r}: {value}")
        points[normalise_letter(letter)] = value
    return points


def letter_value(tile: Tile, tile_points: Mapping[str, int]) -> int:
    """Hodnota kocky bez prémií; blank je vždy 0, neznáme písmeno tiež 0."""

    if tile.is_blank:
        return 0
    value = tile_points.get(tile.letter)
    if value is None:
        log.debug("unknown_letter letter=%s", tile.letter)
        return 0
    return value
