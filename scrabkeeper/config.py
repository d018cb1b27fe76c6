"""Konfigurácia a flagy pre scrabkeeper.

Pravidlá:
- `.env` sa načíta veľmi skoro, existujúce OS premenné sa neprepisujú.
- WORD_CHECKER_ENABLED='1' -> vždy zapni slovníkovú kontrolu (override UI).
- WORD_CHECKER_ENABLED='0' alebo chýba -> riadi to UI toggle.
"""
from __future__ import annotations

import logging
import os
from contextlib import suppress
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .core.game import MAX_PLAYERS, TOTAL_TILES
from .core.scoring import BINGO_BONUS
from .core.tiles import DEFAULT_LANGUAGE, get_letter_set, get_tile_points
from .core.types import TilePoints

log = logging.getLogger("scrabkeeper.config")

# Načítaj .env veľmi skoro, ale nenahrádzaj už existujúce OS premenne
if os.getenv("PYTEST_CURRENT_TEST") is None:
    with suppress(OSError):
        load_dotenv(override=False)

_TRUE = {"1", "true", "yes", "on", "y", "t"}
_FALSE = {"0", "false", "no", "off", "n", "f"}


def _parse_bool(val: str | None) -> bool | None:
    """Bezpečné parsovanie boolean reťazcov; None ak neznáme.

    Komentár (SK): Funkcia akceptuje viacero zápisov pravdy/nepravdy a vráti
    None, ak hodnota nie je rozpoznaná.
    """
    if val is None:
        return None
    v = val.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return None


def _parse_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        log.warning("config_bad_int name=%s value=%r -> default=%s", name, raw, default)
        return default
    if value < minimum:
        log.warning("config_below_minimum name=%s value=%s -> default=%s", name, value, default)
        return default
    return value


def _parse_languages(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return (DEFAULT_LANGUAGE,)
    out: list[str] = []
    for part in raw.split(","):
        code = part.strip().lower()
        if not code or code in out:
            continue
        try:
            get_letter_set(code)
        except ValueError:
            log.warning("config_unknown_language code=%s", code)
            continue
        out.append(code)
    return tuple(out) or (DEFAULT_LANGUAGE,)


def _parse_custom_letters(raw: str | None) -> dict[str, int]:
    """Parsuje 'Ä=6,Ö=8' na mapu písmeno -> body; chybné položky sa preskočia."""
    out: dict[str, int] = {}
    for part in (raw or "").split(","):
        letter, sep, value = part.partition("=")
        letter = letter.strip()
        if not sep or len(letter) != 1:
            if part.strip():
                log.warning("config_bad_custom_letter item=%r", part)
            continue
        try:
            out[letter] = int(value.strip())
        except ValueError:
            log.warning("config_bad_custom_letter item=%r", part)
    return out


@dataclass(frozen=True)
class Settings:
    """Explicitná konfigurácia partie (namiesto globálneho stavu)."""

    languages: tuple[str, ...] = (DEFAULT_LANGUAGE,)
    custom_letters: dict[str, int] = field(default_factory=dict)
    bingo_bonus: int = BINGO_BONUS
    max_players: int = MAX_PLAYERS
    total_tiles: int = TOTAL_TILES
    premiums_path: str | None = None
    word_checker: bool | None = None

    def tile_points(self) -> TilePoints:
        return get_tile_points(self.languages, self.custom_letters)


def load_settings() -> Settings:
    """Načíta nastavenia z prostredia (po načítaní `.env`).

    - SCRABKEEPER_LANGUAGES: napr. "en,de" (neznáme kódy sa preskočia)
    - SCRABKEEPER_CUSTOM_LETTERS: napr. "Ä=6,Ö=8" (vlastné hodnoty písmen)
    - SCRABKEEPER_BINGO_BONUS: bonus za 7 kociek
    - SCRABKEEPER_MAX_PLAYERS: max. počet hráčov
    - SCRABKEEPER_TOTAL_TILES: počet kociek v sade (pre odhad zvyšku)
    - SCRABKEEPER_PREMIUMS_PATH: vlastné rozloženie prémií (JSON)
    - WORD_CHECKER_ENABLED: slovníková kontrola (pozri `effective_word_checker`)
    """
    return Settings(
        languages=_parse_languages(os.getenv("SCRABKEEPER_LANGUAGES")),
        custom_letters=_parse_custom_letters(os.getenv("SCRABKEEPER_CUSTOM_LETTERS")),
        bingo_bonus=_parse_int("SCRABKEEPER_BINGO_BONUS", BINGO_BONUS),
        max_players=_parse_int("SCRABKEEPER_MAX_PLAYERS", MAX_PLAYERS, minimum=1),
        total_tiles=_parse_int("SCRABKEEPER_TOTAL_TILES", TOTAL_TILES),
        premiums_path=os.getenv("SCRABKEEPER_PREMIUMS_PATH") or None,
        word_checker=_parse_bool(os.getenv("WORD_CHECKER_ENABLED")),
    )


def effective_word_checker(ui_toggle: bool | None) -> bool:
    """Vráti výsledný stav slovníkovej kontroly podľa .env a UI togglu.

    - .env == True  -> vždy True
    - .env == False -> podľa UI
    - .env == None  -> podľa UI
    """
    env_val = _parse_bool(os.getenv("WORD_CHECKER_ENABLED"))
    if env_val is True:
        return True
    return bool(ui_toggle)
