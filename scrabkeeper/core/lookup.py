"""Slovníková kontrola ako externý spolupracovník (iba informačne pre UI).

Lookup je obyčajná funkcia `word -> bool`. Výsledok nikdy neovplyvní
platnosť umiestnenia ani skóre.
"""
from __future__ import annotations

import logging
import unicodedata as ud
from collections.abc import Iterable
from pathlib import Path
from typing import Callable

log = logging.getLogger("scrabkeeper.lookup")

WordLookup = Callable[[str], bool]


def _nfc_casefold(s: str) -> str:
    """Zachová diakritiku, len zjednotí veľkosť písmen a normalizuje Unicode."""
    return ud.normalize("NFC", s).casefold()


def word_set_lookup(words: Iterable[str]) -> WordLookup:
    """Lookup nad množinou slov v pamäti (case-insensitive)."""
    frozen_words = frozenset(_nfc_casefold(w.strip()) for w in words if w.strip())

    def contains(word: str) -> bool:
        return _nfc_casefold(word) in frozen_words

    return contains


def load_word_list(path: str | Path, *, comment_prefix: str = "#") -> WordLookup:
    """Načíta slová (1 slovo na riadok) a vráti rýchlu contains(word) funkciu.

    - Riadky začínajúce comment_prefix sa ignorujú.
    - Prázdne riadky sa ignorujú.
    """
    path = Path(path)
    words: list[str] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            if comment_prefix and line.startswith(comment_prefix):
                continue
            words.append(line)
    log.info("word_list_loaded path=%s count=%s", path, len(words))
    return word_set_lookup(words)


def check_words(lookup: WordLookup, words: Iterable[str]) -> dict[str, bool]:
    """Vráti mapu slovo -> či ho lookup pozná (každé slovo sa pýta iba raz)."""
    out: dict[str, bool] = {}
    for word in words:
        if word in out:
            continue
        out[word] = bool(lookup(word))
    return out
