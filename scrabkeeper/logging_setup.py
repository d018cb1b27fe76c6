"""Centralizovaná inicializácia logovania pre scrabkeeper.

- Konfiguruje Rich konzolový handler a rotujúci súborový handler.
- Zabráni duplicitným handlerom pri opakovaných importoch.
- Poskytuje `GAME_ID_VAR` pre propagáciu id partie cez ContextVar.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

# Id partie, ktorú práve obsluhuje prezentačná vrstva
GAME_ID_VAR: ContextVar[str] = ContextVar("game_id", default="-")


class _GameIdFilter(logging.Filter):
    """Filter doplní `game_id` do každého záznamu z ContextVar.

    Pozn.: Použitý na konzolovom aj súborovom handleri.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.game_id = GAME_ID_VAR.get()
        return True


@contextmanager
def bind_game_id(game_id: str) -> Iterator[None]:
    """Počas bloku označí všetky logy daným id partie."""

    token = GAME_ID_VAR.set(game_id)
    try:
        yield
    finally:
        GAME_ID_VAR.reset(token)


def default_log_path() -> str:
    """Určí predvolenú cestu k log súboru.

    Predvolene `scrabkeeper.log` v pracovnom adresári; možno prepísať
    premennou prostredia `SCRABKEEPER_LOG_PATH`.
    """

    env = os.getenv("SCRABKEEPER_LOG_PATH")
    if env:
        return env
    return str(Path.cwd() / "scrabkeeper.log")


def configure_logging(*, log_path: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """Inicializuje logging iba raz a vráti projektový logger.

    - Rich na konzolu (prehľadné tracebacky)
    - Rotujúci súborový handler (≈1 MB, 5 záloh)
    - Formát zahŕňa `game_id` z `GAME_ID_VAR`
    """

    root = logging.getLogger()
    if root.handlers:
        return logging.getLogger("scrabkeeper")

    root.setLevel(logging.DEBUG)
    game_filter = _GameIdFilter()

    # Konzola
    ch = RichHandler(rich_tracebacks=True)
    ch.setLevel(level)
    ch.addFilter(game_filter)
    ch.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(ch)

    # Súbor s rotáciou
    path = log_path or default_log_path()
    try:
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    except OSError as exc:
        # Bez súboru pokračuj aspoň s konzolou
        logging.getLogger("scrabkeeper").warning("log_file_unavailable path=%s error=%s", path, exc)
    else:
        fh.setLevel(logging.DEBUG)
        fh.addFilter(game_filter)
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s [game=%(game_id)s] %(message)s"
            )
        )
        root.addHandler(fh)

    return logging.getLogger("scrabkeeper")
