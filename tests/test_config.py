from __future__ import annotations

import pytest

from scrabkeeper.config import Settings, effective_word_checker, load_settings
from scrabkeeper.core.game import MAX_PLAYERS
from scrabkeeper.core.scoring import BINGO_BONUS

_VARS = (
    "SCRABKEEPER_LANGUAGES",
    "SCRABKEEPER_CUSTOM_LETTERS",
    "SCRABKEEPER_BINGO_BONUS",
    "SCRABKEEPER_MAX_PLAYERS",
    "SCRABKEEPER_TOTAL_TILES",
    "SCRABKEEPER_PREMIUMS_PATH",
    "WORD_CHECKER_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = load_settings()
    assert s == Settings()
    assert s.languages == ("en",)
    assert s.bingo_bonus == BINGO_BONUS
    assert s.max_players == MAX_PLAYERS
    assert s.word_checker is None


def test_values_from_env(monkeypatch) -> None:
    monkeypatch.setenv("SCRABKEEPER_LANGUAGES", "de, xx ,es,de")
    monkeypatch.setenv("SCRABKEEPER_CUSTOM_LETTERS", "Ł=5, bad, Q=x")
    monkeypatch.setenv("SCRABKEEPER_BINGO_BONUS", "35")
    monkeypatch.setenv("SCRABKEEPER_MAX_PLAYERS", "6")
    monkeypatch.setenv("SCRABKEEPER_TOTAL_TILES", "104")
    monkeypatch.setenv("WORD_CHECKER_ENABLED", "yes")
    s = load_settings()
    assert s.languages == ("de", "es")
    assert s.custom_letters == {"Ł": 5}
    assert s.bingo_bonus == 35
    assert s.max_players == 6
    assert s.total_tiles == 104
    assert s.word_checker is True
    pts = s.tile_points()
    assert pts["Ñ"] == 8 and pts["Ä"] == 6 and pts["Ł"] == 5


def test_bad_numbers_fall_back(monkeypatch, caplog) -> None:
    monkeypatch.setenv("SCRABKEEPER_BINGO_BONUS", "lots")
    monkeypatch.setenv("SCRABKEEPER_MAX_PLAYERS", "0")
    s = load_settings()
    assert s.bingo_bonus == BINGO_BONUS
    assert s.max_players == MAX_PLAYERS
    assert "config_bad_int" in caplog.text


@pytest.mark.parametrize(
    ("env", "ui", "expected"),
    [("1", False, True), ("0", True, True), ("0", False, False), (None, True, True), (None, None, False)],
)
def test_effective_word_checker(monkeypatch, env, ui, expected) -> None:
    if env is not None:
        monkeypatch.setenv("WORD_CHECKER_ENABLED", env)
    assert effective_word_checker(ui) is expected
