from __future__ import annotations

import logging

import pytest

from scrabkeeper.core.tiles import get_letter_set, get_tile_points, letter_value
from scrabkeeper.core.types import Tile


def test_english_distribution_values() -> None:
    pts = get_tile_points()
    assert pts["A"] == 1
    assert pts["Q"] == 10 and pts["Z"] == 10
    assert pts["X"] == 8 and pts["J"] == 8
    assert len(pts) == 26


def test_language_extras_extend_english() -> None:
    pts = get_tile_points(["de"])
    assert pts["Ä"] == 6 and pts["ß"] == 10
    assert pts["A"] == 1


def test_later_language_wins_on_collision() -> None:
    # É je vo fr aj es s roznou hodnotou
    assert get_tile_points(["fr", "es"])["É"] == 4
    assert get_tile_points(["es", "fr"])["É"] == 2


def test_custom_overrides_and_validation() -> None:
    pts = get_tile_points(["en"], {"a": 3, "Ł": 5})
    assert pts["A"] == 3
    assert pts["Ł"] == 5
    with pytest.raises(ValueError):
        get_tile_points(custom={"A": -1})


def test_unknown_language() -> None:
    with pytest.raises(ValueError):
        get_letter_set("xx")
    assert get_letter_set(" DE ").language == "German"


def test_letter_value(caplog) -> None:
    pts = get_tile_points()
    assert letter_value(Tile("Z"), pts) == 10
    assert letter_value(Tile("Z", is_blank=True), pts) == 0
    with caplog.at_level(logging.DEBUG, logger="scrabkeeper.tiles"):
        assert letter_value(Tile("Ñ"), pts) == 0
    assert "unknown_letter" in caplog.text
