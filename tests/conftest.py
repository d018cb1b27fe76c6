"""Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides:
- Environment variable loading from .env
- Shared fixtures (board, deterministic session) for all tests
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv

from scrabkeeper.core.board import Board
from scrabkeeper.core.game import GameSession
from scrabkeeper.core.types import Direction, PlacementRequest, Tile


def pytest_configure(config):
    """Load environment variables from .env file."""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


def make_request(word: str, row: int, col: int, direction: str = "horizontal") -> PlacementRequest:
    """Návrh ťahu z reťazca; malé písmeno tu NEznamená blank."""
    return PlacementRequest(row, col, Direction(direction), tuple(Tile(ch) for ch in word))


class FakeClock:
    """Deterministické hodiny: každé volanie posunie čas o `step` sekúnd."""

    def __init__(self, start: float = 1_000.0, step: float = 60.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def session(clock: FakeClock, id_factory: Callable[[], str]) -> GameSession:
    """Rozohraná partia s dvoma hráčmi (Ann na ťahu)."""
    s = GameSession(game_id="g1", clock=clock, id_factory=id_factory)
    s.add_player("Ann")
    s.add_player("Bob")
    assert s.start()
    return s
