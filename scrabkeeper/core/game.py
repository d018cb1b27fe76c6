"""Stav partie: hráči, čakajúce kocky, striedanie ťahov, undo.

Neplatné prechody (commit bez kociek, undo bez histórie, …) sú tiché
no-op operácie: stav sa nezmení a metóda vráti `None`/`False`. UI má
tieto akcie vopred zakázať podľa pozorovateľného stavu (`can_commit`,
`can_undo`, …).
"""
from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

from .board import Board
from .lookup import WordLookup, check_words
from .rules import ValidationResult, validate, validate_pending
from .scoring import BINGO_BONUS, score_placement
from .tiles import get_tile_points
from .types import (
    Direction,
    PlacedTile,
    PlacementRequest,
    ScoreBreakdown,
    ScoreResult,
    Tile,
)
from .words import infer_direction

if TYPE_CHECKING:
    from ..config import Settings

log = logging.getLogger("scrabkeeper.game")

MAX_PLAYERS = 4
TOTAL_TILES = 100  # standardna sada kociek
RACK_SIZE = 7


class GamePhase(Enum):
    """Fáza partie."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"


@dataclass
class PlayedWord:
    """Jeden potvrdený ťah v histórii hráča."""

    id: str
    word: str
    score: int
    tiles: list[PlacedTile]
    timestamp: float
    breakdown: list[ScoreBreakdown] = field(default_factory=list)
    seq: int = 0  # poradie potvrdenia v partii, rozhoduje pri zhodnom timestamp


@dataclass
class Player:
    """Hráč so skóre a históriou ťahov."""

    id: str
    name: str
    score: int = 0
    words: list[PlayedWord] = field(default_factory=list)


@dataclass
class GameStats:
    """Súhrn partie pre stavový panel."""

    tiles_on_board: int
    tiles_remaining: int  # odhad: sada - doska - plne stojany
    total_score: int
    leader: Player | None


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


class GameSession:
    """Jedna partia v pamäti; vlastní ju práve jeden volajúci (bez zámkov)."""

    def __init__(
        self,
        *,
        board: Board | None = None,
        tile_points: Mapping[str, int] | None = None,
        bingo_bonus: int = BINGO_BONUS,
        max_players: int = MAX_PLAYERS,
        total_tiles: int = TOTAL_TILES,
        game_id: str | None = None,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        if max_players < 1:
            raise ValueError("max_players musí byť aspoň 1")
        self.board = board if board is not None else Board()
        self.tile_points: dict[str, int] = (
            dict(tile_points) if tile_points is not None else get_tile_points()
        )
        self.bingo_bonus = bingo_bonus
        self.max_players = max_players
        self.total_tiles = total_tiles
        self.game_id = game_id or id_factory()
        self.clock = clock
        self._new_id = id_factory

        self.phase = GamePhase.SETUP
        self.players: list[Player] = []
        self.pending: list[PlacedTile] = []
        self.pending_direction: Direction | None = None
        self.current_player_id: str | None = None
        self.started_at: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: object) -> GameSession:
        """Vytvorí partiu podľa konfigurácie (jazyky, bonus, max hráčov, prémie)."""

        board = Board(settings.premiums_path) if settings.premiums_path else Board()
        return cls(
            board=board,
            tile_points=settings.tile_points(),
            bingo_bonus=settings.bingo_bonus,
            max_players=settings.max_players,
            total_tiles=settings.total_tiles,
            **kwargs,  # type: ignore[arg-type]
        )

    # ---------------- Čítanie stavu ----------------

    @property
    def in_progress(self) -> bool:
        return self.phase is GamePhase.IN_PROGRESS

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def current_player(self) -> Player | None:
        if self.current_player_id is None:
            return None
        return self.get_player(self.current_player_id)

    @property
    def has_pending(self) -> bool:
        return bool(self.pending)

    @property
    def can_commit(self) -> bool:
        if not (self.in_progress and self.has_pending and self.current_player is not None):
            return False
        return self.validate_pending().ok

    @property
    def can_undo(self) -> bool:
        return self.in_progress and self.last_play() is not None

    @property
    def can_pass(self) -> bool:
        return self.in_progress and len(self.players) >= 2

    @property
    def turn_count(self) -> int:
        return sum(len(p.words) for p in self.players)

    def last_play(self) -> tuple[Player, PlayedWord] | None:
        """Najnovší potvrdený ťah naprieč všetkými hráčmi (podľa času a poradia)."""
        latest: tuple[Player, PlayedWord] | None = None
        for player in self.players:
            if not player.words:
                continue
            word = player.words[-1]
            if latest is None or (word.timestamp, word.seq) > (latest[1].timestamp, latest[1].seq):
                latest = (player, word)
        return latest

    def leaderboard(self) -> list[Player]:
        """Hráči podľa skóre zostupne (pri zhode ostáva poradie pri stole)."""
        return sorted(self.players, key=lambda p: -p.score)

    def winner(self) -> Player | None:
        """Vedúci hráč, alebo None pri zhode na prvom mieste / bez hráčov."""
        board = self.leaderboard()
        if not board:
            return None
        if len(board) > 1 and board[0].score == board[1].score:
            return None
        return board[0]

    def stats(self) -> GameStats:
        on_board = len(self.board.committed_tiles())
        in_racks = RACK_SIZE * len(self.players)
        ranked = self.leaderboard()
        return GameStats(
            tiles_on_board=on_board,
            tiles_remaining=max(0, self.total_tiles - on_board - in_racks),
            total_score=sum(p.score for p in self.players),
            leader=ranked[0] if ranked else None,
        )

    # ---------------- Príprava (setup) ----------------

    def add_player(self, name: str) -> Player | None:
        name = name.strip()
        if self.phase is not GamePhase.SETUP or not name:
            return None
        if len(self.players) >= self.max_players:
            log.debug("add_player_ignored reason=max_players max=%s", self.max_players)
            return None
        player = Player(id=self._new_id(), name=name)
        self.players.append(player)
        if self.current_player_id is None:
            self.current_player_id = player.id
        log.info("player_added game=%s player=%s name=%s", self.game_id, player.id, name)
        return player

    def remove_player(self, player_id: str) -> bool:
        if self.phase is not GamePhase.SETUP or self.get_player(player_id) is None:
            return False
        self.players = [p for p in self.players if p.id != player_id]
        if self.current_player_id == player_id:
            self.current_player_id = self.players[0].id if self.players else None
        log.info("player_removed game=%s player=%s", self.game_id, player_id)
        return True

    def reorder_players(self, from_index: int, to_index: int) -> bool:
        if self.phase is not GamePhase.SETUP:
            return False
        n = len(self.players)
        if not (0 <= from_index < n and 0 <= to_index < n):
            return False
        player = self.players.pop(from_index)
        self.players.insert(to_index, player)
        return True

    def rename_player(self, player_id: str, name: str) -> bool:
        player = self.get_player(player_id)
        name = name.strip()
        if player is None or not name:
            return False
        player.name = name
        return True

    def set_player_score(self, player_id: str, score: int) -> bool:
        """Ručná oprava skóre (napr. po chybe pri počítaní na stole)."""
        player = self.get_player(player_id)
        if player is None:
            return False
        log.info(
            "score_corrected game=%s player=%s old=%s new=%s",
            self.game_id,
            player_id,
            player.score,
            score,
        )
        player.score = score
        return True

    def set_current_player(self, player_id: str) -> bool:
        if self.get_player(player_id) is None:
            return False
        self.current_player_id = player_id
        return True

    def start(self) -> bool:
        """SETUP -> IN_PROGRESS; vyžaduje aspoň jedného hráča."""
        if self.phase is not GamePhase.SETUP or not self.players:
            return False
        self.phase = GamePhase.IN_PROGRESS
        if self.current_player is None:
            self.current_player_id = self.players[0].id
        self.started_at = self.clock()
        log.info("game_started game=%s players=%s", self.game_id, len(self.players))
        return True

    # ---------------- Čakajúce kocky ----------------

    def validate(self, request: PlacementRequest) -> ValidationResult:
        return validate(self.board, request)

    def propose(self, request: PlacementRequest) -> ValidationResult | None:
        """Overí návrh a pri úspechu ním nahradí čakajúce kocky.

        Pri neúspechu sa stav nemení a výsledok nesie druh chyby.
        Mimo rozohranej partie vráti None.
        """
        if not self.in_progress:
            return None
        result = self.validate(request)
        if not result.ok:
            log.debug(
                "proposal_rejected game=%s word=%s error=%s",
                self.game_id,
                request.word,
                result.error.value if result.error else None,
            )
            return result
        self.pending = list(result.new_tiles)
        self.pending_direction = request.direction
        return result

    def place_tile(self, row: int, col: int, tile: Tile) -> bool:
        """Pridá jednu čakajúcu kocku na voľné pole."""
        if not self.in_progress or self.current_player is None:
            return False
        if not self.board.inside(row, col) or self.board.has_tile(row, col):
            return False
        if any(t.pos == (row, col) for t in self.pending):
            return False
        self.pending.append(PlacedTile(row, col, tile, is_new=True))
        self.pending_direction = None
        return True

    def remove_pending_tile(self, row: int, col: int) -> bool:
        kept = [t for t in self.pending if t.pos != (row, col)]
        if len(kept) == len(self.pending):
            return False
        self.pending = kept
        if not self.pending:
            self.pending_direction = None
        return True

    def clear_pending(self) -> None:
        self.pending = []
        self.pending_direction = None

    def validate_pending(self) -> ValidationResult:
        """Overí čakajúce kocky (aj jednotlivo položené) voči doske."""
        return validate_pending(self.board, self.pending, self.pending_direction)

    def preview(self) -> ScoreResult:
        """Skóre čakajúcich kociek (bez potvrdenia)."""
        if not self.pending:
            return ScoreResult()
        direction = self.pending_direction or infer_direction(self.pending)
        return score_placement(
            self.board,
            self.pending,
            direction,
            tile_points=self.tile_points,
            bingo_bonus=self.bingo_bonus,
        )

    def check_words(self, lookup: WordLookup) -> dict[str, bool]:
        """Informačná slovníková kontrola slov z čakajúcich kociek."""
        return check_words(lookup, (bd.word for bd in self.preview().words))

    # ---------------- Ťahy ----------------

    def _advance_turn(self) -> None:
        if not self.players:
            return
        ids = [p.id for p in self.players]
        idx = ids.index(self.current_player_id) if self.current_player_id in ids else -1
        self.current_player_id = ids[(idx + 1) % len(ids)]

    def commit(self) -> PlayedWord | None:
        """Potvrdí čakajúce kocky, pripíše skóre a posunie ťah."""
        player = self.current_player
        if not self.in_progress or not self.pending or player is None:
            log.debug("commit_ignored game=%s pending=%s", self.game_id, len(self.pending))
            return None
        check = self.validate_pending()
        if not check.ok:
            log.debug(
                "commit_rejected game=%s error=%s",
                self.game_id,
                check.error.value if check.error else None,
            )
            return None

        result = self.preview()
        committed = [PlacedTile(t.row, t.col, t.tile, is_new=False) for t in self.pending]
        self.board.place_tiles(committed)

        seq = max((w.seq for p in self.players for w in p.words), default=0) + 1
        word = " + ".join(bd.word for bd in result.words) or "".join(t.letter for t in committed)
        played = PlayedWord(
            id=self._new_id(),
            word=word,
            score=result.total,
            tiles=committed,
            timestamp=self.clock(),
            breakdown=list(result.words),
            seq=seq,
        )
        player.words.append(played)
        player.score += result.total
        log.info(
            "commit game=%s player=%s word=%s score=%s bingo=%s",
            self.game_id,
            player.id,
            word,
            result.total,
            result.bingo,
        )
        self.clear_pending()
        self._advance_turn()
        return played

    def pass_turn(self) -> bool:
        """Posunie ťah bez potvrdenia; vyžaduje aspoň dvoch hráčov."""
        if not self.can_pass:
            return False
        self.clear_pending()
        self._advance_turn()
        log.info("pass game=%s next=%s", self.game_id, self.current_player_id)
        return True

    def undo_last_play(self) -> PlayedWord | None:
        """Vráti späť jediný najnovší ťah naprieč všetkými hráčmi.

        Pozn.: Nie je to „undo môjho ťahu“ – opakované volanie vracia
        ťahy v opačnom chronologickom poradí bez ohľadu na hráča.
        """
        if not self.in_progress:
            return None
        latest = self.last_play()
        if latest is None:
            log.debug("undo_ignored game=%s reason=no_history", self.game_id)
            return None
        player, played = latest
        self.board.remove_tiles(t.pos for t in played.tiles)
        player.score -= played.score
        player.words.pop()
        self.current_player_id = player.id
        self.clear_pending()
        log.info(
            "undo game=%s player=%s word=%s score=%s",
            self.game_id,
            player.id,
            played.word,
            played.score,
        )
        return played

    # ---------------- Reset ----------------

    def new_game(self) -> None:
        """Rovnakí hráči, čistá doska a nulové skóre; hneď sa znova rozohrá."""
        for player in self.players:
            player.score = 0
            player.words = []
        self.board.clear()
        self.clear_pending()
        self.phase = GamePhase.SETUP
        self.current_player_id = self.players[0].id if self.players else None
        self.started_at = None
        log.info("new_game game=%s players=%s", self.game_id, len(self.players))
        self.start()

    def full_reset(self) -> None:
        """Úplný reset vrátane hráčov, späť do SETUP."""
        self.players = []
        self.board.clear()
        self.clear_pending()
        self.phase = GamePhase.SETUP
        self.current_player_id = None
        self.started_at = None
        log.info("full_reset game=%s", self.game_id)
