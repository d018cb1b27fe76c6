"""Serializácia stavu partie pre perzistenčného spolupracovníka.

Pozn.: Modul je bez UI zalezitosti, vhodny pre unit testy a mypy.
Presná schéma úložiska nie je vecou jadra – exportujeme iba
JSON-serializovateľné slovníky.
"""

from __future__ import annotations

from typing import Any, Literal, TypedDict

from .board import Board
from .game import GamePhase, GameSession, PlayedWord, Player
from .types import Direction, PlacedTile, ScoreBreakdown, Tile

SCHEMA_VERSION = "1"


class TileState(TypedDict):
    row: int
    col: int
    letter: str
    blank: bool


class WordScoreState(TypedDict):
    word: str
    score: int


class PlayedWordState(TypedDict):
    id: str
    word: str
    score: int
    timestamp: float
    seq: int
    tiles: list[TileState]
    breakdown: list[WordScoreState]


class PlayerState(TypedDict):
    id: str
    name: str
    score: int
    words: list[PlayedWordState]


class GameSnapshot(TypedDict, total=False):
    """JSON-serializovateľný stav celej partie (schema v1).

    Povinné polia:
    - schema_version: "1"
    - game_id, phase ("setup" | "in_progress")
    - board_size: rozmer dosky
    - board: potvrdené kocky (row, col, letter, blank)
    - players: hráči so skóre a históriou ťahov (vrátane rozpisu slov)
    - current_player_id: hráč na ťahu alebo None

    Voliteľné:
    - pending: čakajúce kocky
    - pending_direction: "horizontal" | "vertical" | None
    - started_at: čas začiatku partie (epoch sekundy)
    """

    schema_version: str
    game_id: str
    phase: Literal["setup", "in_progress"]
    board_size: int
    board: list[TileState]
    pending: list[TileState]
    pending_direction: str | None
    players: list[PlayerState]
    current_player_id: str | None
    started_at: float | None


class RecordWord(TypedDict):
    word: str
    score: int
    turn: int


class RecordPlayer(TypedDict):
    name: str
    score: int
    words: list[RecordWord]


class GameRecord(TypedDict):
    """Záznam ukončenej partie pre históriu hier."""

    players: list[RecordPlayer]
    winner: str | None
    total_turns: int
    duration_minutes: int | None
    board: list[TileState]


def _tile_state(t: PlacedTile) -> TileState:
    return {"row": t.row, "col": t.col, "letter": t.letter, "blank": t.is_blank}


def _played_state(pw: PlayedWord) -> PlayedWordState:
    return {
        "id": pw.id,
        "word": pw.word,
        "score": pw.score,
        "timestamp": pw.timestamp,
        "seq": pw.seq,
        "tiles": [_tile_state(t) for t in pw.tiles],
        "breakdown": [{"word": bd.word, "score": bd.total} for bd in pw.breakdown],
    }


def build_snapshot(session: GameSession) -> GameSnapshot:
    """Vytvorí JSON-serializovateľný stav partie (schema v1)."""
    return GameSnapshot(
        schema_version=SCHEMA_VERSION,
        game_id=session.game_id,
        phase="in_progress" if session.in_progress else "setup",
        board_size=session.board.size,
        board=[_tile_state(t) for t in session.board.committed_tiles()],
        pending=[_tile_state(t) for t in session.pending],
        pending_direction=session.pending_direction.value if session.pending_direction else None,
        players=[
            {
                "id": p.id,
                "name": p.name,
                "score": p.score,
                "words": [_played_state(pw) for pw in p.words],
            }
            for p in session.players
        ],
        current_player_id=session.current_player_id,
        started_at=session.started_at,
    )


# ------------------------- Parsovanie -------------------------

def _require(cond: bool, reason: str) -> None:
    if not cond:
        raise ValueError(f"Neplatný snapshot: {reason}")


def _parse_tiles(raw: Any, size: int, key: str) -> list[TileState]:
    _require(isinstance(raw, list), f"{key} musí byť zoznam")
    out: list[TileState] = []
    for it in raw:
        _require(isinstance(it, dict), f"{key}: položka musí byť objekt")
        r, c = it.get("row"), it.get("col")
        letter, blank = it.get("letter"), it.get("blank", False)
        _require(isinstance(r, int) and isinstance(c, int), f"{key}: row/col musia byť int")
        _require(0 <= r < size and 0 <= c < size, f"{key}: ({r},{c}) mimo dosky")
        _require(isinstance(letter, str) and len(letter) == 1, f"{key}: neplatné písmeno")
        _require(isinstance(blank, bool), f"{key}: blank musí byť bool")
        out.append({"row": r, "col": c, "letter": letter, "blank": blank})
    positions = [(t["row"], t["col"]) for t in out]
    _require(len(positions) == len(set(positions)), f"{key}: duplicitné pole")
    return out


def _parse_played(raw: Any, size: int) -> PlayedWordState:
    _require(isinstance(raw, dict), "ťah musí byť objekt")
    word, score = raw.get("word"), raw.get("score")
    timestamp, seq = raw.get("timestamp", 0.0), raw.get("seq", 0)
    _require(isinstance(word, str), "word musí byť reťazec")
    _require(isinstance(score, int), "score musí byť int")
    _require(isinstance(timestamp, (int, float)), "timestamp musí byť číslo")
    _require(isinstance(seq, int), "seq musí byť int")
    breakdown_raw = raw.get("breakdown", [])
    _require(isinstance(breakdown_raw, list), "breakdown musí byť zoznam")
    breakdown: list[WordScoreState] = []
    for bd in breakdown_raw:
        _require(
            isinstance(bd, dict) and isinstance(bd.get("word"), str) and isinstance(bd.get("score"), int),
            "breakdown: položka {word, score}",
        )
        breakdown.append({"word": bd["word"], "score": bd["score"]})
    return {
        "id": str(raw.get("id", "")),
        "word": word,
        "score": score,
        "timestamp": float(timestamp),
        "seq": seq,
        "tiles": _parse_tiles(raw.get("tiles", []), size, "tiles"),
        "breakdown": breakdown,
    }


def parse_snapshot(data: dict[str, Any]) -> GameSnapshot:
    """Overí a normalizuje vstupný slovník podľa schema v1 a vráti `GameSnapshot`.

    Vyvolá `ValueError` pri neplatnom formáte.
    """
    _require(isinstance(data, dict), "očakáva sa objekt")
    _require(data.get("schema_version") == SCHEMA_VERSION, "nepodporovaná schema_version")

    size = data.get("board_size")
    _require(isinstance(size, int) and size > 0, "board_size musí byť kladné int")
    phase = data.get("phase", "setup")
    _require(phase in ("setup", "in_progress"), "neznáma phase")
    pending_direction = data.get("pending_direction")
    _require(
        pending_direction in (None, "horizontal", "vertical"), "neznámy pending_direction"
    )

    players_raw = data.get("players", [])
    _require(isinstance(players_raw, list), "players musí byť zoznam")
    players: list[PlayerState] = []
    for p in players_raw:
        _require(isinstance(p, dict), "hráč musí byť objekt")
        pid, name, score = p.get("id"), p.get("name"), p.get("score", 0)
        _require(isinstance(pid, str) and pid != "", "hráč: chýba id")
        _require(isinstance(name, str), "hráč: name musí byť reťazec")
        _require(isinstance(score, int), "hráč: score musí byť int")
        words_raw = p.get("words", [])
        _require(isinstance(words_raw, list), "hráč: words musí byť zoznam")
        players.append(
            {
                "id": pid,
                "name": name,
                "score": score,
                "words": [_parse_played(w, size) for w in words_raw],
            }
        )
    ids = [p["id"] for p in players]
    _require(len(ids) == len(set(ids)), "duplicitné id hráča")

    current = data.get("current_player_id")
    _require(current is None or current in ids, "current_player_id nepatrí hráčovi")
    started_at = data.get("started_at")
    _require(started_at is None or isinstance(started_at, (int, float)), "started_at")

    board_tiles = _parse_tiles(data.get("board", []), size, "board")
    pending = _parse_tiles(data.get("pending", []), size, "pending")
    occupied = {(t["row"], t["col"]) for t in board_tiles}
    _require(
        not any((t["row"], t["col"]) in occupied for t in pending),
        "čakajúca kocka na obsadenom poli",
    )

    return GameSnapshot(
        schema_version=SCHEMA_VERSION,
        game_id=str(data.get("game_id") or ""),
        phase=phase,
        board_size=size,
        board=board_tiles,
        pending=pending,
        pending_direction=pending_direction,
        players=players,
        current_player_id=current,
        started_at=float(started_at) if started_at is not None else None,
    )


# ------------------------- Obnova -------------------------

def _placed(t: TileState, *, is_new: bool) -> PlacedTile:
    return PlacedTile(t["row"], t["col"], Tile(t["letter"], t["blank"]), is_new=is_new)


def restore_session(
    snapshot: GameSnapshot,
    *,
    board: Board | None = None,
    **session_kwargs: Any,
) -> GameSession:
    """Zo `GameSnapshot` v1 vybuduje `GameSession` s doskou, hráčmi a históriou.

    - Prémiové typy sa berú z `board` (alebo štandardnej mapy), zo stavu
      sa aplikujú iba kocky.
    """
    board = board if board is not None else Board()
    if board.size != snapshot["board_size"]:
        raise ValueError(
            f"Rozmer dosky {board.size} nesedí so snapshotom {snapshot['board_size']}"
        )
    board.clear()
    board.place_tiles(_placed(t, is_new=False) for t in snapshot.get("board", []))

    session = GameSession(board=board, game_id=snapshot.get("game_id") or None, **session_kwargs)
    for p in snapshot.get("players", []):
        player = Player(id=p["id"], name=p["name"], score=p["score"])
        for w in p["words"]:
            player.words.append(
                PlayedWord(
                    id=w["id"],
                    word=w["word"],
                    score=w["score"],
                    tiles=[_placed(t, is_new=False) for t in w["tiles"]],
                    timestamp=w["timestamp"],
                    breakdown=[
                        ScoreBreakdown(
                            word=bd["word"],
                            base_points=bd["score"],
                            letter_bonus_points=0,
                            word_multiplier=1,
                            total=bd["score"],
                        )
                        for bd in w["breakdown"]
                    ],
                    seq=w["seq"],
                )
            )
        session.players.append(player)

    session.phase = GamePhase(snapshot.get("phase", "setup"))
    session.current_player_id = snapshot.get("current_player_id")
    session.started_at = snapshot.get("started_at")
    session.pending = [_placed(t, is_new=True) for t in snapshot.get("pending", [])]
    direction = snapshot.get("pending_direction")
    session.pending_direction = Direction(direction) if direction else None
    return session


def build_game_record(session: GameSession, *, ended_at: float | None = None) -> GameRecord:
    """Záznam ukončenej partie: hráči, slová s číslom ťahu, víťaz, trvanie."""
    # cislo tahu = poradie potvrdenia v celej partii
    all_plays = sorted(
        (pw.timestamp, pw.seq, pi, wi)
        for pi, p in enumerate(session.players)
        for wi, pw in enumerate(p.words)
    )
    turn_of = {(pi, wi): n + 1 for n, (_ts, _seq, pi, wi) in enumerate(all_plays)}

    duration: int | None = None
    if session.started_at is not None:
        end = ended_at if ended_at is not None else session.clock()
        duration = max(0, round((end - session.started_at) / 60))

    winner = session.winner()
    return GameRecord(
        players=[
            {
                "name": p.name,
                "score": p.score,
                "words": [
                    {"word": pw.word, "score": pw.score, "turn": turn_of[(pi, wi)]}
                    for wi, pw in enumerate(p.words)
                ],
            }
            for pi, p in enumerate(session.players)
        ],
        winner=winner.name if winner else None,
        total_turns=session.turn_count,
        duration_minutes=duration,
        board=[_tile_state(t) for t in session.board.committed_tiles()],
    )
