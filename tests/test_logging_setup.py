from __future__ import annotations

import logging

from scrabkeeper.logging_setup import (
    GAME_ID_VAR,
    _GameIdFilter,
    bind_game_id,
    configure_logging,
    default_log_path,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("scrabkeeper.game", logging.INFO, __file__, 1, "commit", None, None)


def test_filter_adds_bound_game_id() -> None:
    f = _GameIdFilter()
    rec = _record()
    assert f.filter(rec)
    assert rec.game_id == "-"
    with bind_game_id("g42"):
        assert GAME_ID_VAR.get() == "g42"
        rec = _record()
        f.filter(rec)
        assert rec.game_id == "g42"
    assert GAME_ID_VAR.get() == "-"


def test_default_log_path(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SCRABKEEPER_LOG_PATH", str(tmp_path / "x.log"))
    assert default_log_path() == str(tmp_path / "x.log")
    monkeypatch.delenv("SCRABKEEPER_LOG_PATH")
    assert default_log_path().endswith("scrabkeeper.log")


def test_configure_logging_installs_handlers_once(tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers, root.level
    root.handlers = []
    log_file = tmp_path / "scrabkeeper.log"
    try:
        logger = configure_logging(log_path=str(log_file))
        assert logger.name == "scrabkeeper"
        installed = list(root.handlers)
        assert len(installed) == 2

        configure_logging(log_path=str(log_file))
        assert root.handlers == installed

        with bind_game_id("g7"):
            logging.getLogger("scrabkeeper.game").info("commit word=CAT")
        for h in installed:
            h.flush()
        assert "[game=g7] commit word=CAT" in log_file.read_text(encoding="utf-8")
    finally:
        for h in root.handlers:
            h.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
