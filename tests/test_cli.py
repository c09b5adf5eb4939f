from __future__ import annotations

import json
from pathlib import Path

import pytest

from faraway.cli import TerminalPlayer, format_table, main, run
from faraway.engine import BotManager, GameSession, snapshot
from faraway.paths import get_paths
from faraway.services.content import ContentService


def _session(seed: int = 0) -> GameSession:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_catalog()
    return GameSession(catalog, 3, 0, seed=seed)


def test_autoplay_runs_to_the_end(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    telemetry = tmp_path / "t.jsonl"
    code = main(["--autoplay", "--players", "3", "--seed", "5", "--telemetry", str(telemetry)])
    assert code == 0
    out = capsys.readouterr().out
    assert "Game over (final_round) after round 8." in out
    assert "Winner(s):" in out
    last = json.loads(telemetry.read_text(encoding="utf-8").splitlines()[-1])
    assert last["type"] == "game_over"


def test_bad_seat_is_a_usage_error() -> None:
    with pytest.raises(SystemExit):
        main(["--players", "2", "--seat", "3"])


def test_terminal_player_with_scripted_input() -> None:
    session = _session(seed=3)
    answers = iter(["x", "7"] + ["0"] * 100)
    out: list[str] = []
    human = TerminalPlayer(session, read=lambda prompt: next(answers), write=out.append)
    BotManager(session).start()

    assert run(session, human, write=out.append) == 0
    assert session.finished
    assert "Not a number: 'x'" in out
    assert "Invalid hand index." in out
    assert any(line.startswith("Winner(s):") for line in out)


def test_terminal_player_can_quit() -> None:
    session = _session()
    out: list[str] = []
    human = TerminalPlayer(session, read=lambda prompt: "q", write=out.append)
    BotManager(session).start()
    assert run(session, human, write=out.append) == 1
    assert out[-1] == "Bye."


def test_format_table_hides_face_down_cards() -> None:
    session = _session()
    lines = format_table(snapshot(session))
    assert lines[0] == "Round 1 - PLAY"
    assert "[??]" in lines[4]  # seat 1 hand
    assert "[??]" not in lines[2]  # own hand
