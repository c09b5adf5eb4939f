from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Mapping, Sequence

from faraway.engine import BotManager, Decision, DumbBot, GameSession, RoundState, SessionConfig, snapshot
from faraway.paths import get_paths
from faraway.services.content import ContentError, ContentService
from faraway.services.telemetry import TelemetryObserver, TelemetryService


def _card_label(card: Mapping[str, object]) -> str:
    if card["face_down"]:
        return "[??]"
    res = "".join(f" {k}:{v}" for k, v in card["resources"].items())  # type: ignore[attr-defined]
    night = "*" if card["night"] else ""
    sanctuary = " S" if card["sanctuary"] else ""
    scoring = card["scoring_text"]
    return f"[{card['index']}{night} {card['color']}{res}{sanctuary} ({scoring})]"


def format_table(snap: Mapping[str, object]) -> list[str]:
    lines = [f"Round {snap['rounds']} - {snap['state']}"]
    row = snap["row"]
    assert isinstance(row, list)
    lines.append("Row:  " + " ".join(f"{i}:{_card_label(c)}" for i, c in enumerate(row)))
    players = snap["players"]
    assert isinstance(players, list)
    for p in players:
        who = "you" if p["is_own"] else f"seat {p['seat']}"
        hand = " ".join(f"{i}:{_card_label(c)}" for i, c in enumerate(p["hand"]))
        played = " ".join(_card_label(c) for c in p["played"])
        mark = f" (selected {p['selected_index']})" if p["selected_index"] >= 0 else ""
        lines.append(f"{who:>7} | score {p['score']:>3} | hand {hand}{mark}")
        lines.append(f"{'':>7} | played {played}")
    return lines


class TerminalPlayer:
    """Reads the own player's choices from a prompt and submits them as decisions."""

    def __init__(
        self,
        session: GameSession,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.session = session
        self.read = read
        self.write = write

    def wants_input(self) -> RoundState | None:
        s = self.session
        own = s.own_player
        if s.finished:
            return None
        if s.state == RoundState.PLAY and not own.has_selected:
            return RoundState.PLAY
        if s.state == RoundState.PICK and s.pick_priority() == own.seat:
            return RoundState.PICK
        return None

    def turn(self) -> bool:
        """Prompt once. Returns False when the player quits."""
        state = self.wants_input()
        if state is None:
            return True
        for line in format_table(snapshot(self.session)):
            self.write(line)
        what = "hand card to play" if state == RoundState.PLAY else "row card to pick"
        try:
            raw = self.read(f"Choose a {what} (q to quit): ").strip()
        except EOFError:
            return False
        if raw.lower() in ("q", "quit"):
            return False
        try:
            choice = int(raw)
        except ValueError:
            self.write(f"Not a number: {raw!r}")
            return True
        seat = self.session.own_player.seat
        decision = Decision.play(seat, choice) if state == RoundState.PLAY else Decision.pick(seat, choice)
        res = self.session.submit(decision)
        if not res.ok and res.error:
            self.write(res.error)
        return True


def run(session: GameSession, human: TerminalPlayer | None, write: Callable[[str], None] = print) -> int:
    while not session.finished:
        if human is not None and human.wants_input() is not None:
            if not human.turn():
                write("Bye.")
                return 1
            continue
        before = (session.state, session.rounds, session.finished)
        session.update()
        if (session.state, session.rounds, session.finished) == before:
            write("Nobody can act; the game is stalled.")
            return 1

    scores = session.scores()
    write(f"Game over ({session.end_reason}) after round {session.rounds}.")
    for seat, score in enumerate(scores):
        write(f"  seat {seat}: {score}")
    write("Winner(s): " + ", ".join(str(w) for w in session.winners()))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="faraway")
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--seat", type=int, default=0, help="seat of the own player")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--rounds", type=int, default=SessionConfig.final_round)
    parser.add_argument("--copies", type=int, default=SessionConfig.catalog_copies)
    parser.add_argument("--autoplay", action="store_true", help="let a bot play the own seat too")
    parser.add_argument("--telemetry", type=Path, default=None, help="append JSONL telemetry to this file")
    args = parser.parse_args(argv)

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    try:
        catalog = content.load_catalog()
    except ContentError as e:
        print(e)
        return 2

    config = SessionConfig(final_round=args.rounds, catalog_copies=args.copies)
    try:
        session = GameSession(catalog, args.players, args.seat, seed=args.seed, config=config)
    except ValueError as e:
        parser.error(str(e))

    if args.telemetry is not None:
        session.subscribe(TelemetryObserver(TelemetryService(args.telemetry)))

    human: TerminalPlayer | None = None
    if args.autoplay:
        bots = BotManager(session, {p.seat: DumbBot() for p in session.players})
    else:
        bots = BotManager(session)
        human = TerminalPlayer(session)
    bots.start()
    return run(session, human)


if __name__ == "__main__":
    raise SystemExit(main())
