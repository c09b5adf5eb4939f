from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .decisions import Decision, RoundState
from .notify import Notification
from .serialize import snapshot
from .session import GameSession

Snapshot = Mapping[str, object]


class DecisionSource(Protocol):
    """Produces choice indices from a table snapshot, one method per round state."""

    name: str

    def play_card(self, snap: Snapshot, seat: int) -> int: ...

    def pick_card(self, snap: Snapshot, seat: int) -> int: ...

    def pick_sanctuary(self, snap: Snapshot, seat: int, offered: Sequence[Mapping[str, object]]) -> int: ...


class DumbBot:
    """Always takes the first option."""

    name = "DumbBot"

    def play_card(self, snap: Snapshot, seat: int) -> int:
        return 0

    def pick_card(self, snap: Snapshot, seat: int) -> int:
        return 0

    def pick_sanctuary(self, snap: Snapshot, seat: int, offered: Sequence[Mapping[str, object]]) -> int:
        return 0


class BotManager:
    """Feeds bot decisions into a session whenever it tells us something changed.

    Bots play as soon as a PLAY round opens, all answer the (empty) sanctuary
    offer, and during PICK only the bot holding draft priority picks.
    """

    def __init__(self, session: GameSession, bots: Mapping[int, DecisionSource] | None = None) -> None:
        self.session = session
        if bots is None:
            bots = {p.seat: DumbBot() for p in session.players if not p.is_own}
        self.bots: dict[int, DecisionSource] = dict(bots)

    def start(self) -> None:
        """Subscribe and act on the state the session is already in."""
        self.session.subscribe(self)
        self.notify(
            Notification(
                kind="state_changed",
                state=self.session.state,
                rounds=self.session.rounds,
                snapshot=snapshot(self.session),
            )
        )

    def notify(self, notification: Notification) -> None:
        if notification.kind == "game_over":
            return
        snap = notification.snapshot
        state = notification.state

        if state == RoundState.PLAY and notification.kind == "state_changed":
            players = snap["players"]
            assert isinstance(players, list)
            for seat, bot in self.bots.items():
                if players[seat]["selected_index"] < 0:
                    self.session.submit(Decision.play(seat, bot.play_card(snap, seat)))

        elif state == RoundState.SANCTUARY and notification.kind == "state_changed":
            for seat, bot in self.bots.items():
                self.session.submit(Decision.sanctuary(seat, bot.pick_sanctuary(snap, seat, [])))

        elif state == RoundState.PICK:
            seat = snap["pick_priority"]
            if isinstance(seat, int) and seat in self.bots:
                self.session.submit(Decision.pick(seat, self.bots[seat].pick_card(snap, seat)))
