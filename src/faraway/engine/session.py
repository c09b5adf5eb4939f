from __future__ import annotations

import math
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable, Literal

from .cards import Card
from .deck import build_deck, deal, shuffle
from .decisions import Decision, RoundState
from .notify import Notification, NotificationChannel, NotificationKind, Observer
from .player import Player
from .scoring import tableau_score
from .serialize import snapshot
from .types import CardCatalog

Event = dict[str, object]

ScoringScope = Literal["table", "own"]
RejectReason = Literal["invalid_choice", "wrong_phase", "out_of_turn", "game_over"]
EndReason = Literal["final_round", "deck_exhausted"]


@dataclass(frozen=True)
class SessionConfig:
    hand_size: int = 3
    final_round: int = 8
    catalog_copies: int = 4
    shuffle: bool = True
    scoring_scope: ScoringScope = "table"


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    reason: RejectReason | None = None
    # Submitted during a notification: validation happens later, and the
    # outcome is reported in `deferred` of the call that was running.
    queued: bool = False
    deferred: list[StepResult] = field(default_factory=list)


def _reject(reason: RejectReason, error: str) -> StepResult:
    return StepResult(ok=False, events=[], error=error, reason=reason)


def seat_orientation(seat: int, player_count: int) -> float:
    return -math.pi / 2 + seat * 2 * math.pi / player_count


class GameSession:
    """The round state machine: sole owner and writer of the table.

    Every card lives in exactly one of: the deck, the draft row, the discard
    pile, a hand, a played-cards list. Cards only move inside `submit` and
    `update`, and each call runs to completion before the next decision is
    looked at; decisions submitted by observers while a notification is
    being delivered are queued and applied in order afterwards.
    """

    def __init__(
        self,
        catalog: CardCatalog,
        player_count: int,
        own_seat: int,
        seed: int = 0,
        config: SessionConfig | None = None,
    ) -> None:
        cfg = config or SessionConfig()
        if player_count < 1:
            raise ValueError("A session needs at least one player.")
        if own_seat < 0 or own_seat >= player_count:
            raise ValueError("The own player seat should be less than the total number of players.")

        self.catalog = catalog
        self.config = cfg
        self.seed = seed
        self.rng = random.Random(seed)
        self.channel = NotificationChannel()

        self.deck: list[Card] = build_deck(catalog.replicated(cfg.catalog_copies))
        needed = player_count + 1 + player_count * cfg.hand_size
        if len(self.deck) < needed:
            raise ValueError(
                f"Deck holds {len(self.deck)} cards but {needed} are needed to deal {player_count} players."
            )
        if cfg.shuffle:
            shuffle(self.rng, self.deck)

        self.discard: list[Card] = []
        self.row: list[Card] = deal(self.deck, player_count + 1)
        for card in self.row:
            card.face_down = False

        self.players: list[Player] = []
        for seat in range(player_count):
            player = Player(
                seat=seat,
                hand=deal(self.deck, cfg.hand_size),
                orientation=seat_orientation(seat, player_count),
                is_own=seat == own_seat,
            )
            if player.is_own:
                for card in player.hand:
                    card.face_down = False
            self.players.append(player)

        self.state = RoundState.PLAY
        self.rounds = 1
        self.finished = False
        self.end_reason: EndReason | None = None

        self.decision_log: list[Decision] = []
        self.event_log: list[Event] = []
        self._queue: deque[Decision] = deque()
        self._busy = False

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def own_player(self) -> Player:
        return next(p for p in self.players if p.is_own)

    # ------------------------------------------------------------------
    # Queries

    def pick_priority(self) -> int | None:
        """Seat allowed to draft next, or None if nobody may pick.

        Only defined during PICK. Eligible players hold one card less than a
        full hand and have played at least once. The lowest last-played index
        wins; equal indices go to the lower seat.
        """
        if self.state != RoundState.PICK:
            return None
        eligible = [
            p for p in self.players if len(p.hand) == self.config.hand_size - 1 and p.played
        ]
        if not eligible:
            return None
        best = min(eligible, key=lambda p: (p.last_played_card().index, p.seat))  # type: ignore[union-attr]
        return best.seat

    def scoring_pool(self, seat: int) -> list[Card]:
        if self.config.scoring_scope == "own":
            return self.players[seat].tableau()
        return [c for p in self.players for c in p.tableau()]

    def scores(self) -> list[int]:
        return [tableau_score(p.tableau(), self.scoring_pool(p.seat)) for p in self.players]

    def winners(self) -> list[int]:
        scores = self.scores()
        best = max(scores)
        return [seat for seat, s in enumerate(scores) if s == best]

    # ------------------------------------------------------------------
    # Entry points

    def submit(self, decision: Decision) -> StepResult:
        """Validate and apply one decision, then settle the round state."""
        if self._busy:
            self._queue.append(decision)
            return StepResult(ok=True, events=[], queued=True)
        return self._run(lambda: self._apply(decision))

    def update(self) -> None:
        """Settle pending transitions without a decision (e.g. leave SANCTUARY)."""
        if self._busy:
            return

        def settle_twice() -> StepResult:
            self._settle()
            self._settle()
            return StepResult(ok=True, events=[])

        self._run(settle_twice)

    def subscribe(self, observer: Observer) -> None:
        self.channel.subscribe(observer)

    # ------------------------------------------------------------------
    # Internals

    def _run(self, fn: Callable[[], StepResult]) -> StepResult:
        self._busy = True
        try:
            result = fn()
            while self._queue:
                result.deferred.append(self._apply(self._queue.popleft()))
        finally:
            # An observer error aborts the run; what it queued goes with it.
            self._queue.clear()
            self._busy = False
        return result

    def _apply(self, decision: Decision) -> StepResult:
        if self.finished:
            return _reject("game_over", "The game is over.")

        # Log first so replay sees every attempted decision, rejected ones included.
        self.decision_log.append(decision)
        start = len(self.event_log)

        # A single decision can both complete a phase and need the next one,
        # so settle on the way in as well as on the way out.
        self._settle()
        if self.finished:
            return _reject("game_over", "The game is over.")

        if decision.state != self.state:
            return _reject("wrong_phase", f"Expected a {self.state.name} decision.")
        if decision.player < 0 or decision.player >= len(self.players):
            return _reject("invalid_choice", "Invalid player index.")

        player = self.players[decision.player]

        if decision.state == RoundState.PLAY:
            if decision.choice < 0 or decision.choice >= len(player.hand):
                return _reject("invalid_choice", "Invalid hand index.")
            player.select_hand_card(decision.choice)
            self._log(
                {"type": "CARD_SELECTED", "player": player.seat, "hand_index": player.selected_index}
            )

        elif decision.state == RoundState.PICK:
            if decision.choice < 0 or decision.choice >= len(self.row):
                return _reject("invalid_choice", "Invalid draft row index.")
            if self.pick_priority() != player.seat:
                return _reject("out_of_turn", "Another player picks first.")
            card = self.row.pop(decision.choice)
            card.face_down = not player.is_own
            player.hand.append(card)
            self._log({"type": "CARD_PICKED", "player": player.seat, "card_uid": card.uid})

        else:
            # Sanctuary claims are not part of the rules yet: nothing is ever offered.
            return _reject("invalid_choice", "No sanctuary is on offer.")

        if not self._settle():
            self._publish("decision_applied", decision)
        return StepResult(ok=True, events=self.event_log[start:])

    def _settle(self) -> bool:
        """Run the completion check for the current state once.

        Returns True if a transition (or the end of the game) happened.
        """
        if self.finished:
            return False

        if self.state == RoundState.PLAY:
            if not all(p.has_selected for p in self.players):
                return False
            for p in self.players:
                card = p.hand.pop(p.selected_index)
                card.face_down = False
                p.played.append(card)
                p.selected_index = -1
                self._log({"type": "CARD_PLAYED", "player": p.seat, "card_uid": card.uid})
            self._change_state()
            return True

        if self.state == RoundState.SANCTUARY:
            if self.rounds >= self.config.final_round:
                self._finish("final_round")
                return True
            self._change_state()
            return True

        if not all(len(p.hand) == self.config.hand_size for p in self.players):
            return False
        needed = len(self.players) + 1
        if len(self.deck) < needed:
            self._finish("deck_exhausted")
            return True
        self.discard.extend(self.row)
        self.row = deal(self.deck, needed)
        for card in self.row:
            card.face_down = False
        self.rounds += 1
        self._log({"type": "ROW_REFILLED", "round": self.rounds, "cards": [c.uid for c in self.row]})
        self._change_state()
        return True

    def _change_state(self) -> None:
        previous = self.state
        self.state = self.state.next()
        self._log({"type": "STATE_CHANGED", "from": previous.name, "to": self.state.name, "round": self.rounds})
        self._publish("state_changed")

    def _finish(self, reason: EndReason) -> None:
        self.finished = True
        self.end_reason = reason
        self._log({"type": "GAME_ENDED", "reason": reason, "scores": self.scores(), "winners": self.winners()})
        self._publish("game_over")

    def _log(self, event: Event) -> None:
        self.event_log.append(event)

    def _publish(self, kind: NotificationKind, decision: Decision | None = None) -> None:
        self.channel.publish(
            Notification(
                kind=kind,
                state=self.state,
                rounds=self.rounds,
                snapshot=snapshot(self),
                decision=decision,
            )
        )


def replay(
    catalog: CardCatalog,
    player_count: int,
    own_seat: int,
    seed: int,
    decisions: Iterable[Decision],
    config: SessionConfig | None = None,
) -> GameSession:
    session = GameSession(catalog, player_count, own_seat, seed=seed, config=config)
    for d in decisions:
        session.submit(d)
        if session.finished:
            break
    return session
