from __future__ import annotations

from faraway.engine import (
    BotManager,
    Decision,
    DumbBot,
    GameSession,
    Notification,
    RoundState,
    SessionConfig,
    replay,
    snapshot,
)
from faraway.engine.types import CardCatalog
from faraway.paths import get_paths
from faraway.services.content import ContentService


def _load_catalog() -> CardCatalog:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir).load_catalog()


def _all_uids(session: GameSession) -> list[int]:
    uids = [c.uid for c in session.deck]
    uids += [c.uid for c in session.row]
    uids += [c.uid for c in session.discard]
    for p in session.players:
        uids += [c.uid for c in p.hand]
        uids += [c.uid for c in p.played]
    return uids


class _InvariantChecker:
    """Checks table invariants every time the session reports something."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.total = len(_all_uids(session))
        self.rounds_seen: list[int] = [session.rounds]
        self.transitions: list[RoundState] = []

    def notify(self, notification: Notification) -> None:
        s = self.session
        uids = _all_uids(s)
        assert len(uids) == self.total
        assert len(set(uids)) == self.total

        for p in s.players:
            assert p.selected_index == -1 or p.selected_index < len(p.hand)

        assert notification.rounds >= self.rounds_seen[-1]
        assert notification.rounds - self.rounds_seen[-1] in (0, 1)
        self.rounds_seen.append(notification.rounds)

        if notification.kind == "state_changed":
            self.transitions.append(notification.state)
            if notification.state == RoundState.SANCTUARY:
                # PLAY only completes once everybody committed a card
                assert all(len(p.played) == s.rounds for p in s.players)
            if notification.state == RoundState.PLAY:
                # PICK only completes once every hand is full again
                assert all(len(p.hand) == s.config.hand_size for p in s.players)


def test_dumb_bot_always_answers_zero() -> None:
    bot = DumbBot()
    assert bot.play_card({}, 0) == 0
    assert bot.pick_card({}, 0) == 0
    assert bot.pick_sanctuary({}, 0, []) == 0


def test_bots_play_a_full_game() -> None:
    session = GameSession(_load_catalog(), 4, 0, seed=42)
    checker = _InvariantChecker(session)
    session.subscribe(checker)

    bots = BotManager(session, {p.seat: DumbBot() for p in session.players})
    bots.start()

    assert session.finished
    assert session.end_reason == "final_round"
    assert session.rounds == 8
    assert all(len(p.played) == 8 for p in session.players)
    assert all(len(p.hand) == 2 for p in session.players)
    # 7 full cycles, plus the final PLAY -> SANCTUARY
    assert checker.transitions.count(RoundState.PLAY) == 7
    assert checker.transitions.count(RoundState.SANCTUARY) == 8
    assert checker.rounds_seen[-1] == 8


def test_bots_stop_when_the_deck_runs_dry() -> None:
    session = GameSession(_load_catalog(), 2, 0, seed=5, config=SessionConfig(catalog_copies=1))
    BotManager(session, {0: DumbBot(), 1: DumbBot()}).start()

    # 15 cards: 9 dealt, then two refills of 3
    assert session.finished
    assert session.end_reason == "deck_exhausted"
    assert session.rounds == 3
    assert session.deck == []


def test_bots_wait_for_the_own_player() -> None:
    session = GameSession(_load_catalog(), 3, 0, seed=9)
    BotManager(session).start()

    assert session.state == RoundState.PLAY
    assert session.players[0].selected_index == -1
    assert session.players[1].selected_index == 0
    assert session.players[2].selected_index == 0

    own = session.own_player
    steps = 0
    while not session.finished:
        steps += 1
        assert steps < 500
        if session.state == RoundState.PLAY and not own.has_selected:
            assert session.submit(Decision.play(own.seat, len(own.hand) - 1)).ok
        elif session.state == RoundState.PICK and session.pick_priority() == own.seat:
            assert session.submit(Decision.pick(own.seat, 0)).ok
        else:
            session.update()

    assert session.end_reason == "final_round"
    assert len(own.played) == 8


def test_replay_reproduces_the_table() -> None:
    catalog = _load_catalog()
    session = GameSession(catalog, 4, 2, seed=1234)
    BotManager(session, {p.seat: DumbBot() for p in session.players}).start()
    assert session.finished

    again = replay(catalog, 4, 2, seed=1234, decisions=list(session.decision_log))
    assert snapshot(again) == snapshot(session)
    assert again.scores() == session.scores()


def test_different_seeds_deal_differently() -> None:
    catalog = _load_catalog()
    a = GameSession(catalog, 4, 0, seed=1)
    b = GameSession(catalog, 4, 0, seed=2)
    assert [c.uid for c in a.deck] != [c.uid for c in b.deck]
