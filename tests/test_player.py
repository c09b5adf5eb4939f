from __future__ import annotations

from faraway.engine.cards import Card
from faraway.engine.player import Player
from faraway.engine.types import CardDefinition


def _hand(*indices: int) -> list[Card]:
    return [Card(uid=i, definition=CardDefinition(index=idx, color="red")) for i, idx in enumerate(indices)]


def test_select_toggles() -> None:
    p = Player(seat=0, hand=_hand(10, 20, 30))
    assert p.selected_index == -1

    p.select_hand_card(1)
    assert p.selected_index == 1
    assert p.has_selected

    p.select_hand_card(2)
    assert p.selected_index == 2

    p.select_hand_card(2)
    assert p.selected_index == -1
    assert not p.has_selected


def test_select_out_of_range_is_ignored() -> None:
    p = Player(seat=0, hand=_hand(10, 20))
    p.select_hand_card(0)
    p.select_hand_card(2)
    p.select_hand_card(-1)
    assert p.selected_index == 0


def test_last_played_card() -> None:
    p = Player(seat=1, hand=_hand(5))
    assert p.last_played_card() is None
    first, second = _hand(40, 12)
    p.played.extend([first, second])
    assert p.last_played_card() is second
    assert p.tableau() == [first, second]
