from __future__ import annotations

import itertools
import random

import pytest

from faraway.engine.deck import DeckUnderflowError, build_deck, deal, shuffle
from faraway.engine.types import CardDefinition


def test_shuffle_is_uniform_over_all_permutations() -> None:
    rng = random.Random(20240611)
    n = 4
    perms = list(itertools.permutations(range(n)))
    trials = 24_000
    counts = {p: 0 for p in perms}
    for _ in range(trials):
        items = list(range(n))
        shuffle(rng, items)
        counts[tuple(items)] += 1

    expected = trials / len(perms)
    chi2 = sum((c - expected) ** 2 / expected for c in counts.values())
    # 23 degrees of freedom, p = 0.001
    assert chi2 < 49.73
    assert all(c > 0 for c in counts.values())


def test_shuffle_keeps_the_multiset() -> None:
    rng = random.Random(1)
    items = [1, 1, 2, 3, 5, 8, 13]
    shuffled = list(items)
    shuffle(rng, shuffled)
    assert sorted(shuffled) == sorted(items)

    empty: list[int] = []
    shuffle(rng, empty)
    assert empty == []


def test_shuffle_is_seeded() -> None:
    a = list(range(20))
    b = list(range(20))
    shuffle(random.Random(7), a)
    shuffle(random.Random(7), b)
    assert a == b


def test_deal_takes_from_the_top() -> None:
    deck = list("abcdef")
    assert deal(deck, 2) == ["a", "b"]
    assert deck == list("cdef")
    assert deal(deck, 0) == []
    assert deal(deck, 4) == list("cdef")
    assert deck == []


def test_deal_underflow_fails_fast() -> None:
    deck = [1, 2, 3]
    with pytest.raises(DeckUnderflowError) as exc:
        deal(deck, 4)
    assert exc.value.requested == 4
    assert exc.value.remaining == 3
    assert deck == [1, 2, 3]

    with pytest.raises(ValueError):
        deal(deck, -1)


def test_build_deck_gives_each_copy_its_own_uid() -> None:
    d = CardDefinition(index=44, color="yellow")
    cards = build_deck([d, d, d], first_uid=10)
    assert [c.uid for c in cards] == [10, 11, 12]
    assert all(c.definition is d for c in cards)
    assert all(c.face_down for c in cards)
