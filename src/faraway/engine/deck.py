from __future__ import annotations

import random
from typing import MutableSequence, Sequence, TypeVar

from .cards import Card
from .types import CardDefinition

T = TypeVar("T")


class DeckUnderflowError(RuntimeError):
    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(f"Cannot deal {requested} card(s), only {remaining} left in the deck.")
        self.requested = requested
        self.remaining = remaining


def shuffle(rng: random.Random, items: MutableSequence[T]) -> None:
    """In-place Fisher-Yates shuffle driven by `rng`."""
    rng.shuffle(items)


def deal(deck: list[T], n: int) -> list[T]:
    """Remove and return the top `n` cards (index 0 is the top)."""
    if n < 0:
        raise ValueError("Cannot deal a negative number of cards.")
    if n > len(deck):
        raise DeckUnderflowError(n, len(deck))
    dealt = deck[:n]
    del deck[:n]
    return dealt


def build_deck(definitions: Sequence[CardDefinition], first_uid: int = 0) -> list[Card]:
    return [Card(uid=first_uid + i, definition=d) for i, d in enumerate(definitions)]