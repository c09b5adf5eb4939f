from __future__ import annotations

from typing import Iterable, Sequence

from .cards import Card
from .types import (
    ColorCountPoints,
    NightCountPoints,
    NoPoints,
    ResourceCountPoints,
    SanctuaryCountPoints,
    Scoring,
    StaticPoints,
)


def evaluate(scoring: Scoring, cards: Iterable[Card]) -> int:
    """Points a single scoring strategy is worth over `cards`.

    Pure: only the composition of `cards` matters, never their order.
    """
    if isinstance(scoring, StaticPoints):
        return scoring.value
    if isinstance(scoring, ColorCountPoints):
        return scoring.value * sum(1 for c in cards if c.color in scoring.colors)
    if isinstance(scoring, NightCountPoints):
        return scoring.value * sum(1 for c in cards if c.is_night)
    if isinstance(scoring, ResourceCountPoints):
        return scoring.value * sum(c.resource_count(scoring.resource) for c in cards)
    if isinstance(scoring, SanctuaryCountPoints):
        return scoring.value * sum(1 for c in cards if c.has_sanctuary)
    if isinstance(scoring, NoPoints):
        return 0
    raise TypeError(f"Unknown scoring strategy: {scoring!r}")


def tableau_score(owned: Sequence[Card], pool: Sequence[Card]) -> int:
    """Sum every owned card's strategy evaluated over `pool`."""
    return sum(evaluate(card.scoring, pool) for card in owned)


def describe(scoring: Scoring) -> str:
    if isinstance(scoring, StaticPoints):
        return f"{scoring.value}"
    if isinstance(scoring, ColorCountPoints):
        return f"{scoring.value} x [{'/'.join(scoring.colors)}]"
    if isinstance(scoring, NightCountPoints):
        return f"{scoring.value} x night"
    if isinstance(scoring, ResourceCountPoints):
        return f"{scoring.value} x {scoring.resource}"
    if isinstance(scoring, SanctuaryCountPoints):
        return f"{scoring.value} x sanctuary"
    return "-"
