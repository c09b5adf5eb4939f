from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

Color = Literal["blue", "red", "green", "yellow", "none"]
Resource = Literal["bull", "ananas", "blues"]

# Inclusive upper bound of the night range; card indices run 0..99.
NIGHT_MAX_INDEX = 20
SANCTUARY_INDEX = -1


@dataclass(frozen=True)
class StaticPoints:
    type: Literal["static"]
    value: int


@dataclass(frozen=True)
class ColorCountPoints:
    type: Literal["color_count"]
    value: int
    colors: tuple[Color, ...]


@dataclass(frozen=True)
class NightCountPoints:
    type: Literal["night_count"]
    value: int


@dataclass(frozen=True)
class ResourceCountPoints:
    type: Literal["resource_count"]
    value: int
    resource: Resource


@dataclass(frozen=True)
class SanctuaryCountPoints:
    type: Literal["sanctuary_count"]
    value: int


@dataclass(frozen=True)
class NoPoints:
    type: Literal["none"] = "none"


Scoring = StaticPoints | ColorCountPoints | NightCountPoints | ResourceCountPoints | SanctuaryCountPoints | NoPoints


@dataclass(frozen=True)
class CardDefinition:
    """Rules attributes of a card. Never mutated once loaded.

    `resources` are the units the card provides when played; `conditions`
    are displayed next to the scoring text but are not enforced.
    """

    index: int
    color: Color
    resources: Mapping[Resource, int] = field(default_factory=dict)
    conditions: Mapping[Resource, int] = field(default_factory=dict)
    scoring: Scoring = field(default_factory=NoPoints)
    sanctuary: bool = False
    night: bool | None = None  # explicit override, used by sanctuaries

    @property
    def is_night(self) -> bool:
        if self.night is not None:
            return self.night
        return 0 <= self.index <= NIGHT_MAX_INDEX

    def resource_count(self, resource: Resource) -> int:
        return self.resources.get(resource, 0)


@dataclass(frozen=True)
class CardCatalog:
    """Card and sanctuary definitions. Duplicates are allowed (multiset)."""

    cards: tuple[CardDefinition, ...]
    sanctuaries: tuple[CardDefinition, ...] = ()

    def __len__(self) -> int:
        return len(self.cards)

    def replicated(self, copies: int) -> Sequence[CardDefinition]:
        return [d for _ in range(max(0, copies)) for d in self.cards]
