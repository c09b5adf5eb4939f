from __future__ import annotations

from dataclasses import dataclass

from .types import Color, Resource, Scoring, CardDefinition, SANCTUARY_INDEX


@dataclass(eq=False)
class Card:
    """A physical copy of a card definition on the table.

    Identity is the `uid`; two copies of the same definition are different
    cards. Only `face_down` changes during play.
    """

    uid: int
    definition: CardDefinition
    face_down: bool = True

    @property
    def index(self) -> int:
        return self.definition.index

    @property
    def color(self) -> Color:
        return self.definition.color

    @property
    def is_night(self) -> bool:
        return self.definition.is_night

    @property
    def has_sanctuary(self) -> bool:
        return self.definition.sanctuary

    @property
    def scoring(self) -> Scoring:
        return self.definition.scoring

    def resource_count(self, resource: Resource) -> int:
        return self.definition.resource_count(resource)


class Sanctuary(Card):
    """Sanctuaries are never hidden and have no identity index.

    The session has no claim rule yet, so nothing deals these during play;
    the catalog still loads them and scoring counts any that a tableau holds.
    """

    def __init__(self, uid: int, definition: CardDefinition) -> None:
        if definition.index != SANCTUARY_INDEX:
            raise ValueError(f"Sanctuary definitions must use index {SANCTUARY_INDEX}")
        super().__init__(uid=uid, definition=definition, face_down=False)
