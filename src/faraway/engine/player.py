from __future__ import annotations

from dataclasses import dataclass, field

from .cards import Card, Sanctuary


@dataclass
class Player:
    """One seat at the table.

    `hand` order is only cosmetic. `played` order matters: the last played
    card decides draft priority. Hand and played cards are moved by the
    session only; the one mutation a player exposes is its selection.
    """

    seat: int
    hand: list[Card]
    orientation: float = 0.0
    is_own: bool = False
    played: list[Card] = field(default_factory=list)
    sanctuaries: list[Sanctuary] = field(default_factory=list)
    selected_index: int = -1  # -1 means nothing selected

    def select_hand_card(self, index: int) -> None:
        if index < 0 or index >= len(self.hand):
            return
        if self.selected_index == index:
            self.selected_index = -1
        else:
            self.selected_index = index

    def last_played_card(self) -> Card | None:
        if self.played:
            return self.played[-1]
        return None

    @property
    def has_selected(self) -> bool:
        return self.selected_index >= 0

    def tableau(self) -> list[Card]:
        return [*self.played, *self.sanctuaries]
