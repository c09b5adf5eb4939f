from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class RoundState(IntEnum):
    PLAY = 0  # every player commits one card from hand
    SANCTUARY = 1  # players holding sanctuaries would claim one here
    PICK = 2  # players draft from the row, lowest last-played index first

    def next(self) -> "RoundState":
        return RoundState((self + 1) % len(RoundState))


@dataclass(frozen=True)
class Decision:
    """A choice submitted by a human adapter or a bot.

    `choice` is a hand index during PLAY, a draft-row index during PICK and
    an index into the offered sanctuaries during SANCTUARY.
    """

    state: RoundState
    player: int
    choice: int

    @staticmethod
    def play(player: int, hand_index: int) -> "Decision":
        return Decision(state=RoundState.PLAY, player=player, choice=hand_index)

    @staticmethod
    def pick(player: int, row_index: int) -> "Decision":
        return Decision(state=RoundState.PICK, player=player, choice=row_index)

    @staticmethod
    def sanctuary(player: int, sanctuary_index: int) -> "Decision":
        return Decision(state=RoundState.SANCTUARY, player=player, choice=sanctuary_index)
