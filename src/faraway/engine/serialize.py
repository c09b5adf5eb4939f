from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from .cards import Card
from .decisions import Decision
from .player import Player
from .scoring import describe
from .types import (
    ColorCountPoints,
    NightCountPoints,
    ResourceCountPoints,
    SanctuaryCountPoints,
    Scoring,
    StaticPoints,
)

if TYPE_CHECKING:
    from .session import GameSession

Bucket = Literal["deck", "hand", "played", "row", "discard", "sanctuary"]


def scoring_to_dict(s: Scoring) -> dict[str, object]:
    if isinstance(s, StaticPoints):
        return {"type": s.type, "value": s.value}
    if isinstance(s, ColorCountPoints):
        return {"type": s.type, "value": s.value, "colors": list(s.colors)}
    if isinstance(s, NightCountPoints):
        return {"type": s.type, "value": s.value}
    if isinstance(s, ResourceCountPoints):
        return {"type": s.type, "value": s.value, "resource": s.resource}
    if isinstance(s, SanctuaryCountPoints):
        return {"type": s.type, "value": s.value}
    return {"type": "none"}


def card_to_dict(c: Card, position: Bucket) -> dict[str, object]:
    d = c.definition
    return {
        "uid": c.uid,
        "index": d.index,
        "color": d.color,
        "resources": dict(sorted(d.resources.items())),
        "conditions": dict(sorted(d.conditions.items())),
        "scoring": scoring_to_dict(d.scoring),
        "scoring_text": describe(d.scoring),
        "night": d.is_night,
        "sanctuary": d.sanctuary,
        "face_down": c.face_down,
        "position": position,
    }


def decision_to_dict(d: Decision) -> dict[str, object]:
    return {"state": d.state.name, "player": d.player, "choice": d.choice}


def _player_to_dict(p: Player, score: int) -> dict[str, object]:
    return {
        "seat": p.seat,
        "orientation": p.orientation,
        "is_own": p.is_own,
        "selected_index": p.selected_index,
        "hand": [card_to_dict(c, "hand") for c in p.hand],
        "played": [card_to_dict(c, "played") for c in p.played],
        "sanctuaries": [card_to_dict(c, "sanctuary") for c in p.sanctuaries],
        "score": score,
    }


def snapshot(session: GameSession) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the table.

    Enough for a presentation layer to draw every card without touching
    engine objects.
    """
    scores = session.scores()
    return {
        "seed": session.seed,
        "state": session.state.name,
        "rounds": session.rounds,
        "finished": session.finished,
        "end_reason": session.end_reason,
        "pick_priority": session.pick_priority(),
        "row": [card_to_dict(c, "row") for c in session.row],
        "deck": [card_to_dict(c, "deck") for c in session.deck],
        "discard": [card_to_dict(c, "discard") for c in session.discard],
        "players": [_player_to_dict(p, scores[p.seat]) for p in session.players],
        "decision_log": [decision_to_dict(d) for d in session.decision_log],
    }
