"""Deterministic, headless rules engine for Faraway-style card drafting.

IMPORTANT: This package must never do I/O or import a presentation library.
"""

from .bots import BotManager, DecisionSource, DumbBot
from .cards import Card, Sanctuary
from .deck import DeckUnderflowError, deal, shuffle
from .decisions import Decision, RoundState
from .notify import Notification, NotificationChannel, Observer
from .player import Player
from .scoring import evaluate, tableau_score
from .serialize import snapshot
from .session import GameSession, SessionConfig, StepResult, replay
from .types import CardCatalog, CardDefinition, Color, Resource, Scoring

__all__ = [
    "BotManager",
    "Card",
    "CardCatalog",
    "CardDefinition",
    "Color",
    "DeckUnderflowError",
    "Decision",
    "DecisionSource",
    "DumbBot",
    "GameSession",
    "Notification",
    "NotificationChannel",
    "Observer",
    "Player",
    "Resource",
    "RoundState",
    "Sanctuary",
    "Scoring",
    "SessionConfig",
    "StepResult",
    "deal",
    "evaluate",
    "replay",
    "shuffle",
    "snapshot",
    "tableau_score",
]
