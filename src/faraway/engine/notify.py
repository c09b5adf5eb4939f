from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from .decisions import Decision, RoundState

NotificationKind = Literal["state_changed", "decision_applied", "game_over"]


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    state: RoundState
    rounds: int
    snapshot: dict[str, object]
    decision: Decision | None = None


class Observer(Protocol):
    def notify(self, notification: Notification) -> None: ...


class NotificationChannel:
    """Synchronous fan-out to registered observers, in subscription order."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def publish(self, notification: Notification) -> None:
        # Copy so observers may unsubscribe while being notified.
        for observer in list(self._observers):
            observer.notify(notification)

    def __len__(self) -> int:
        return len(self._observers)
