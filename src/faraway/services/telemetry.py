from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from faraway.engine.notify import Notification
from faraway.engine.serialize import decision_to_dict


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")


class TelemetryObserver:
    """Writes one telemetry record per session notification."""

    def __init__(self, telemetry: TelemetryService) -> None:
        self.telemetry = telemetry

    def notify(self, notification: Notification) -> None:
        snap = notification.snapshot
        payload: dict[str, object] = {
            "state": notification.state.name,
            "round": notification.rounds,
            "row_size": len(snap.get("row", [])),  # type: ignore[arg-type]
            "deck_size": len(snap.get("deck", [])),  # type: ignore[arg-type]
            "players": [
                {
                    "seat": p["seat"],
                    "hand": len(p["hand"]),
                    "played": len(p["played"]),
                    "selected_index": p["selected_index"],
                }
                for p in snap.get("players", [])  # type: ignore[union-attr]
            ],
        }
        if notification.decision is not None:
            payload["decision"] = decision_to_dict(notification.decision)
        if notification.kind == "game_over":
            payload["end_reason"] = snap.get("end_reason")
            payload["scores"] = [p["score"] for p in snap.get("players", [])]  # type: ignore[index,union-attr]
        self.telemetry.log(notification.kind, payload)
