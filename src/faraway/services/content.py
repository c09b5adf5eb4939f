from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from faraway.engine.types import (
    SANCTUARY_INDEX,
    CardCatalog,
    CardDefinition,
    ColorCountPoints,
    NightCountPoints,
    NoPoints,
    Resource,
    ResourceCountPoints,
    SanctuaryCountPoints,
    Scoring,
    StaticPoints,
)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.absolute_path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _parse_resources(raw: object) -> dict[Resource, int]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ContentError("resource bundles must be objects")
    out: dict[Resource, int] = {}
    for k, v in raw.items():
        if isinstance(k, str) and isinstance(v, int) and v > 0:
            out[k] = v  # type: ignore[index]  # schema restricts keys
    return out


def _parse_scoring(raw: object) -> Scoring:
    if raw is None:
        return NoPoints()
    if not isinstance(raw, dict):
        raise ContentError("scoring must be an object")
    t = raw.get("type")
    if t == "static":
        return StaticPoints(type="static", value=_require_int(raw, "value"))
    if t == "color_count":
        colors = raw.get("colors")
        if not isinstance(colors, list):
            raise ContentError("color_count scoring needs a colors list")
        return ColorCountPoints(
            type="color_count",
            value=_require_int(raw, "value"),
            colors=tuple(c for c in colors if isinstance(c, str)),  # type: ignore[misc]
        )
    if t == "night_count":
        return NightCountPoints(type="night_count", value=_require_int(raw, "value"))
    if t == "resource_count":
        return ResourceCountPoints(
            type="resource_count",
            value=_require_int(raw, "value"),
            resource=_require_str(raw, "resource"),  # type: ignore[arg-type]
        )
    if t == "sanctuary_count":
        return SanctuaryCountPoints(type="sanctuary_count", value=_require_int(raw, "value"))
    if t == "none":
        return NoPoints()
    raise ContentError(f"Unknown scoring type: {t}")


def _parse_definition(raw: Mapping[str, object], *, index: int) -> CardDefinition:
    night = raw.get("night")
    return CardDefinition(
        index=index,
        color=_require_str(raw, "color"),  # type: ignore[arg-type]
        resources=_parse_resources(raw.get("resources")),
        conditions=_parse_resources(raw.get("conditions")),
        scoring=_parse_scoring(raw.get("scoring")),
        sanctuary=bool(raw.get("sanctuary", False)),
        night=night if isinstance(night, bool) else None,
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        raw = _load_json(path)
        schema = _load_json(self._schema_dir / f"{name}.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_cards(self) -> tuple[CardDefinition, ...]:
        raw = self._load_validated("cards")
        items = raw.get("cards")
        if not isinstance(items, list):
            raise ContentError("cards.json.cards must be a list")
        cards: list[CardDefinition] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            cards.append(_parse_definition(item, index=_require_int(item, "index")))
        return tuple(cards)

    def load_sanctuaries(self) -> tuple[CardDefinition, ...]:
        raw = self._load_validated("sanctuaries")
        items = raw.get("sanctuaries")
        if not isinstance(items, list):
            raise ContentError("sanctuaries.json.sanctuaries must be a list")
        return tuple(
            _parse_definition(item, index=SANCTUARY_INDEX) for item in items if isinstance(item, dict)
        )

    def load_catalog(self) -> CardCatalog:
        return CardCatalog(cards=self.load_cards(), sanctuaries=self.load_sanctuaries())

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_catalog()