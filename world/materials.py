"""
Material catalog: immutable material definitions keyed by name, loaded from a JSON list.
Particles take a copy of a definition's spread rules when painted, so replacing a catalog
entry later never changes particles already on the grid.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from world.constants import EMPTY_COLOR, MATERIAL_NAME_NONE, MaterialType

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]


class MaterialCatalogError(Exception):
    """Material data is missing or malformed."""


class UnknownMaterialError(KeyError):
    """No catalog entry for a material name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown material {self.name!r}"


@dataclass(frozen=True)
class SpreadRules:
    can_replace: frozenset[str] = frozenset()
    contact_colors: dict[str, Color] = field(default_factory=dict)
    contact_sounds: dict[str, str] = field(default_factory=dict)
    spread_speed: int = 0

    def copy(self) -> "SpreadRules":
        return SpreadRules(
            can_replace=frozenset(self.can_replace),
            contact_colors=dict(self.contact_colors),
            contact_sounds=dict(self.contact_sounds),
            spread_speed=self.spread_speed,
        )


@dataclass(frozen=True)
class MaterialDefinition:
    name: str
    type: MaterialType
    initial_color: Color = EMPTY_COLOR
    initial_lifetime: float = -1.0
    spread_rules: SpreadRules = field(default_factory=SpreadRules)

    def to_json(self) -> dict:
        rules = self.spread_rules
        return {
            "name": self.name,
            "type": int(self.type),
            "initial_life_time": self.initial_lifetime,
            "initial_color": list(self.initial_color),
            "spread_rules": {
                "can_replace": sorted(rules.can_replace),
                "contact_colors": {k: list(v) for k, v in rules.contact_colors.items()},
                "contact_sounds": dict(rules.contact_sounds),
                "spread_speed": rules.spread_speed,
            },
        }


NONE_MATERIAL = MaterialDefinition(MATERIAL_NAME_NONE, MaterialType.NONE)


class MaterialCatalog:
    """Name -> MaterialDefinition, insertion ordered. Always holds the empty "none" material."""

    def __init__(self, definitions=()) -> None:
        self._materials: dict[str, MaterialDefinition] = {MATERIAL_NAME_NONE: NONE_MATERIAL}
        for definition in definitions:
            self.add(definition)

    def add(self, definition: MaterialDefinition) -> None:
        self._materials[definition.name] = definition

    def get(self, name: str) -> MaterialDefinition | None:
        return self._materials.get(name)

    def lookup(self, name: str) -> MaterialDefinition:
        try:
            return self._materials[name]
        except KeyError:
            raise UnknownMaterialError(name) from None

    def names(self) -> list[str]:
        return list(self._materials)

    def __contains__(self, name: str) -> bool:
        return name in self._materials

    def __len__(self) -> int:
        return len(self._materials)


def _parse_color(raw, where: str) -> Color:
    if not isinstance(raw, (list, tuple)) or len(raw) < 3:
        raise MaterialCatalogError(f"{where}: color must be [r, g, b], got {raw!r}")
    try:
        return tuple(max(0, min(255, int(c))) for c in raw[:3])
    except (TypeError, ValueError) as exc:
        raise MaterialCatalogError(f"{where}: bad color {raw!r}") from exc


def parse_material(data: dict) -> MaterialDefinition:
    """Build a definition from one JSON entry. Raises MaterialCatalogError on bad data."""
    if not isinstance(data, dict):
        raise MaterialCatalogError(f"material entry must be an object, got {type(data).__name__}")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise MaterialCatalogError(f"material entry without a name: {data!r}")
    try:
        mtype = MaterialType(data["type"])
        lifetime = float(data.get("initial_life_time", -1.0))
        color = _parse_color(data["initial_color"], f"{name}.initial_color")
        rules_raw = data.get("spread_rules", {})
        rules = SpreadRules(
            can_replace=frozenset(rules_raw.get("can_replace", [])),
            contact_colors={
                k: _parse_color(v, f"{name}.contact_colors[{k}]")
                for k, v in rules_raw.get("contact_colors", {}).items()
            },
            contact_sounds={k: str(v) for k, v in rules_raw.get("contact_sounds", {}).items()},
            spread_speed=int(rules_raw.get("spread_speed", 0)),
        )
    except KeyError as exc:
        raise MaterialCatalogError(f"{name}: missing key {exc.args[0]!r}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise MaterialCatalogError(f"{name}: {exc}") from exc
    return MaterialDefinition(name, mtype, color, lifetime, rules)


def load_catalog(path: Path | str) -> MaterialCatalog:
    p = Path(path)
    try:
        with open(p, "r") as f:
            data = json.load(f)
    except OSError as exc:
        raise MaterialCatalogError(f"cannot read material file {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MaterialCatalogError(f"invalid JSON in {p}: {exc}") from exc
    if not isinstance(data, list):
        raise MaterialCatalogError(f"{p}: root must be a list of materials")
    catalog = MaterialCatalog(parse_material(entry) for entry in data)
    logger.info("Loaded %d materials from %s", len(catalog) - 1, p)
    return catalog


def save_material(definition: MaterialDefinition, path: Path | str) -> None:
    """Append a definition to a JSON material file; non-list or missing files start a new list."""
    p = Path(path)
    existing = []
    if p.exists():
        with open(p, "r") as f:
            existing = json.load(f)
        if not isinstance(existing, list):
            existing = []
    existing.append(definition.to_json())
    with open(p, "w") as f:
        json.dump(existing, f, indent=2)
    logger.info("Saved material %r to %s", definition.name, p)
