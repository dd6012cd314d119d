"""Load/save application settings. Settings live in configs/settings.json; material definitions in materials.json."""

import json
from pathlib import Path

from world.constants import CELL_SIZE, MATERIAL_NAME_NONE, WINDOW_HEIGHT, WINDOW_WIDTH, BrushSize

ROOT_DIR = Path(__file__).resolve().parent
CONFIG_DIR = ROOT_DIR / "configs"
SETTINGS_FILE = CONFIG_DIR / "settings.json"
DEFAULT_MATERIAL_FILE = ROOT_DIR / "materials.json"


def _default_config() -> dict:
    return {
        "window": {"width": WINDOW_WIDTH, "height": WINDOW_HEIGHT},
        "cell_size": CELL_SIZE,
        "tick_rate": 60,
        "seed": -1,
        "material_file": str(DEFAULT_MATERIAL_FILE),
        "allow_double_update": False,
        "brush": int(BrushSize.SMALL),
        "material": MATERIAL_NAME_NONE,
        "log_level": "INFO",
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    if "window" in data:
        d["window"] = {**d["window"], **data["window"]}
    for k in (
        "cell_size", "tick_rate", "seed", "material_file", "allow_double_update",
        "brush", "material", "log_level",
    ):
        if k in data:
            d[k] = data[k]
    return d


def load_config(path: Path | str | None = None) -> dict:
    """Saved settings over defaults. Missing file = defaults; invalid JSON raises."""
    p = Path(path) if path is not None else SETTINGS_FILE
    if not p.exists():
        return _default_config()
    with open(p, "r") as f:
        return _merge_defaults(json.load(f))


def save_config(params: dict, path: Path | str | None = None) -> None:
    p = Path(path) if path is not None else SETTINGS_FILE
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w") as f:
        json.dump(_merge_defaults(params), f, indent=2)


def material_path(cfg: dict) -> Path:
    """Relative material_file paths resolve against the project root."""
    p = Path(cfg.get("material_file") or DEFAULT_MATERIAL_FILE)
    return p if p.is_absolute() else ROOT_DIR / p

