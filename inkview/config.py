"""User configuration: icon lookup and persisted window geometry."""

from __future__ import annotations

import json
import os
from pathlib import Path

CONFIG_FILE_NAME = ".inkview.cfg"
ICON_ENV_VAR = "INKVIEW_ICON"
DEFAULT_WINDOW_SIZE = (980, 720)


def config_file_path() -> Path:
    return Path.home() / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> dict:
    """Read the JSON config, returning an empty mapping when it is unusable."""
    cfg_path = path or config_file_path()
    try:
        if not cfg_path.exists():
            return {}
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except Exception:
        # Any read/parse/access issue falls back to defaults.
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict, path: Path | None = None) -> bool:
    cfg_path = path or config_file_path()
    try:
        cfg_path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError:
        return False
    return True


def load_window_geometry(path: Path | None = None) -> tuple[int, int, int, int] | None:
    """Return the last saved `(x, y, width, height)`, if any."""
    raw = load_config(path).get("window")
    if not isinstance(raw, dict):
        return None
    try:
        x, y, width, height = (int(raw[key]) for key in ("x", "y", "width", "height"))
    except (KeyError, TypeError, ValueError):
        return None
    if width <= 0 or height <= 0:
        return None
    return x, y, width, height


def save_window_geometry(geometry: tuple[int, int, int, int], path: Path | None = None) -> bool:
    data = load_config(path)
    x, y, width, height = geometry
    data["window"] = {"x": int(x), "y": int(y), "width": int(width), "height": int(height)}
    return save_config(data, path)


def resolve_icon_path(cli_value: str | None) -> Path | None:
    """Pick the icon from the CLI flag, then the environment."""
    candidate = cli_value or os.environ.get(ICON_ENV_VAR, "").strip()
    if not candidate:
        return None
    return Path(candidate).expanduser().resolve()
