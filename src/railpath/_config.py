from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".railpath"
CONFIG_FILE = CONFIG_DIR / "railpath.cfg"
DEFAULT_CONFIG = {
    "_comment": "Valid units: millimeters (default), meters, inches. Value is case-insensitive.",
    "units": "millimeters",
    "bezier_precision": 0.5,
    "sample_count": 10,
}
_UNIT_LABELS: Dict[str, str] = {
    "millimeters": "mm",
    "meters": "m",
    "inches": "in",
}
_UNIT_ALIASES = {
    "millimeter": "millimeters",
    "millimeters": "millimeters",
    "mm": "millimeters",
    "meter": "meters",
    "meters": "meters",
    "m": "meters",
    "inch": "inches",
    "inches": "inches",
    "in": "inches",
}


@dataclass(frozen=True)
class PathSettings:
    """Resolved settings from railpath.cfg."""

    units: str
    unit_label: str
    bezier_precision: float
    sample_count: int


def ensure_user_config() -> None:
    """Ensure ~/.railpath/railpath.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _normalize_units(value: str) -> str | None:
    return _UNIT_ALIASES.get(value.strip().lower())


def _positive_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not number > 0 or number == float("inf"):
        return default
    return number


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def get_path_settings() -> PathSettings:
    """Return configured units and query defaults, falling back per key."""

    raw_config = _load_user_config()
    units = _normalize_units(str(raw_config.get("units", DEFAULT_CONFIG["units"])))
    if units is None:
        units = DEFAULT_CONFIG["units"]

    return PathSettings(
        units=units,
        unit_label=_UNIT_LABELS[units],
        bezier_precision=_positive_float(raw_config.get("bezier_precision"), DEFAULT_CONFIG["bezier_precision"]),
        sample_count=_positive_int(raw_config.get("sample_count"), DEFAULT_CONFIG["sample_count"]),
    )
