"""CLI configuration helpers for player preferences."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

_DEFAULT_COOLDOWN_SECONDS = 0.5
_DEFAULT_SHOW_DICE_TRACE = True


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "SectScript"
        return Path.home() / "SectScript"
    return Path.home() / ".config" / "sectscript"


def get_default_config_path() -> Path:
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, Any]:
    return {"cooldown_seconds": _DEFAULT_COOLDOWN_SECONDS, "show_dice_trace": _DEFAULT_SHOW_DICE_TRACE}


def _normalize_cooldown(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return _DEFAULT_COOLDOWN_SECONDS
    return float(value)


def _normalize_show_trace(value: object) -> bool:
    return value if isinstance(value, bool) else _DEFAULT_SHOW_DICE_TRACE


def _normalize(raw: Dict[str, object]) -> Dict[str, Any]:
    return {
        "cooldown_seconds": _normalize_cooldown(raw.get("cooldown_seconds")),
        "show_dice_trace": _normalize_show_trace(raw.get("show_dice_trace")),
    }


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(_normalize(config), indent=2, sort_keys=True), encoding="utf-8")
