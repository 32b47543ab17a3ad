"""JSON file access shared by the definition and dialogue repositories."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError, DataValidationError


def load_json(path: Path) -> object:
    """Parse ``path`` as UTF-8 JSON, with or without a byte order mark."""
    if not path.is_file():
        raise DataLoadError(f"Data file not found: {path}")
    try:
        with path.open(encoding="utf-8-sig") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"{path.name} is not valid JSON (line {exc.lineno}): {exc.msg}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Could not read {path}: {exc}") from exc


def load_json_object(path: Path) -> dict[str, object]:
    """Like ``load_json`` but the document must be a JSON object."""
    raw = load_json(path)
    if not isinstance(raw, dict):
        raise DataValidationError(f"Expected a JSON object at the top of {path}")
    return raw
