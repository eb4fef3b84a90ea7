"""Read-only JSON config helpers.

Holds display preferences (UI theme, dump Pygments style). Viewer state is
never written back. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "hextui"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str, path: Path | None = None) -> str | None:
    value = load_config(path).get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name(path: Path | None = None) -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme", path)


def load_style_name(path: Path | None = None) -> str | None:
    """Load configured Pygments style for dump output."""
    return _load_string("style", path)
