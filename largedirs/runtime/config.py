"""Persistent JSON config helpers.

Stores default scan settings: result count, slow-directory threshold,
exclusion prefixes, and output preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..scan.types import DEFAULT_SLOW_THRESHOLD

logger = logging.getLogger(__name__)

APP_NAME = "largedirs"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_TOP = 15


@dataclass(frozen=True)
class ScanDefaults:
    """Settings used when the command line does not override them."""

    top: int = DEFAULT_TOP
    slow_threshold: float = DEFAULT_SLOW_THRESHOLD
    exclude: tuple[str, ...] = ()
    no_color: bool = False
    file_types: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never aborts a scan.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans and non-integers are invalid; so is anything below one."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value >= 1 else default


def _coerce_positive_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if value > 0 else default


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_string_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def load_scan_defaults() -> ScanDefaults:
    """Read scan defaults, replacing each invalid value with its built-in default."""
    data = load_config()
    return ScanDefaults(
        top=_coerce_positive_int(data.get("top"), DEFAULT_TOP),
        slow_threshold=_coerce_positive_float(data.get("slow_threshold"), DEFAULT_SLOW_THRESHOLD),
        exclude=_coerce_string_list(data.get("exclude")),
        no_color=_coerce_bool(data.get("no_color"), False),
        file_types=_coerce_bool(data.get("file_types"), True),
    )


def save_scan_defaults(defaults: ScanDefaults) -> None:
    """Persist ``defaults`` while keeping unrelated keys already in the file."""
    config = load_config()
    config["top"] = max(1, int(defaults.top))
    config["slow_threshold"] = float(defaults.slow_threshold)
    config["exclude"] = [item for item in defaults.exclude if item]
    config["no_color"] = bool(defaults.no_color)
    config["file_types"] = bool(defaults.file_types)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_TOP",
    "ScanDefaults",
    "load_config",
    "save_config",
    "load_scan_defaults",
    "save_scan_defaults",
]
