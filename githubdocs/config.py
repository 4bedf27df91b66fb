"""User JSON config helpers.

Supplies default depth, fetch concurrency, timeout, and rule-file locations.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "githubdocs"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
TOKEN_ENV_VAR = "GITHUB_TOKEN"

DEFAULT_MAX_DEPTH = -1
DEFAULT_MAX_WORKERS = 4
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    """Effective settings after config-file validation."""

    max_depth: int = DEFAULT_MAX_DEPTH
    max_workers: int = DEFAULT_MAX_WORKERS
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    ignore_file: Path | None = None
    source_ignore_file: Path | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_int(value: object, minimum: int, default: int) -> int:
    """Accept real integers ``>= minimum``; booleans and other types are invalid."""
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        return default
    return value


def _coerce_positive_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return float(value)


def _coerce_path(value: object) -> Path | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return Path(stripped).expanduser() if stripped else None


def load_settings() -> Settings:
    """Read config and normalize each known key, dropping invalid values."""
    data = load_config()
    return Settings(
        max_depth=_coerce_int(data.get("max_depth"), -1, DEFAULT_MAX_DEPTH),
        max_workers=_coerce_int(data.get("max_workers"), 1, DEFAULT_MAX_WORKERS),
        timeout=_coerce_positive_float(data.get("timeout"), DEFAULT_TIMEOUT_SECONDS),
        ignore_file=_coerce_path(data.get("ignore_file")),
        source_ignore_file=_coerce_path(data.get("source_ignore_file")),
    )


def github_token() -> str | None:
    """Token from the environment only; never read from or written to config."""
    value = os.environ.get(TOKEN_ENV_VAR, "").strip()
    return value or None


__all__ = [
    "CONFIG_PATH",
    "TOKEN_ENV_VAR",
    "Settings",
    "load_config",
    "load_settings",
    "github_token",
]
