"""Configuration loader for the YAML framework config."""

from pathlib import Path
from typing import Any

import yaml

_CONFIG: dict[str, Any] | None = None

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load config from a YAML file and cache it. Uses the packaged config.yaml if none given."""
    global _CONFIG
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config root must be a mapping, got {type(loaded).__name__}: {path}")
    _CONFIG = loaded
    return _CONFIG


def get_config() -> dict[str, Any]:
    """Return the loaded config. Loads the default if not yet loaded."""
    if _CONFIG is None:
        return load_config()
    return _CONFIG
