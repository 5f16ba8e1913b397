"""TOML configuration files: discovery, layering and merging.

The config directory holds `default.toml` plus one optional overlay per
environment (`development.toml`, `production.toml`, ...). Layers are merged
in order, later layers winning key by key.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "INTENT_RESOLVER_CONFIG_DIR"
ENVIRONMENT_ENV = "INTENT_RESOLVER_ENV"
DEFAULT_ENVIRONMENT = "development"
BASE_LAYER = "default.toml"


def get_config_dir() -> Path:
    """Return the directory holding the TOML files.

    INTENT_RESOLVER_CONFIG_DIR wins and must exist. Otherwise the nearest
    `config/` directory from the working directory upwards is used.
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        candidate = directory / "config"
        if candidate.is_dir():
            return candidate
    return cwd / "config"


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; tables merge, everything else is replaced."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def config_layers(config_dir: Path, environment: str) -> list[Path]:
    """Return the TOML files to merge, base layer first.

    Raises:
        FileNotFoundError: If the base layer is missing
    """
    base = config_dir / BASE_LAYER
    if not base.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {base}. "
            f"Create config/{BASE_LAYER} or set {CONFIG_DIR_ENV}."
        )

    overlay = config_dir / f"{environment}.toml"
    return [base, overlay] if overlay.is_file() else [base]


def load_config() -> dict[str, Any]:
    """Load and merge the layers for the current environment."""
    config: dict[str, Any] = {}
    for layer in config_layers(get_config_dir(), get_environment()):
        config = deep_merge(config, load_toml(layer))
    return config
