"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(__file__).parent


def load_yaml_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping from an arbitrary path."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return data or {}


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML config file from the config/ directory."""
    return load_yaml_file(CONFIG_DIR / filename)
