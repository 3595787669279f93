"""algow Configuration — project-level .algowrc.yml support.

Loads configuration from .algowrc.yml (or .algowrc.yaml, .algowrc.json)
found by walking up from the working directory.

Example .algowrc.yml:
    let_generalization: true   # textbook let-polymorphism
    prelude: true              # start from the primitive environment
    format: json               # "pretty" or "json"
    log_level: DEBUG
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

FORMATS = ("pretty", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AlgowConfig:
    """Project-level algow configuration."""
    # Generalize let-bound expressions (Damas-Milner) instead of binding
    # them monomorphically.
    let_generalization: bool = False
    # Seed inference with the primitive environment.
    prelude: bool = True
    # Output: "pretty" or "json"
    format: str = "pretty"
    log_level: str = "WARNING"


# ---------------------------------------------------------------------------
# Config file names (in priority order)
# ---------------------------------------------------------------------------

_CONFIG_FILES = [
    ".algowrc.yml",
    ".algowrc.yaml",
    ".algowrc.json",
    "algow.config.yml",
    "algow.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> AlgowConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return AlgowConfig()

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    if path.endswith(".json"):
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to parse configuration {path}: {exc}") from exc
    else:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ValueError(f"failed to parse configuration {path}: {exc}") from exc

    if data is None:
        return AlgowConfig()
    if not isinstance(data, dict):
        raise ValueError("configuration root must be a mapping")
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> AlgowConfig:
    """Convert a parsed dict to AlgowConfig, ignoring unknown keys."""
    config = AlgowConfig()

    if "let_generalization" in data:
        config.let_generalization = bool(data["let_generalization"])
    if "prelude" in data:
        config.prelude = bool(data["prelude"])
    if "format" in data:
        config.format = str(data["format"])
        if config.format not in FORMATS:
            raise ValueError(f"unknown output format {config.format!r}; expected one of {FORMATS}")
    if "log_level" in data:
        config.log_level = str(data["log_level"]).upper()
        if config.log_level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {config.log_level!r}")

    return config
