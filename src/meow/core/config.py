#!/usr/bin/env python3
"""
MEOW CONFIG - User Preferences
------------------------------
Loads the optional YAML preferences file. Nothing in here may abort a run:
a missing file means defaults, a broken file means a warning and defaults.

Lookup order: $MEOW_CONFIG, then ~/.config/meow/config.yaml

Example:
    pager: less -R
    log_level: INFO
    animate:
      char_delay: 0.02
      line_delay: 0.1
    colors:
      number: bold yellow
      highlight: black on cyan

Author: Meow Team
Date: 2026-10-19
"""

import os
import shlex
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional

from ruamel.yaml import YAML, YAMLError

logger = logging.getLogger("meow.config")

CONFIG_ENV_VAR = "MEOW_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "meow" / "config.yaml"

@dataclass
class MeowConfig:
    """Resolved user preferences with every field populated."""
    pager: List[str] = field(default_factory=lambda: ["less"])
    char_delay: float = 0.01
    line_delay: float = 0.05
    log_level: str = "WARNING"
    colors: Dict[str, str] = field(default_factory=dict)

def default_pager() -> List[str]:
    env_pager = os.environ.get("PAGER", "").strip()
    return shlex.split(env_pager) if env_pager else ["less"]

def resolve_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH

def _as_delay(value: Any, fallback: float, name: str) -> float:
    try:
        delay = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {name} '{value}'. Falling back to default: {fallback}")
        return fallback
    if delay < 0:
        logger.warning(f"Negative {name} '{value}'. Falling back to default: {fallback}")
        return fallback
    return delay

def load_config(path: Optional[Path] = None) -> MeowConfig:
    """
    Reads the preferences file and merges it over the defaults.
    """
    config = MeowConfig(pager=default_pager())
    path = path or resolve_config_path()

    if not path.is_file():
        return config

    try:
        data = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return config

    if data is None:
        return config
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: top level must be a mapping")
        return config

    pager = data.get("pager")
    if isinstance(pager, str) and pager.strip():
        config.pager = shlex.split(pager)
    elif pager is not None:
        logger.warning(f"Invalid pager '{pager}' in {path}")

    animate = data.get("animate") or {}
    if isinstance(animate, dict):
        config.char_delay = _as_delay(animate.get("char_delay", config.char_delay),
                                      config.char_delay, "char_delay")
        config.line_delay = _as_delay(animate.get("line_delay", config.line_delay),
                                      config.line_delay, "line_delay")
    else:
        logger.warning(f"Invalid animate section in {path}")

    level = data.get("log_level")
    if level is not None:
        if isinstance(level, str) and isinstance(logging.getLevelName(level.upper()), int):
            config.log_level = level.upper()
        else:
            logger.warning(f"Invalid log_level '{level}' in {path}")

    colors = data.get("colors") or {}
    if isinstance(colors, dict):
        config.colors = {str(role): str(style) for role, style in colors.items()}
    else:
        logger.warning(f"Invalid colors section in {path}")

    return config
