"""Editor configuration.

Loads settings from ``~/.celestia/editor.yaml`` (or ``$CELESTIA_HOME``).
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import MAX_TABS, SCRIPT_EXTENSION, WELCOME_CONTENT
from .log import logger

CONFIG_FILE = "editor.yaml"

_DEFAULT_YAML = """\
# Celestia editor settings
# Delete this file to reset to defaults.

storage:
  dir: ""                  # where open tabs are persisted (empty = <home>/storage)

tabs:
  max_tabs: 6              # quota of simultaneously open tabs
  script_extension: ".lua" # suffix of auto-numbered "Script #<n>" tabs

export:
  dir: ""                  # where exported tabs are written (empty = <home>/exports)
"""


def celestia_home() -> Path:
    """Return the editor's config/data directory.

    ``~/.celestia`` unless the ``CELESTIA_HOME`` environment variable is set.
    """
    override = os.environ.get("CELESTIA_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".celestia"


@dataclass
class TabSettings:
    """Tab quota and naming."""

    max_tabs: int = MAX_TABS
    script_extension: str = SCRIPT_EXTENSION
    welcome_content: str = WELCOME_CONTENT


@dataclass
class EditorConfig:
    """Top-level editor configuration."""

    storage_dir: Path = field(default_factory=lambda: celestia_home() / "storage")
    export_dir: Path = field(default_factory=lambda: celestia_home() / "exports")
    tabs: TabSettings = field(default_factory=TabSettings)


def _section(data: dict, name: str) -> dict:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def load_config(path: Path | None = None) -> EditorConfig:
    """Load the editor configuration from YAML.

    Falls back to defaults for anything missing or malformed.  Creates a
    default config file on first run.
    """
    path = path or celestia_home() / CONFIG_FILE
    config = EditorConfig()

    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default config to %s", path, exc_info=True)
        return config

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("ignoring unreadable config file %s", path, exc_info=True)
        return config
    if not isinstance(data, dict):
        logger.warning("ignoring config file %s: top level is not a mapping", path)
        return config

    storage = _section(data, "storage")
    if isinstance(storage.get("dir"), str) and storage["dir"].strip():
        config.storage_dir = Path(storage["dir"]).expanduser()

    export = _section(data, "export")
    if isinstance(export.get("dir"), str) and export["dir"].strip():
        config.export_dir = Path(export["dir"]).expanduser()

    tabs = _section(data, "tabs")
    max_tabs = tabs.get("max_tabs")
    if isinstance(max_tabs, int) and not isinstance(max_tabs, bool):
        config.tabs.max_tabs = max(1, max_tabs)
    ext = tabs.get("script_extension")
    if isinstance(ext, str):
        ext = ext.strip()
        if ext and not ext.startswith("."):
            ext = "." + ext
        config.tabs.script_extension = ext
    welcome = tabs.get("welcome_content")
    if isinstance(welcome, str):
        config.tabs.welcome_content = welcome

    return config
