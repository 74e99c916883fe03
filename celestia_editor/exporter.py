"""File download/open collaborators.

``export_tab`` hands a tab's name and content to a :class:`TabExporter`;
the host decides what "download" means.  :class:`DirectoryExporter` is
the file-system version used outside a browser.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from .log import logger

FALLBACK_FILENAME = "celestia.lua"

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


class TabExporter(Protocol):
    def __call__(self, name: str, content: str) -> None: ...


def safe_filename(name: str) -> str:
    """Turn a tab name into something usable as a single path component."""
    cleaned = _UNSAFE_CHARS.sub("_", name).strip().strip(".")
    return cleaned or FALLBACK_FILENAME


class DirectoryExporter:
    """Write exported tabs into a directory, one file per tab name."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.last_path: Path | None = None

    def __call__(self, name: str, content: str) -> None:
        # Encode first so unencodable text fails before the target is touched
        data = content.encode("utf-8")
        out_path = self.directory / safe_filename(name)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(data)
        self.last_path = out_path
        logger.info("exported %s to %s", name, out_path)


def read_text_file(path: Path) -> str | None:
    """Read a document for opening into a tab; ``None`` if unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.warning("could not open %s", path, exc_info=True)
        return None
