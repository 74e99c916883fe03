"""Base JSON persistence store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from ..log import logger


class JsonStore:
    """Simple JSON file store with atomic write.

    Subclasses override ``_default()`` to provide the empty-state value
    (``{}`` for dicts, ``[]`` for lists).
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict | list:
        """Read and parse the JSON file, returning ``_default()`` on any error."""
        try:
            if self.path.exists():
                return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.debug("failed to load JSON store from %s", self.path, exc_info=True)
        return self._default()

    def save_raw(self, data: dict | list, *, sort_keys: bool = False) -> None:
        """Write *data* as pretty-printed JSON, creating parents as needed.

        The file is written to a temporary sibling and renamed into place so
        a crash mid-write leaves the previous contents intact.
        """
        payload = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(temp_path, self.path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    # -- override point -------------------------------------------------------

    def _default(self) -> dict | list:  # noqa: PLR6301
        """Return the empty-state value for this store (dict by default)."""
        return {}
