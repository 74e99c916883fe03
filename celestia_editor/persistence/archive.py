"""Saved-tab archive persistence store."""

from __future__ import annotations

from ..log import logger
from ..models import SavedTab
from ._base import JsonStore


class SavedTabArchive(JsonStore):
    """Explicitly saved tab snapshots (``[{id, name, content, language, savedAt}]``)."""

    def load(self) -> list[SavedTab]:
        """Load all snapshots, skipping malformed entries."""
        raw = self.load_raw()
        if not isinstance(raw, list):
            return []
        snapshots = []
        for entry in raw:
            snapshot = SavedTab.from_dict(entry)
            if snapshot is None:
                logger.debug("dropping unusable saved tab %r", entry)
                continue
            snapshots.append(snapshot)
        return snapshots

    def save(self, snapshots: list[SavedTab]) -> bool:
        """Persist the full archive.  Returns False (and logs) on failure."""
        try:
            self.save_raw([s.to_dict() for s in snapshots])
        except (OSError, TypeError, ValueError):
            logger.warning("failed to persist saved tabs to %s", self.path, exc_info=True)
            return False
        return True

    def _default(self) -> list:
        return []
