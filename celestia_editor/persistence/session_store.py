"""Open-tab session persistence store."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..constants import (
    SCRIPT_LANGUAGE,
    SESSION_FORMAT_VERSION,
    WELCOME_CONTENT,
    WELCOME_TAB_ID,
    WELCOME_TAB_NAME,
)
from ..log import logger
from ..models import Session, Tab
from ._base import JsonStore


class SessionStore(JsonStore):
    """Ordered tabs, active tab id and name counter.

    Stored as ``{version, tabs: [...], activeTabId, nextAutoNumber}``.  Older
    installs wrote the tab list on its own; :meth:`restore` accepts both.
    """

    def __init__(self, path: Path, welcome_content: str = WELCOME_CONTENT) -> None:
        super().__init__(path)
        self.welcome_content = welcome_content

    def persist(self, session: Session) -> bool:
        """Write *session* to disk.  Returns False (and logs) on failure."""
        data = {
            "version": SESSION_FORMAT_VERSION,
            "tabs": [tab.to_dict() for tab in session.tabs],
            "activeTabId": session.active_tab_id,
            "nextAutoNumber": session.next_auto_number,
        }
        try:
            self.save_raw(data)
        except (OSError, TypeError, ValueError):
            logger.warning("failed to persist session to %s", self.path, exc_info=True)
            return False
        return True

    def restore(self) -> Session | None:
        """Return the last persisted session, or ``None`` if absent or corrupt."""
        raw = self.load_raw()
        if raw is None:
            if self.path.exists():
                logger.warning("discarding unreadable session file %s", self.path)
            return None
        session = self._migrate(raw)
        if session is None:
            logger.warning("discarding malformed session file %s", self.path)
        return session

    # -- migration ------------------------------------------------------------

    def _migrate(self, raw: Any) -> Session | None:
        """Normalise any known payload layout into a :class:`Session`."""
        if isinstance(raw, list):
            # Legacy layout: bare tab list, no pointer or counter
            raw = {"tabs": raw}
        if not isinstance(raw, dict) or not isinstance(raw.get("tabs"), list):
            return None
        version = raw.get("version", 1)
        if isinstance(version, int) and version > SESSION_FORMAT_VERSION:
            logger.warning("session file version %s is newer than supported", version)
            return None

        tabs: list[Tab] = []
        entries: dict[str, dict] = {}
        for entry in raw["tabs"]:
            tab = Tab.from_dict(entry)
            if tab is None:
                logger.debug("dropping unusable tab entry %r", entry)
                continue
            if tab.id in entries:
                logger.debug("dropping duplicate tab id %s", tab.id)
                continue
            entries[tab.id] = entry
            tabs.append(tab)

        self._mark_protected(tabs, entries)

        active = raw.get("activeTabId")
        counter = raw.get("nextAutoNumber")
        return Session(
            tabs=tabs,
            active_tab_id=active if isinstance(active, str) else "",
            next_auto_number=(
                counter
                if isinstance(counter, int) and not isinstance(counter, bool) and counter > 0
                else 1
            ),
        )

    def _mark_protected(self, tabs: list[Tab], entries: dict[str, dict]) -> None:
        """Leave exactly one protected tab flagged (or none if there is no candidate)."""
        flagged = [tab for tab in tabs if tab.is_protected]
        if not flagged:
            # Payloads written before the flag existed identify the welcome
            # tab by its fixed id or name.
            flagged = [
                tab
                for tab in tabs
                if tab.id == WELCOME_TAB_ID or tab.name == WELCOME_TAB_NAME
            ]
            if not flagged:
                return
        keeper = flagged[0]
        for tab in flagged[1:]:
            tab.is_protected = False
        keeper.is_protected = True
        keeper.language = SCRIPT_LANGUAGE
        if not isinstance(entries[keeper.id].get("content"), str):
            keeper.content = self.welcome_content
            keeper.saved = True

    # -- override point -------------------------------------------------------

    def _default(self) -> None:  # type: ignore[override]
        """No session on disk (or an unparseable one) reads as absent."""
        return None
