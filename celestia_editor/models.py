"""Data models for open documents and saved snapshots."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from .constants import LANGUAGES, SCRIPT_NAME_PREFIX
from .languages import language_for_name

_SCRIPT_NAME_RE = re.compile(rf"^{re.escape(SCRIPT_NAME_PREFIX)}(\d+)(?:\.[^.]*)?$")


@dataclass
class Tab:
    """One open document."""

    id: str
    name: str
    content: str = ""
    language: str = ""
    saved: bool = True
    is_protected: bool = False

    def __post_init__(self) -> None:
        if not self.language:
            self.language = language_for_name(self.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "language": self.language,
            "saved": self.saved,
            "isProtected": self.is_protected,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Tab | None:
        """Build a tab from its stored form, or ``None`` if it is unusable.

        Missing or wrong-typed optional fields fall back to defaults; an
        unknown language is re-derived from the name.
        """
        if not isinstance(data, dict):
            return None
        tab_id = data.get("id")
        name = data.get("name")
        if isinstance(tab_id, int) and not isinstance(tab_id, bool):
            tab_id = str(tab_id)
        if not isinstance(tab_id, str) or not tab_id:
            return None
        if not isinstance(name, str) or not name.strip():
            return None
        content = data.get("content")
        language = data.get("language")
        saved = data.get("saved")
        return cls(
            id=tab_id,
            name=name.strip(),
            content=content if isinstance(content, str) else "",
            language=language if language in LANGUAGES else "",
            saved=saved if isinstance(saved, bool) else True,
            is_protected=data.get("isProtected") is True,
        )


@dataclass
class SavedTab:
    """A timestamped snapshot of a tab kept in the saved-tabs archive."""

    name: str
    content: str
    language: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    saved_at: str = field(
        default_factory=lambda: datetime.now().isoformat(timespec="seconds")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "language": self.language,
            "savedAt": self.saved_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> SavedTab | None:
        if not isinstance(data, dict):
            return None
        fields = ("id", "name", "content", "language", "savedAt")
        if not all(isinstance(data.get(key), str) for key in fields):
            return None
        if not data["id"] or not data["name"].strip():
            return None
        return cls(
            id=data["id"],
            name=data["name"],
            content=data["content"],
            language=data["language"],
            saved_at=data["savedAt"],
        )

    @classmethod
    def snapshot(cls, tab: Tab) -> SavedTab:
        """Capture the current state of *tab*."""
        return cls(name=tab.name, content=tab.content, language=tab.language)


# -- helpers ----------------------------------------------------------------


def new_tab_id(existing: Iterable[str] = ()) -> str:
    """Return a fresh id not present in *existing*."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate


def clean_name(name: str) -> str | None:
    """Trim *name*; ``None`` if nothing is left."""
    cleaned = name.strip()
    return cleaned or None


def script_number(name: str) -> int | None:
    """Return ``n`` for names of the form ``Script #<n>`` / ``Script #<n>.ext``."""
    match = _SCRIPT_NAME_RE.match(name)
    return int(match.group(1)) if match else None


def next_script_number(tabs: Iterable[Tab], floor: int = 1) -> int:
    """Smallest counter value above every ``Script #<n>`` tab, and at least *floor*."""
    highest = 0
    for tab in tabs:
        n = script_number(tab.name)
        if n is not None:
            highest = max(highest, n)
    return max(floor, highest + 1)


def script_name(number: int, extension: str = "") -> str:
    return f"{SCRIPT_NAME_PREFIX}{number}{extension}"


@dataclass
class Session:
    """Ordered open tabs plus the active-tab pointer and name counter."""

    tabs: list[Tab] = field(default_factory=list)
    active_tab_id: str = ""
    next_auto_number: int = 1

    def find(self, tab_id: str) -> Tab | None:
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    def index_of(self, tab_id: str) -> int:
        """Position of *tab_id* in the tab order, ``-1`` if absent."""
        for i, tab in enumerate(self.tabs):
            if tab.id == tab_id:
                return i
        return -1

    @property
    def protected_tab(self) -> Tab | None:
        for tab in self.tabs:
            if tab.is_protected:
                return tab
        return None
