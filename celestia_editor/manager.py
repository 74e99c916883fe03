"""Tab session manager: the set of open documents behind the editor.

Owns the ordered tab list and the active-tab pointer, keeps the editing
surface showing the active tab, and checkpoints the session after every
change.  Every operation either applies completely or is refused as a
no-op (``False``/``None``); none of them raise for stale ids, a full tab
quota, or a blank name.

The manager is single-threaded: callers deliver one UI event or editor
callback at a time.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Callable

from .binding import EditorBinding
from .config import EditorConfig
from .constants import (
    ARCHIVE_FILE,
    LANGUAGES,
    MAX_TABS,
    SCRIPT_EXTENSION,
    SCRIPT_LANGUAGE,
    SESSION_FILE,
    WELCOME_CONTENT,
    WELCOME_TAB_ID,
    WELCOME_TAB_NAME,
)
from .exporter import DirectoryExporter, TabExporter, read_text_file
from .languages import language_for_name
from .log import logger
from .models import (
    SavedTab,
    Session,
    Tab,
    clean_name,
    new_tab_id,
    next_script_number,
    script_name,
)
from .persistence import SavedTabArchive, SessionStore

SessionListener = Callable[[str, "Tab | None"], None]


class TabSessionManager:
    """Open tabs, the active tab, and the operations the UI invokes on them."""

    def __init__(
        self,
        store: SessionStore,
        editor: EditorBinding | None = None,
        *,
        archive: SavedTabArchive | None = None,
        exporter: TabExporter | None = None,
        max_tabs: int = MAX_TABS,
        script_extension: str = SCRIPT_EXTENSION,
        welcome_content: str = WELCOME_CONTENT,
    ) -> None:
        self._store = store
        self._editor = editor
        self._archive = archive
        self._exporter = exporter
        self._max_tabs = max(1, max_tabs)
        self._script_extension = script_extension
        self._welcome_content = welcome_content

        self._session = Session()
        self._saved: list[SavedTab] = []
        self._listeners: list[SessionListener] = []
        self._initialized = False
        self._subscribed = False
        # True while we write into the editor ourselves, so the binding's
        # echo of our own write is not taken for a user edit.
        self._pushing = False

    @classmethod
    def from_config(
        cls, config: EditorConfig, editor: EditorBinding | None = None
    ) -> TabSessionManager:
        """Build a manager whose stores and exports live where *config* says."""
        storage: Path = config.storage_dir
        return cls(
            SessionStore(storage / SESSION_FILE, config.tabs.welcome_content),
            editor,
            archive=SavedTabArchive(storage / ARCHIVE_FILE),
            exporter=DirectoryExporter(config.export_dir),
            max_tabs=config.tabs.max_tabs,
            script_extension=config.tabs.script_extension,
            welcome_content=config.tabs.welcome_content,
        )

    # -- read accessors -------------------------------------------------------

    @property
    def tabs(self) -> tuple[Tab, ...]:
        """Snapshot of the open tabs in display order."""
        return tuple(replace(tab) for tab in self._session.tabs)

    @property
    def active_tab_id(self) -> str:
        return self._session.active_tab_id

    @property
    def active_tab(self) -> Tab | None:
        tab = self._session.find(self._session.active_tab_id)
        return replace(tab) if tab else None

    @property
    def next_auto_number(self) -> int:
        return self._session.next_auto_number

    @property
    def max_tabs(self) -> int:
        return self._max_tabs

    @property
    def saved_tabs(self) -> tuple[SavedTab, ...]:
        return tuple(replace(s) for s in self._saved)

    def get_tab(self, tab_id: str) -> Tab | None:
        tab = self._session.find(tab_id)
        return replace(tab) if tab else None

    # -- listeners ------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> None:
        """Call ``listener(event, tab)`` after every applied operation."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str, tab: Tab | None) -> None:
        snapshot = replace(tab) if tab else None
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception:
                logger.exception("session listener failed on %s", event)

    # -- lifecycle ------------------------------------------------------------

    def initialize(self) -> None:
        """Restore the previous session (or start a fresh one) and show the active tab."""
        session = self._store.restore() or Session()
        tabs = session.tabs

        welcome = session.protected_tab
        if welcome is None:
            ids = {tab.id for tab in tabs}
            welcome = Tab(
                id=WELCOME_TAB_ID if WELCOME_TAB_ID not in ids else new_tab_id(ids),
                name=WELCOME_TAB_NAME,
                content=self._welcome_content,
                language=SCRIPT_LANGUAGE,
                saved=True,
                is_protected=True,
            )
        else:
            tabs.remove(welcome)
        tabs.insert(0, welcome)

        if len(tabs) > self._max_tabs:
            logger.warning(
                "restored %d tabs, keeping the first %d", len(tabs), self._max_tabs
            )
            del tabs[self._max_tabs :]

        session.next_auto_number = next_script_number(
            tabs, floor=session.next_auto_number
        )
        if session.find(session.active_tab_id) is None:
            session.active_tab_id = tabs[0].id

        self._session = session
        self._saved = self._archive.load() if self._archive else []
        self._initialized = True

        if self._editor is not None and not self._subscribed:
            self._editor.on_content_changed(self.on_editor_content_changed)
            self._subscribed = True
        self._bind_active()
        self._persist()
        logger.info(
            "session ready: %d tabs, active %s",
            len(tabs),
            session.active_tab_id,
        )
        self._emit("restored", session.find(session.active_tab_id))

    def teardown(self) -> None:
        """Checkpoint the session and release the editor."""
        if not self._initialized:
            return
        self._persist()
        if self._editor is not None:
            self._editor.unbind()
        self._listeners.clear()
        self._initialized = False

    # -- tab operations -------------------------------------------------------

    def create_tab(self) -> Tab | None:
        """Open a new empty ``Script #<n>`` tab at the end and activate it."""
        if not self._ready("create_tab"):
            return None
        tabs = self._session.tabs
        if len(tabs) >= self._max_tabs:
            logger.debug("create_tab refused: %d tabs open (quota)", len(tabs))
            return None

        number = next_script_number(tabs, floor=self._session.next_auto_number)
        name = script_name(number, self._script_extension)
        tab = Tab(
            id=new_tab_id(t.id for t in tabs),
            name=name,
            content="",
            language=language_for_name(name),
            saved=True,
        )
        tabs.append(tab)
        self._session.next_auto_number = number + 1
        self._activate(tab)
        self._persist()
        self._emit("created", tab)
        return replace(tab)

    def close_tab(self, tab_id: str) -> bool:
        """Close a tab; the first remaining tab becomes active if it was active."""
        if not self._ready("close_tab"):
            return False
        tab = self._session.find(tab_id)
        if tab is None or tab.is_protected:
            logger.debug("close_tab refused for %r", tab_id)
            return False

        was_active = self._session.active_tab_id == tab_id
        self._session.tabs.remove(tab)
        if was_active:
            if self._session.tabs:
                self._activate(self._session.tabs[0])
            else:
                self._session.active_tab_id = ""
                if self._editor is not None:
                    self._editor.unbind()
        self._persist()
        self._emit("closed", tab)
        return True

    def switch_tab(self, tab_id: str) -> bool:
        """Make *tab_id* the active tab and show it in the editor."""
        if not self._ready("switch_tab"):
            return False
        if tab_id == self._session.active_tab_id:
            return False
        tab = self._session.find(tab_id)
        if tab is None:
            logger.debug("switch_tab refused for unknown %r", tab_id)
            return False
        self._activate(tab)
        self._persist()
        self._emit("switched", tab)
        return True

    def reorder_tab(self, dragged_id: str, target_id: str) -> bool:
        """Move *dragged_id* to the position *target_id* currently holds.

        The tabs in between shift by one; this is a move, not a swap.  The
        first position belongs to the welcome tab and cannot take part.
        """
        if not self._ready("reorder_tab"):
            return False
        if dragged_id == target_id:
            return False
        tabs = self._session.tabs
        src = self._session.index_of(dragged_id)
        dst = self._session.index_of(target_id)
        if src <= 0 or dst <= 0:
            logger.debug("reorder_tab refused: %r -> %r", dragged_id, target_id)
            return False
        tab = tabs.pop(src)
        tabs.insert(dst, tab)
        self._persist()
        self._emit("reordered", tab)
        return True

    def rename_tab(self, tab_id: str, new_name: str) -> bool:
        """Rename a tab and re-derive its language.  Names need not be unique."""
        if not self._ready("rename_tab"):
            return False
        tab = self._session.find(tab_id)
        if tab is None or tab.is_protected:
            logger.debug("rename_tab refused for %r", tab_id)
            return False
        name = clean_name(new_name)
        if name is None:
            logger.debug("rename_tab refused: blank name")
            return False

        tab.name = name
        tab.language = language_for_name(name)
        tab.saved = False
        # A manual "Script #<n>" name must not be handed out again
        self._session.next_auto_number = next_script_number(
            self._session.tabs, floor=self._session.next_auto_number
        )
        if tab.id == self._session.active_tab_id:
            self._bind_active()
        self._persist()
        self._emit("renamed", tab)
        return True

    # -- content --------------------------------------------------------------

    def on_editor_content_changed(self, new_content: str) -> bool:
        """Record a user edit reported by the editor against the active tab."""
        if self._pushing or not self._initialized:
            return False
        tab = self._session.find(self._session.active_tab_id)
        if tab is None:
            return False
        tab.content = new_content
        tab.saved = False
        self._persist()
        self._emit("edited", tab)
        return True

    def set_content_programmatically(self, new_content: str) -> bool:
        """Replace the active tab's content and the editor's text in one step."""
        if not self._ready("set_content_programmatically"):
            return False
        tab = self._session.find(self._session.active_tab_id)
        if tab is None:
            return False
        tab.content = new_content
        tab.saved = False
        if self._editor is not None:
            self._pushing = True
            try:
                self._editor.set_current_content(new_content)
            finally:
                self._pushing = False
        self._persist()
        self._emit("edited", tab)
        return True

    def clear_text(self) -> bool:
        return self.set_content_programmatically("")

    def open_file(self, path: Path) -> bool:
        """Load a text file into the active tab."""
        text = read_text_file(path)
        if text is None:
            return False
        return self.set_content_programmatically(text)

    # -- save / export --------------------------------------------------------

    def save_tab(self, tab_id: str) -> SavedTab | None:
        """Mark a tab saved and archive a timestamped snapshot of it.

        A snapshot replaces any earlier one with the same tab name.
        """
        if not self._ready("save_tab"):
            return None
        tab = self._session.find(tab_id)
        if tab is None:
            logger.debug("save_tab refused for unknown %r", tab_id)
            return None
        tab.saved = True
        snapshot = SavedTab.snapshot(tab)
        self._saved = [s for s in self._saved if s.name != tab.name]
        self._saved.append(snapshot)
        if self._archive is not None:
            self._archive.save(self._saved)
        self._persist()
        self._emit("saved", tab)
        return replace(snapshot)

    def load_saved_tab(self, snapshot_id: str) -> Tab | None:
        """Reopen an archived snapshot as a new, active tab."""
        if not self._ready("load_saved_tab"):
            return None
        snapshot = next((s for s in self._saved if s.id == snapshot_id), None)
        if snapshot is None:
            logger.debug("load_saved_tab refused for unknown %r", snapshot_id)
            return None
        tabs = self._session.tabs
        if len(tabs) >= self._max_tabs:
            logger.debug("load_saved_tab refused: %d tabs open (quota)", len(tabs))
            return None

        tab = Tab(
            id=new_tab_id(t.id for t in tabs),
            name=snapshot.name,
            content=snapshot.content,
            language=(
                snapshot.language
                if snapshot.language in LANGUAGES
                else language_for_name(snapshot.name)
            ),
            saved=True,
        )
        tabs.append(tab)
        self._session.next_auto_number = next_script_number(
            tabs, floor=self._session.next_auto_number
        )
        self._activate(tab)
        self._persist()
        self._emit("created", tab)
        return replace(tab)

    def delete_saved_tab(self, snapshot_id: str) -> bool:
        remaining = [s for s in self._saved if s.id != snapshot_id]
        if len(remaining) == len(self._saved):
            return False
        self._saved = remaining
        if self._archive is not None:
            self._archive.save(self._saved)
        return True

    def export_tab(self, tab_id: str | None = None) -> bool:
        """Hand a tab's name and content (the active tab by default) to the exporter."""
        tab = self._session.find(tab_id if tab_id is not None else self.active_tab_id)
        if tab is None or self._exporter is None:
            return False
        try:
            self._exporter(tab.name, tab.content)
        except (OSError, ValueError):
            logger.warning("export of %s failed", tab.name, exc_info=True)
            return False
        return True

    # -- internals ------------------------------------------------------------

    def _ready(self, op: str) -> bool:
        if not self._initialized:
            logger.debug("%s called before initialize()", op)
        return self._initialized

    def _activate(self, tab: Tab) -> None:
        self._session.active_tab_id = tab.id
        self._bind_active()

    def _bind_active(self) -> None:
        if self._editor is None:
            return
        tab = self._session.find(self._session.active_tab_id)
        self._pushing = True
        try:
            if tab is None:
                self._editor.unbind()
            else:
                self._editor.bind(tab.content, tab.language)
        finally:
            self._pushing = False

    def _persist(self) -> None:
        self._store.persist(self._session)
