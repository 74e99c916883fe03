"""Shared test fixtures for the celestia-editor test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from celestia_editor.binding import HeadlessEditor
from celestia_editor.exporter import DirectoryExporter
from celestia_editor.manager import TabSessionManager
from celestia_editor.models import script_number
from celestia_editor.persistence import SavedTabArchive, SessionStore


@pytest.fixture
def editor() -> HeadlessEditor:
    return HeadlessEditor()


@pytest.fixture
def store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "storage" / "session.json")


@pytest.fixture
def archive(tmp_path: Path) -> SavedTabArchive:
    return SavedTabArchive(tmp_path / "storage" / "saved-tabs.json")


@pytest.fixture
def exporter(tmp_path: Path) -> DirectoryExporter:
    return DirectoryExporter(tmp_path / "exports")


@pytest.fixture
def make_manager(store, editor, archive, exporter):
    """Factory for managers sharing the same stores and editor."""

    def _make(**kwargs) -> TabSessionManager:
        kwargs.setdefault("archive", archive)
        kwargs.setdefault("exporter", exporter)
        return TabSessionManager(store, editor, **kwargs)

    return _make


@pytest.fixture
def manager(make_manager) -> TabSessionManager:
    """An initialized manager with only the welcome tab open."""
    mgr = make_manager()
    mgr.initialize()
    return mgr


@pytest.fixture
def check_invariants():
    """Assert the structural guarantees of a session after any operation."""

    def _check(mgr: TabSessionManager) -> None:
        tabs = mgr.tabs
        ids = [t.id for t in tabs]
        assert len(ids) == len(set(ids)), "tab ids must be unique"
        assert len(tabs) <= mgr.max_tabs
        if tabs:
            assert [t.is_protected for t in tabs].count(True) == 1
            assert tabs[0].is_protected
            assert mgr.active_tab_id in ids
        else:
            assert mgr.active_tab_id == ""
        for t in tabs:
            n = script_number(t.name)
            if n is not None:
                assert mgr.next_auto_number > n

    return _check
