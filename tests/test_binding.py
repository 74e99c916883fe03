"""Tests for the headless editor binding."""

from __future__ import annotations

from celestia_editor.binding import HeadlessEditor


class TestHeadlessEditor:
    def test_starts_unbound(self):
        editor = HeadlessEditor()
        assert not editor.bound
        assert editor.get_current_content() == ""

    def test_bind_sets_content_and_language(self):
        editor = HeadlessEditor()
        editor.bind("print(1)", "lua")
        assert editor.bound
        assert editor.get_current_content() == "print(1)"
        assert editor.language == "lua"

    def test_programmatic_writes_do_not_notify(self):
        editor = HeadlessEditor()
        seen = []
        editor.on_content_changed(seen.append)
        editor.bind("a", "lua")
        editor.set_current_content("b")
        assert seen == []
        assert editor.get_current_content() == "b"

    def test_type_text_notifies(self):
        editor = HeadlessEditor()
        seen = []
        editor.on_content_changed(seen.append)
        editor.bind("", "lua")
        editor.type_text("hello")
        assert seen == ["hello"]

    def test_unbound_ignores_writes(self):
        editor = HeadlessEditor()
        seen = []
        editor.on_content_changed(seen.append)
        editor.set_current_content("x")
        editor.type_text("y")
        assert editor.get_current_content() == ""
        assert seen == []

    def test_unbind_clears(self):
        editor = HeadlessEditor()
        editor.bind("text", "python")
        editor.unbind()
        assert not editor.bound
        assert editor.get_current_content() == ""
        assert editor.language == ""
