"""Tests for document name -> language resolution."""

from __future__ import annotations

import pytest

from celestia_editor.constants import DEFAULT_LANGUAGE, LANGUAGES, SCRIPT_LANGUAGE
from celestia_editor.languages import extension_of, language_for_name


class TestExtensionOf:
    def test_simple(self):
        assert extension_of("main.py") == "py"

    def test_last_dot_wins(self):
        assert extension_of("bundle.min.js") == "js"

    def test_lower_cased(self):
        assert extension_of("README.MD") == "md"

    def test_no_dot(self):
        assert extension_of("Makefile") == ""

    def test_trailing_dot(self):
        assert extension_of("notes.") == ""


class TestLanguageForName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Welcome.lua", "lua"),
            ("app.js", "javascript"),
            ("App.jsx", "javascript"),
            ("index.ts", "typescript"),
            ("View.tsx", "typescript"),
            ("data.json", "json"),
            ("page.html", "html"),
            ("site.css", "css"),
            ("README.md", "markdown"),
            ("foo.py", "python"),
            ("FOO.PY", "python"),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert language_for_name(name) == expected

    def test_unknown_extension_is_plaintext(self):
        assert language_for_name("foo.unknownext") == DEFAULT_LANGUAGE

    def test_no_extension_is_script_language(self):
        assert language_for_name("Script #3") == SCRIPT_LANGUAGE

    def test_dotfile_is_plaintext(self):
        assert language_for_name(".bashrc") == DEFAULT_LANGUAGE

    def test_deterministic(self):
        assert language_for_name("x.ts") == language_for_name("x.ts")

    def test_result_is_always_known_tag(self):
        for name in ("a.lua", "b.zzz", "c", "d.", "e.HTML"):
            assert language_for_name(name) in LANGUAGES
