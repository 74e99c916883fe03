"""Document name -> language tag resolution.

The extension after the last ``.`` selects the language.  Names without
an extension (``"Script #4"``) resolve to the scripting language, since
that is what a fresh script tab is written in; unrecognised extensions
resolve to ``plaintext``.
"""

from __future__ import annotations

from .constants import DEFAULT_LANGUAGE, EXTENSION_TO_LANGUAGE, SCRIPT_LANGUAGE


def extension_of(name: str) -> str:
    """Return the lower-cased text after the last ``.`` (``""`` if none)."""
    _, dot, ext = name.strip().rpartition(".")
    if not dot:
        return ""
    return ext.lower()


def language_for_name(name: str) -> str:
    """Map a document name to one of the known language tags."""
    ext = extension_of(name)
    if not ext:
        return SCRIPT_LANGUAGE
    return EXTENSION_TO_LANGUAGE.get(ext, DEFAULT_LANGUAGE)
