"""Editor binding: the live text surface the session manager drives.

The real widget lives in the host (a browser code editor, a Qt text
edit, ...).  The core only needs to read and replace the displayed text,
swap which document is displayed, and hear about user edits.
"""

from __future__ import annotations

from typing import Callable, Protocol

from .log import logger

ContentListener = Callable[[str], None]


class EditorBinding(Protocol):
    """Capabilities the session manager needs from the editing surface."""

    def get_current_content(self) -> str: ...

    def set_current_content(self, text: str) -> None: ...

    def on_content_changed(self, callback: ContentListener) -> None: ...

    def bind(self, content: str, language: str) -> None:
        """Display a document (replacing whatever was displayed)."""
        ...

    def unbind(self) -> None:
        """Display nothing."""
        ...


class HeadlessEditor:
    """In-process editing surface with no UI.

    Programmatic writes (``bind``, ``set_current_content``) do not notify
    listeners; ``type_text`` stands in for a user edit and does.
    """

    def __init__(self) -> None:
        self._content = ""
        self._language = ""
        self._bound = False
        self._listeners: list[ContentListener] = []

    @property
    def bound(self) -> bool:
        return self._bound

    @property
    def language(self) -> str:
        return self._language

    def get_current_content(self) -> str:
        return self._content

    def set_current_content(self, text: str) -> None:
        if not self._bound:
            logger.debug("set_current_content on an unbound editor ignored")
            return
        self._content = text

    def on_content_changed(self, callback: ContentListener) -> None:
        self._listeners.append(callback)

    def bind(self, content: str, language: str) -> None:
        self._content = content
        self._language = language
        self._bound = True

    def unbind(self) -> None:
        self._content = ""
        self._language = ""
        self._bound = False

    def type_text(self, text: str) -> None:
        """Replace the buffer as a user edit would, notifying listeners."""
        if not self._bound:
            return
        self._content = text
        for listener in list(self._listeners):
            listener(text)
