"""Celestia editor core: multi-tab session state for an embedded code editor."""

from .binding import EditorBinding, HeadlessEditor
from .config import EditorConfig, load_config
from .languages import language_for_name
from .manager import TabSessionManager
from .models import SavedTab, Session, Tab
from .persistence import SavedTabArchive, SessionStore

__all__ = [
    "EditorBinding",
    "EditorConfig",
    "HeadlessEditor",
    "SavedTab",
    "SavedTabArchive",
    "Session",
    "SessionStore",
    "Tab",
    "TabSessionManager",
    "language_for_name",
    "load_config",
]
