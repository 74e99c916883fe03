"""Persistence layer – each store owns its file path, data format, and I/O."""

from .archive import SavedTabArchive
from .session_store import SessionStore

__all__ = [
    "SavedTabArchive",
    "SessionStore",
]
