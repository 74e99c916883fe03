"""Module-level constants for the Celestia editor core."""

from __future__ import annotations

MAX_TABS = 6  # Maximum number of simultaneously open tabs

# Protected welcome document
WELCOME_TAB_ID = "welcome"
WELCOME_TAB_NAME = "Welcome.lua"
WELCOME_CONTENT = """\
-- Welcome, User

-- Example Script
local player = game.Players.LocalPlayer
local character = player.Character or player.CharacterAdded:Wait()
local humanoid = character:WaitForChild("Humanoid")

humanoid.WalkSpeed = 50
"""

# Auto-numbered tabs are named "Script #<n><ext>"
SCRIPT_NAME_PREFIX = "Script #"
SCRIPT_EXTENSION = ".lua"

# Storage file names (relative to the configured storage dir)
SESSION_FILE = "session.json"
ARCHIVE_FILE = "saved-tabs.json"
SESSION_FORMAT_VERSION = 2

# Language tags the editor knows about
SCRIPT_LANGUAGE = "lua"
DEFAULT_LANGUAGE = "plaintext"

EXTENSION_TO_LANGUAGE: dict[str, str] = {
    "lua": "lua",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "json": "json",
    "html": "html",
    "css": "css",
    "md": "markdown",
    "py": "python",
}

LANGUAGES: frozenset[str] = frozenset(EXTENSION_TO_LANGUAGE.values()) | {
    DEFAULT_LANGUAGE
}
