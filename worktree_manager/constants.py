"""Shared constants for worktree-manager."""

from dataclasses import dataclass
from typing import List


# Per-user directory (under $HOME) holding every created worktree
WORKTREES_DIR_NAME = ".worktrees"

# Per-user directory for the log file
APP_DIR_NAME = ".worktree-manager"
LOG_FILE_NAME = "worktree-manager.log"

DEFAULT_REFRESH_INTERVAL = 5  # seconds, 0 disables the timer
DEFAULT_EDITOR = "code"
DEFAULT_REMOTE = "origin"

FOLDER_SUFFIX_BYTES = 4  # 8 hex characters


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("status", "Status", 20),
    ColumnDefinition("commit", "Commit", 9),
    ColumnDefinition("path", "Path"),
]


# Status indicator symbols
SYMBOL_ALL_CLEAR = "✓"
SYMBOL_NO_REMOTE = "✗"
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"
SYMBOL_ADDED = "+"
SYMBOL_MODIFIED = "~"
SYMBOL_DELETED = "-"
SYMBOL_UNTRACKED = "?"
SYMBOL_ERROR = "⚠"
SYMBOL_LOADING = "…"


# Rich styles for the status column
STATUS_STYLES = {
    "clean": "green",
    "dirty": "yellow",
    "no_remote": "red",
    "error": "bold red",
    "loading": "dim",
}


LEGEND_TEXT = (
    f"{SYMBOL_ALL_CLEAR} clean and in sync   "
    f"{SYMBOL_ADDED}N added   {SYMBOL_MODIFIED}N modified   {SYMBOL_DELETED}N deleted   "
    f"{SYMBOL_UNTRACKED}N untracked   {SYMBOL_AHEAD}N to push   {SYMBOL_BEHIND}N to pull   "
    f"{SYMBOL_NO_REMOTE} no remote branch   {SYMBOL_ERROR} status unknown"
)
