"""Configuration handling for worktree-manager"""

from dataclasses import dataclass, field
from pathlib import Path

from worktree_manager.constants import (
    DEFAULT_EDITOR,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_REMOTE,
    WORKTREES_DIR_NAME,
)


def default_worktrees_root() -> Path:
    """Per-user worktrees root: the home directory plus a fixed dotfolder."""
    return Path.home() / WORKTREES_DIR_NAME


@dataclass
class Config:
    """Configuration for worktree-manager with validation."""

    # Where new worktrees are created
    worktrees_root: Path = field(default_factory=default_worktrees_root)

    # Seconds between background status refreshes (0 = disabled)
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL

    # External collaborators
    editor: str = DEFAULT_EDITOR
    remote_name: str = DEFAULT_REMOTE

    # Output modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_refresh_interval()
        self._validate_editor()
        self._validate_remote_name()
        self.worktrees_root = Path(self.worktrees_root).expanduser()

    def _validate_refresh_interval(self):
        """Validate refresh_interval is a non-negative integer."""
        if isinstance(self.refresh_interval, bool) or not isinstance(self.refresh_interval, int):
            raise ValueError(f"refresh_interval must be an integer, got {self.refresh_interval!r}")
        if self.refresh_interval < 0:
            raise ValueError(f"refresh_interval must be non-negative, got {self.refresh_interval}")

    def _validate_editor(self):
        """Validate editor is not empty."""
        if not self.editor or not self.editor.strip():
            raise ValueError("editor cannot be empty")
        self.editor = self.editor.strip()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def ensure_worktrees_root(self) -> Path:
        """Create the worktrees root on first use and return it."""
        self.worktrees_root.mkdir(parents=True, exist_ok=True)
        return self.worktrees_root

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktrees_root": str(self.worktrees_root),
            "refresh_interval": self.refresh_interval,
            "editor": self.editor,
            "remote_name": self.remote_name,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "worktrees_root",
            "refresh_interval",
            "editor",
            "remote_name",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
