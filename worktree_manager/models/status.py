"""Per-worktree status snapshot model."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class StatusSnapshot:
    """Dirty-file counts and remote sync state of one worktree."""
    has_uncommitted_changes: bool = False
    branch_name: str = ""
    remote_exists: bool = False
    ahead_count: int = 0  # Only meaningful when remote_exists
    behind_count: int = 0
    added: int = 0
    modified: int = 0
    deleted: int = 0
    untracked: int = 0
    error: Optional[str] = None  # Set when the status query failed

    def __post_init__(self):
        # Ahead/behind against a missing remote branch are meaningless
        if not self.remote_exists:
            self.ahead_count = 0
            self.behind_count = 0

    @property
    def is_clean(self) -> bool:
        return (
            self.error is None
            and not self.has_uncommitted_changes
            and self.remote_exists
            and self.ahead_count == 0
            and self.behind_count == 0
        )

    @classmethod
    def from_error(cls, message: str) -> "StatusSnapshot":
        """Best-effort snapshot stored when a status query fails."""
        return cls(error=message)
