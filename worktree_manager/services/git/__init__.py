"""Git-related services for worktree-manager."""

from .worktrees import WorktreeRepository

__all__ = [
    "WorktreeRepository",
]
