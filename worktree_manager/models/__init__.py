"""Data models for worktree-manager."""

from .worktree import Worktree
from .status import StatusSnapshot
from .session import SessionState

__all__ = ["Worktree", "StatusSnapshot", "SessionState"]
