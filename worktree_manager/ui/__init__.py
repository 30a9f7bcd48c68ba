"""Terminal UI pieces for worktree-manager."""

from .renderer import delete_prompt, repository_line, status_message, worktree_row
from .screens import CreateWorktreeScreen, DeleteConfirmScreen

__all__ = [
    "CreateWorktreeScreen",
    "DeleteConfirmScreen",
    "delete_prompt",
    "repository_line",
    "status_message",
    "worktree_row",
]
