"""Worktree name and path formatting utilities."""

import os
from typing import Optional

from worktree_manager.models.worktree import Worktree


def format_branch_label(worktree: Worktree) -> str:
    """Branch name, or a detached marker with the short hash."""
    if worktree.branch:
        return worktree.branch
    return f"(detached {worktree.short_hash})" if worktree.commit_hash else "(detached)"


def format_worktree_path(path: str, root: Optional[str] = None) -> str:
    """
    Shorten a worktree path for display.

    Args:
        path: Absolute worktree path
        root: Worktrees root; paths under it are shown relative to it

    Returns:
        Relative path under the root, or the path with the home directory as ~
    """
    if root:
        try:
            relative = os.path.relpath(path, root)
        except ValueError:
            relative = None  # Different drive on Windows
        if relative and not relative.startswith(".."):
            return relative

    home = os.path.expanduser("~")
    if path == home or path.startswith(home + os.sep):
        return "~" + path[len(home):]
    return path
