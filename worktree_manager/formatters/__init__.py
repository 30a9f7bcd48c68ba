"""Formatting utilities for worktree-manager.

- status: status indicators and deletion warnings
- worktree: branch labels and path shortening
"""

from .status import (
    format_status_indicator,
    format_deletion_warnings,
    get_status_style_type,
)
from .worktree import format_branch_label, format_worktree_path

__all__ = [
    "format_status_indicator",
    "format_deletion_warnings",
    "get_status_style_type",
    "format_branch_label",
    "format_worktree_path",
]
