"""Services for worktree-manager."""

from .branch_name_service import BranchNameService
from .cache_service import StatusCache
from .editor_service import EditorService
from .git import WorktreeRepository

__all__ = [
    "BranchNameService",
    "StatusCache",
    "EditorService",
    "WorktreeRepository",
]
