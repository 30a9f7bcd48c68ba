"""Core functionality for worktree-manager"""

import os
from pathlib import Path
from typing import List, Optional, Tuple

from worktree_manager.config import Config
from worktree_manager.exceptions import MainWorktreeError, ValidationError
from worktree_manager.logging_config import get_logger
from worktree_manager.models.worktree import Worktree
from worktree_manager.services.branch_name_service import BranchNameService
from worktree_manager.services.editor_service import EditorService
from worktree_manager.services.git.worktrees import WorktreeRepository, normalize_path

logger = get_logger(__name__)


class WorktreeManager:
    """Wires the repository facade, folder naming and the editor together."""

    def __init__(
        self,
        repo_path: str,
        config: Config,
        repository: Optional[WorktreeRepository] = None,
        editor: Optional[EditorService] = None,
    ):
        self.repo_path = repo_path
        self.config = config
        self.repository = repository or WorktreeRepository(repo_path, config.remote_name)
        self.editor = editor or EditorService(config.editor)
        self._current_root: Optional[str] = None

    @property
    def current_root(self) -> str:
        """Normalised root of the worktree the tool was started in."""
        if self._current_root is None:
            self._current_root = normalize_path(self.repository.get_toplevel(self.repo_path))
        return self._current_root

    def list_worktrees(self) -> List[Worktree]:
        """Worktrees of the repository, minus the one containing the working directory."""
        worktrees = self.repository.list_worktrees()
        current = self.current_root
        return [wt for wt in worktrees if normalize_path(wt.path) != current]

    def create_worktree(self, branch: str) -> str:
        """Create a worktree for a new branch under the worktrees root.

        Returns:
            Path of the new worktree

        Raises:
            ValidationError, NameConflict, ToolError
        """
        branch = branch.strip()
        if not BranchNameService.validate_branch_name(branch):
            raise ValidationError(branch)

        root = self.config.ensure_worktrees_root()
        path = str(Path(root) / BranchNameService.generate_worktree_folder(branch))
        self.repository.create_worktree(branch, path)
        return path

    def remove_worktree(self, worktree: Worktree) -> None:
        """Remove a linked worktree.

        Raises:
            MainWorktreeError: for the main worktree, which holds the repository itself
            RemovalError: if the worktree could not be removed
        """
        if worktree.is_main:
            raise MainWorktreeError(worktree.path)
        self.repository.remove_worktree(worktree.path)

    def delete_branch(self, branch: str) -> None:
        """Force-delete a local branch whose worktree is gone.

        Raises:
            ToolError: if git refuses
        """
        self.repository.delete_branch(branch, force=True)

    def push(self, worktree: Worktree) -> Tuple[bool, str]:
        """Push the worktree's branch to the configured remote."""
        return self.repository.push_branch(worktree.path, worktree.branch)

    def open_in_editor(self, path: str) -> Tuple[bool, Optional[str]]:
        """Open a worktree in the configured editor."""
        if not os.path.isdir(path):
            return False, f"Worktree directory is missing: {path}"
        return self.editor.open(path)
