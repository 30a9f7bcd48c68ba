"""Custom exceptions for worktree-manager"""

from typing import List, Optional


class WorktreeManagerError(Exception):
    """Base exception for all worktree-manager errors."""
    pass


class ValidationError(WorktreeManagerError):
    """Exception raised for a branch name that is unsafe to use."""

    def __init__(self, branch: str, message: Optional[str] = None):
        self.branch = branch
        self.message = message or "Invalid branch name"
        super().__init__(f"{self.message}: '{branch}'")


class NameConflict(WorktreeManagerError):
    """Exception raised when the target worktree path already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path already exists: {path}")


class ToolError(WorktreeManagerError):
    """Exception raised when a git command exits non-zero."""

    def __init__(self, operation: str, stderr: str = "", exit_code: Optional[int] = None):
        self.operation = operation
        self.stderr = (stderr or "").strip()
        self.exit_code = exit_code

        error_msg = f"git {operation} failed"
        if exit_code is not None:
            error_msg += f" (exit {exit_code})"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)


class RemovalError(WorktreeManagerError):
    """Exception raised when every worktree removal step has failed."""

    def __init__(self, path: str, diagnostics: List[str]):
        self.path = path
        self.diagnostics = list(diagnostics)

        error_msg = f"Could not remove worktree at {path}"
        if self.diagnostics:
            error_msg += ":\n" + "\n".join(f"  - {d}" for d in self.diagnostics)

        super().__init__(error_msg)


class RepositoryError(WorktreeManagerError):
    """Exception raised when not inside a repository or listing fails."""

    def __init__(self, repo_path: str, message: Optional[str] = None):
        self.repo_path = repo_path
        self.message = message

        error_msg = f"Repository error at {repo_path}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class MainWorktreeError(WorktreeManagerError):
    """Exception raised when an operation would remove the main worktree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Refusing to remove the main worktree at {path}")
