"""Worktree operations service for worktree-manager."""

import os
import shutil
import stat
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import git

from worktree_manager.exceptions import (
    NameConflict,
    RemovalError,
    RepositoryError,
    ToolError,
    ValidationError,
)
from worktree_manager.logging_config import get_logger
from worktree_manager.models.status import StatusSnapshot
from worktree_manager.models.worktree import Worktree
from worktree_manager.services.branch_name_service import BranchNameService

logger = get_logger(__name__)

CommandResult = Tuple[int, str, str]


def normalize_path(path: str) -> str:
    """Canonical form used to compare worktree paths."""
    return os.path.normcase(os.path.realpath(path))


def parse_worktree_porcelain(output: str) -> List[Worktree]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")
        (blank line between worktrees)
    """
    worktrees: List[Worktree] = []
    current: dict = {}

    def flush():
        if current.get("path"):
            worktrees.append(
                Worktree(
                    path=current["path"],
                    branch=current.get("branch", ""),
                    commit_hash=current.get("HEAD", ""),
                    is_main=not worktrees,
                    is_detached=current.get("detached", False),
                )
            )
        current.clear()

    for line in output.split("\n"):
        # Paths may end in spaces; only the CR of CRLF output is dropped
        line = line.rstrip("\r")

        if not line:
            flush()
            continue

        if line.startswith("worktree "):
            flush()
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = branch_ref
        elif line == "detached":
            current["detached"] = True
            current["branch"] = ""

    # Last entry may have no trailing blank line
    flush()
    return worktrees


def parse_status_porcelain(output: str) -> dict:
    """Count dirty files by category from `git status --porcelain` output.

    Each line starts with a two character XY code: X = index, Y = working tree.
    """
    counts = {"added": 0, "modified": 0, "deleted": 0, "untracked": 0}

    for line in output.split("\n"):
        if len(line) < 2:
            continue

        code = line[:2]
        if code == "??":
            counts["untracked"] += 1
        elif "A" in code:
            counts["added"] += 1
        elif "D" in code:
            counts["deleted"] += 1
        else:
            counts["modified"] += 1

    return counts


def parse_left_right_count(output: str) -> Optional[Tuple[int, int]]:
    """Parse `git rev-list --left-right --count A...B` output into (left, right).

    Returns None when the output is not exactly two tab-separated numbers.
    """
    parts = output.strip().split("\t")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


class WorktreeRepository:
    """Stateless facade over the git commands that manage worktrees.

    Every command gets an explicit directory through `git -C <dir>`, so the
    process working directory is never touched.
    """

    def __init__(self, repo_path: str, remote_name: str = "origin"):
        """Initialize the repository facade.

        Args:
            repo_path: Path inside the git repository
            remote_name: Remote used for push and sync status
        """
        self.repo_path = repo_path
        self.remote_name = remote_name

    def _get_repo(self) -> git.Repo:
        """Open the repository, failing with RepositoryError outside one."""
        try:
            return git.Repo(self.repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryError(self.repo_path, "not a git repository") from e

    def _git(self) -> git.Git:
        return git.Git()

    def _run(self, cwd: str, *args: str) -> CommandResult:
        """Run a git command in `cwd` and return (exit_code, stdout, stderr)."""
        command = ["git", "-C", cwd, *args]
        logger.debug(f"Running: {' '.join(command)}")
        try:
            status, stdout, stderr = self._git().execute(
                command, with_extended_output=True, with_exceptions=False
            )
        except git.exc.GitCommandNotFound as e:
            raise ToolError(args[0], str(e)) from e
        return status, stdout or "", stderr or ""

    def list_worktrees(self) -> List[Worktree]:
        """List every worktree of the repository.

        Raises:
            RepositoryError: if not inside a repository or the listing fails
        """
        self._get_repo()
        status, stdout, stderr = self._run(self.repo_path, "worktree", "list", "--porcelain")
        if status != 0:
            message = f"git worktree list failed (exit {status})"
            if stderr.strip():
                message += f": {stderr.strip()}"
            raise RepositoryError(self.repo_path, message)

        worktrees = parse_worktree_porcelain(stdout)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def get_toplevel(self, path: str) -> str:
        """Root directory of the worktree containing `path`.

        Raises:
            RepositoryError: if `path` is not inside a worktree
        """
        status, stdout, stderr = self._run(path, "rev-parse", "--show-toplevel")
        if status != 0 or not stdout.strip():
            raise RepositoryError(path, stderr.strip() or "not inside a worktree")
        return stdout.strip()

    def create_worktree(self, branch: str, path: str) -> None:
        """Create a worktree at `path` on a new branch.

        Raises:
            ValidationError: if the branch name is rejected (git is not run)
            NameConflict: if `path` already exists
            ToolError: if `git worktree add` fails
        """
        if not BranchNameService.validate_branch_name(branch):
            raise ValidationError(branch)
        if os.path.exists(path):
            raise NameConflict(path)

        Path(path).parent.mkdir(parents=True, exist_ok=True)
        status, _, stderr = self._run(self.repo_path, "worktree", "add", "-b", branch, path)
        if status != 0:
            raise ToolError("worktree add", stderr, status)
        logger.info(f"Created worktree for '{branch}' at {path}")

    def remove_worktree(self, path: str) -> None:
        """Remove a worktree, falling back step by step until it is gone.

        Steps, each only tried after the previous one failed:
        git removal, read-only attribute reset plus retry, then direct
        directory deletion plus prune.

        Raises:
            RemovalError: with every step's diagnostics when all steps fail
        """
        steps: List[Tuple[str, Callable[[str], None]]] = [
            ("git worktree remove --force", self._remove_with_git),
            ("clear read-only attributes and retry", self._unlock_and_remove),
            ("delete directory and prune", self._delete_and_prune),
        ]

        diagnostics: List[str] = []
        for description, step in steps:
            try:
                step(path)
                if self._is_removed(path):
                    logger.info(f"Removed worktree at {path} ({description})")
                    return
                diagnostics.append(f"{description}: worktree still present")
            except (ToolError, RepositoryError, OSError) as e:
                diagnostics.append(f"{description}: {e}")
            logger.warning(f"Removal step '{description}' failed for {path}")

        logger.error(f"Failed to remove worktree at {path}")
        raise RemovalError(path, diagnostics)

    def _remove_with_git(self, path: str) -> None:
        status, _, stderr = self._run(self.repo_path, "worktree", "remove", "--force", path)
        if status != 0:
            raise ToolError("worktree remove", stderr, status)

    def _unlock_and_remove(self, path: str) -> None:
        if os.path.isdir(path) and self._is_linked_worktree(path):
            clear_readonly(path)
        self._remove_with_git(path)

    def _delete_and_prune(self, path: str) -> None:
        if os.path.exists(path):
            if not self._is_linked_worktree(path):
                raise RepositoryError(
                    self.repo_path, f"not deleting {path}: git does not list it as a linked worktree"
                )
            shutil.rmtree(path)
        self.prune_worktrees()

    def _is_linked_worktree(self, path: str) -> bool:
        target = normalize_path(path)
        return any(
            normalize_path(wt.path) == target and not wt.is_main for wt in self.list_worktrees()
        )

    def _is_removed(self, path: str) -> bool:
        """True once the directory and git's registration are both gone."""
        if os.path.exists(path):
            return False
        target = normalize_path(path)
        return all(normalize_path(wt.path) != target for wt in self.list_worktrees())

    def prune_worktrees(self) -> None:
        """Prune metadata of worktrees whose directories are gone.

        Raises:
            ToolError: if `git worktree prune` fails
        """
        status, _, stderr = self._run(self.repo_path, "worktree", "prune")
        if status != 0:
            raise ToolError("worktree prune", stderr, status)
        logger.info("Pruned orphaned worktree metadata")

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch.

        Raises:
            ToolError: if `git branch` fails
        """
        flag = "-D" if force else "-d"
        status, _, stderr = self._run(self.repo_path, "branch", flag, branch)
        if status != 0:
            raise ToolError("branch delete", stderr, status)
        logger.info(f"Deleted branch '{branch}'")

    def push_branch(self, path: str, branch: str) -> Tuple[bool, str]:
        """Push a worktree's branch, creating the upstream if needed.

        Returns:
            Tuple of (success, combined output)
        """
        if not branch:
            return False, "Cannot push a detached worktree"

        status, stdout, stderr = self._run(
            path, "push", "--set-upstream", self.remote_name, branch
        )
        output = "\n".join(part for part in (stdout.strip(), stderr.strip()) if part)
        if status != 0:
            logger.warning(f"Push of '{branch}' failed (exit {status})")
        else:
            logger.info(f"Pushed '{branch}' to {self.remote_name}")
        return status == 0, output

    def query_status(self, path: str) -> StatusSnapshot:
        """Collect the status snapshot of one worktree.

        Raises:
            ToolError: if the path is missing or git status / rev-parse fail
        """
        if not os.path.isdir(path):
            raise ToolError("status", f"worktree path does not exist: {path}")

        status, stdout, stderr = self._run(path, "status", "--porcelain")
        if status != 0:
            raise ToolError("status", stderr, status)
        counts = parse_status_porcelain(stdout)
        has_changes = any(counts.values())

        status, stdout, stderr = self._run(path, "rev-parse", "--abbrev-ref", "HEAD")
        if status != 0:
            raise ToolError("rev-parse", stderr, status)
        branch = stdout.strip()
        if branch == "HEAD":
            branch = ""  # Detached

        remote_exists = False
        ahead = behind = 0
        if branch:
            remote_ref = f"refs/remotes/{self.remote_name}/{branch}"
            status, _, _ = self._run(path, "show-ref", "--verify", "--quiet", remote_ref)
            remote_exists = status == 0

        if remote_exists:
            status, stdout, stderr = self._run(
                path, "rev-list", "--left-right", "--count", f"{self.remote_name}/{branch}...HEAD"
            )
            counts_pair = parse_left_right_count(stdout) if status == 0 else None
            if counts_pair is None:
                logger.warning(
                    f"Unexpected ahead/behind output for {path} (exit {status}): "
                    f"{stdout.strip() or stderr.strip()!r}"
                )
            else:
                behind, ahead = counts_pair

        return StatusSnapshot(
            has_uncommitted_changes=has_changes,
            branch_name=branch,
            remote_exists=remote_exists,
            ahead_count=ahead,
            behind_count=behind,
            **counts,
        )


def clear_readonly(path: str) -> None:
    """Add write permission to a directory tree so it can be deleted."""
    for root, dirs, files in os.walk(path):
        for name in dirs + files:
            full_path = os.path.join(root, name)
            if os.path.islink(full_path):
                continue
            mode = os.stat(full_path).st_mode
            os.chmod(full_path, mode | stat.S_IWRITE)
    os.chmod(path, os.stat(path).st_mode | stat.S_IWRITE)
