"""Branch name validation and worktree folder naming for worktree-manager."""

import re
import secrets

from worktree_manager.constants import FOLDER_SUFFIX_BYTES

_UNSAFE_FOLDER_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_DASH_RUNS = re.compile(r"-{2,}")
_FORBIDDEN_BRANCH_PATTERN = re.compile(r"\s|[~^:\\?*\[\]]|@\{|\.\.")


class BranchNameService:
    """Service for turning branch names into safe worktree folder names."""

    @staticmethod
    def derive_folder_name(branch: str) -> str:
        """
        Derive a folder-safe name from a branch name.

        Only the part after the final '/' is kept; characters outside
        [A-Za-z0-9_-] become '-', dash runs collapse and outer dashes are trimmed.

        Args:
            branch: Branch name, e.g. "release/v1.0.0"

        Returns:
            Folder name, e.g. "v1-0-0". Empty input yields "".
        """
        name = branch.rsplit("/", 1)[-1]
        name = _UNSAFE_FOLDER_CHARS.sub("-", name)
        name = _DASH_RUNS.sub("-", name)
        return name.strip("-")

    @staticmethod
    def validate_branch_name(name: str) -> bool:
        """
        Check whether a branch name is safe to hand to git and to derive a folder from.

        Stricter than git's own rules.

        Args:
            name: Proposed branch name

        Returns:
            True if the name is acceptable
        """
        if not name or not name.strip():
            return False
        if name.startswith("/") or name.endswith("/"):
            return False
        return _FORBIDDEN_BRANCH_PATTERN.search(name) is None

    @staticmethod
    def generate_worktree_folder(branch: str) -> str:
        """
        Generate a unique worktree folder name for a branch.

        Args:
            branch: Branch name

        Returns:
            Derived folder name plus "_" and an 8 character random hex suffix
        """
        suffix = secrets.token_hex(FOLDER_SUFFIX_BYTES)
        return f"{BranchNameService.derive_folder_name(branch)}_{suffix}"
