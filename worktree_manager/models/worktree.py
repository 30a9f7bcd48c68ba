"""Worktree data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Worktree:
    """A git worktree as reported by `git worktree list --porcelain`."""

    path: str
    branch: str
    commit_hash: str
    is_main: bool = False  # First record of the listing
    is_detached: bool = False

    @property
    def short_hash(self) -> str:
        return self.commit_hash[:7]

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        return f"{branch} @ {self.path}{main_marker}"
