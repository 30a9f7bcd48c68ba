"""Status indicator and deletion warning formatting utilities."""

from typing import List, Optional

from worktree_manager.constants import (
    SYMBOL_ADDED,
    SYMBOL_AHEAD,
    SYMBOL_ALL_CLEAR,
    SYMBOL_BEHIND,
    SYMBOL_DELETED,
    SYMBOL_ERROR,
    SYMBOL_LOADING,
    SYMBOL_MODIFIED,
    SYMBOL_NO_REMOTE,
    SYMBOL_UNTRACKED,
)
from worktree_manager.models.status import StatusSnapshot


def format_status_indicator(snapshot: Optional[StatusSnapshot]) -> str:
    """
    Format a status snapshot as a compact indicator string.

    Args:
        snapshot: Cached snapshot, or None while not loaded yet

    Returns:
        Space separated markers, e.g. "+1 ~3 ?2 ↑2".
        ✓ = clean and in sync with the remote
        ✗ = branch has no remote counterpart (ahead/behind not shown)
        ⚠ = status could not be determined
        … = not loaded yet
    """
    if snapshot is None:
        return SYMBOL_LOADING
    if snapshot.error is not None:
        return SYMBOL_ERROR

    parts = []
    for symbol, count in (
        (SYMBOL_ADDED, snapshot.added),
        (SYMBOL_MODIFIED, snapshot.modified),
        (SYMBOL_DELETED, snapshot.deleted),
        (SYMBOL_UNTRACKED, snapshot.untracked),
    ):
        if count:
            parts.append(f"{symbol}{count}")

    if not snapshot.remote_exists:
        parts.append(SYMBOL_NO_REMOTE)
    else:
        if snapshot.ahead_count:
            parts.append(f"{SYMBOL_AHEAD}{snapshot.ahead_count}")
        if snapshot.behind_count:
            parts.append(f"{SYMBOL_BEHIND}{snapshot.behind_count}")

    return " ".join(parts) if parts else SYMBOL_ALL_CLEAR


def get_status_style_type(snapshot: Optional[StatusSnapshot]) -> str:
    """
    Determine the style key for a snapshot.

    Returns:
        One of the STATUS_STYLES keys
    """
    if snapshot is None:
        return "loading"
    if snapshot.error is not None:
        return "error"
    if snapshot.has_uncommitted_changes or snapshot.ahead_count or snapshot.behind_count:
        return "dirty"
    if not snapshot.remote_exists:
        return "no_remote"
    return "clean"


def format_deletion_warnings(snapshot: Optional[StatusSnapshot]) -> List[str]:
    """
    Build the warnings shown before confirming a worktree deletion.

    Args:
        snapshot: Status of the worktree about to be deleted

    Returns:
        Human readable warnings, empty when deletion loses nothing
    """
    if snapshot is None:
        return ["Status unknown: changes in this worktree may be lost"]
    if snapshot.error is not None:
        return [f"Status unknown ({snapshot.error}): changes may be lost"]

    warnings = []
    if snapshot.has_uncommitted_changes:
        details = []
        if snapshot.added:
            details.append(f"{snapshot.added} added")
        if snapshot.modified:
            details.append(f"{snapshot.modified} modified")
        if snapshot.deleted:
            details.append(f"{snapshot.deleted} deleted")
        if snapshot.untracked:
            details.append(f"{snapshot.untracked} untracked")
        warnings.append(f"Uncommitted changes will be lost ({', '.join(details)})")

    if snapshot.branch_name and not snapshot.remote_exists:
        warnings.append(f"Branch '{snapshot.branch_name}' does not exist on the remote")
    elif snapshot.ahead_count:
        noun = "commit" if snapshot.ahead_count == 1 else "commits"
        warnings.append(f"{snapshot.ahead_count} unpushed {noun} on '{snapshot.branch_name}'")

    return warnings
