"""Rich text pieces shown by the interactive screen."""
from typing import List, Optional, Tuple

from rich.text import Text

from worktree_manager.constants import STATUS_STYLES
from worktree_manager.formatters import (
    format_branch_label,
    format_status_indicator,
    format_worktree_path,
    get_status_style_type,
)
from worktree_manager.models.status import StatusSnapshot
from worktree_manager.models.worktree import Worktree


def worktree_row(
    worktree: Worktree,
    snapshot: Optional[StatusSnapshot],
    root: Optional[str] = None,
) -> Tuple[Text, Text, Text, str]:
    """
    Cells of one table row, in COLUMNS order.

    Args:
        worktree: Worktree to show
        snapshot: Cached status, or None while not loaded yet
        root: Worktrees root used to shorten the path

    Returns:
        (branch, status, commit, path) cells
    """
    branch_style = "italic" if worktree.is_detached else ""
    if worktree.is_main:
        branch_style = "bold cyan"

    return (
        Text(format_branch_label(worktree), style=branch_style),
        Text(format_status_indicator(snapshot), style=STATUS_STYLES[get_status_style_type(snapshot)]),
        Text(worktree.short_hash, style="dim"),
        format_worktree_path(worktree.path, root),
    )


def delete_prompt(worktree: Worktree, warnings: List[str]) -> Text:
    """Body of the delete confirmation dialog."""
    text = Text()
    text.append(f"Delete worktree '{format_branch_label(worktree)}'?\n", style="bold")
    text.append(f"{worktree.path}\n", style="dim")
    if warnings:
        for warning in warnings:
            text.append(f"\n⚠ {warning}", style="yellow")
    else:
        text.append("\nNo uncommitted or unpushed work detected", style="green")
    return text


def repository_line(repo_path: str, refresh_interval: int) -> Text:
    """Line under the header naming the repository and the refresh mode."""
    refresh_info = f"refresh every {refresh_interval}s" if refresh_interval else "auto refresh off"
    text = Text(repo_path, style="bold")
    text.append(f"  ({refresh_info})", style="dim")
    return text


def status_message(message: str, style: str) -> Text:
    return Text(message, style=style)
