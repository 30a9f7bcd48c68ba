"""Command-line argument parsing for worktree-manager."""

import argparse

from worktree_manager.__version__ import __version__
from worktree_manager.constants import DEFAULT_EDITOR, DEFAULT_REFRESH_INTERVAL, DEFAULT_REMOTE


def non_negative_int(value: str) -> int:
    """argparse type for a non-negative integer."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive manager for git worktrees",
        epilog="Without BRANCH an interactive list opens. With BRANCH a worktree "
        "for a new branch is created, opened in the editor, and the program exits.",
    )
    parser.add_argument(
        "branch",
        nargs="?",
        help="Create a worktree for this new branch and exit",
    )
    parser.add_argument(
        "--refresh-interval",
        type=non_negative_int,
        default=DEFAULT_REFRESH_INTERVAL,
        metavar="SECONDS",
        help=f"Seconds between status refreshes, 0 disables (default: {DEFAULT_REFRESH_INTERVAL})",
    )
    parser.add_argument(
        "--editor",
        default=DEFAULT_EDITOR,
        help=f"Command used to open worktrees (default: {DEFAULT_EDITOR})",
    )
    parser.add_argument(
        "--remote",
        default=DEFAULT_REMOTE,
        help=f"Remote used for push and sync status (default: {DEFAULT_REMOTE})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"worktree-manager {__version__}")

    return parser.parse_args(argv)
