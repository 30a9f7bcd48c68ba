"""Command-line interface for worktree-manager"""

import os
import sys

from rich.console import Console

from worktree_manager.cli.args import parse_args
from worktree_manager.config import Config
from worktree_manager.core import WorktreeManager
from worktree_manager.exceptions import RepositoryError, ToolError, WorktreeManagerError
from worktree_manager.logging_config import get_log_file, setup_logging

console = Console()


def create_and_exit(manager: WorktreeManager, branch: str) -> int:
    """Direct mode: create a worktree for `branch`, open it, and return an exit code."""
    try:
        path = manager.create_worktree(branch)
    except ToolError as e:
        console.print(f"[red]Error: git {e.operation} failed (exit {e.exit_code})[/red]")
        if e.stderr:
            console.print(e.stderr, markup=False, highlight=False)
        return 1
    except WorktreeManagerError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(f"[green]Created worktree for '{branch}' at {path}[/green]")
    ok, error = manager.open_in_editor(path)
    if not ok:
        console.print(f"[yellow]Warning: {error}[/yellow]")
    return 0


def run_interactive(manager: WorktreeManager, config: Config) -> int:
    """Interactive mode: run the TUI until the user quits."""
    from worktree_manager.services.cache_service import StatusCache
    from worktree_manager.tui import Session, WorktreeManagerApp

    if not sys.stdin.isatty():
        console.print("[red]Error: interactive mode needs a terminal (pass a branch name instead)[/red]")
        return 1

    session = Session(manager, StatusCache(manager.repository.query_status), config)
    WorktreeManagerApp(session).run()
    return 0


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    interactive = parsed_args.branch is None

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=interactive)

    try:
        config = Config(
            refresh_interval=parsed_args.refresh_interval,
            editor=parsed_args.editor,
            remote_name=parsed_args.remote,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")
            console.print(f"  log file: {get_log_file()}")

        manager = WorktreeManager(os.getcwd(), config)
        # Fail fast outside a repository
        manager.list_worktrees()

        if interactive:
            return run_interactive(manager, config)
        return create_and_exit(manager, parsed_args.branch)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except RepositoryError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
