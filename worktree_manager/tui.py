"""Interactive TUI for worktree-manager using Textual.

``Session`` holds the worktree list, the selection and the dialog state, and
performs the actions. ``WorktreeManagerApp`` maps keys to those actions and
draws the result. Handlers and the refresh timer run on Textual's single
event loop and call git synchronously, so git commands never overlap and the
status cache needs no locking.
"""

from typing import List, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.coordinate import Coordinate
from textual.timer import Timer
from textual.widgets import DataTable, Footer, Header, Static

from .__version__ import __version__
from .config import Config
from .constants import COLUMNS, LEGEND_TEXT
from .core import WorktreeManager
from .exceptions import WorktreeManagerError
from .formatters import format_branch_label, format_deletion_warnings
from .logging_config import get_logger
from .models.session import SessionState
from .models.worktree import Worktree
from .services.cache_service import StatusCache
from .services.git.worktrees import normalize_path
from .ui.renderer import delete_prompt, repository_line, status_message, worktree_row
from .ui.screens import DELETE_WITH_BRANCH, CreateWorktreeScreen, DeleteConfirmScreen

logger = get_logger(__name__)


class Session:
    """Worktree list with navigation, push, delete and create."""

    def __init__(self, manager: WorktreeManager, cache: StatusCache, config: Config):
        """Initialize the session.

        Args:
            manager: Worktree operations
            cache: Status cache owned by this session
            config: Application configuration
        """
        self.manager = manager
        self.cache = cache
        self.config = config

        self.state = SessionState.LISTING
        self.worktrees: List[Worktree] = []
        self.selected_index = 0
        self.message = ""
        self.message_style = ""
        self.pending_delete: Optional[Worktree] = None
        self.delete_warnings: List[str] = []

    @property
    def repo_path(self) -> str:
        return self.manager.repo_path

    @property
    def selected(self) -> Optional[Worktree]:
        if 0 <= self.selected_index < len(self.worktrees):
            return self.worktrees[self.selected_index]
        return None

    def _info(self, message: str) -> None:
        self.message, self.message_style = message, "green"

    def _error(self, message: str) -> None:
        logger.warning(message)
        self.message, self.message_style = message, "red"

    # List handling

    def reload_worktrees(self, select_path: Optional[str] = None) -> bool:
        """Re-fetch the worktree list, keeping the selection where possible.

        Returns:
            False if listing failed (the previous list is kept)
        """
        previous = self.selected
        try:
            worktrees = self.manager.list_worktrees()
        except WorktreeManagerError as e:
            self._error(str(e))
            return False

        self.worktrees = worktrees
        target = select_path or (previous.path if previous else None)
        target = normalize_path(target) if target else None
        for index, wt in enumerate(worktrees):
            if normalize_path(wt.path) == target:
                self.selected_index = index
                break
        else:
            self.selected_index = min(max(0, self.selected_index), max(0, len(worktrees) - 1))
        return True

    def refresh_all(self) -> None:
        """Re-list worktrees and reload every status snapshot."""
        logger.debug("Refreshing all worktrees")
        self.reload_worktrees()
        self.cache.clear()
        self.cache.bulk_refresh(wt.path for wt in self.worktrees)

    def refresh(self) -> None:
        """Explicit refresh requested by the user."""
        self.refresh_all()
        self._info("Refreshed")

    def move_selection(self, delta: int) -> None:
        """Move the cursor, clamped to the list bounds."""
        if not self.worktrees:
            return
        self.select(self.selected_index + delta)

    def select(self, index: int) -> None:
        if self.worktrees:
            self.selected_index = min(max(0, index), len(self.worktrees) - 1)

    # Actions

    def open_selected(self) -> None:
        worktree = self.selected
        if worktree is None:
            return
        ok, error = self.manager.open_in_editor(worktree.path)
        if ok:
            self._info(f"Opened {worktree.path}")
        else:
            self._error(error or "Could not open editor")

    def push_selected(self) -> None:
        worktree = self.selected
        if worktree is None:
            return

        ok, output = self.manager.push(worktree)
        self.cache.invalidate(worktree.path)
        self._load_status(worktree.path)

        if ok:
            self._info(output or f"Pushed {worktree.branch}")
        else:
            self._error(output or f"Push of {format_branch_label(worktree)} failed")

    def _load_status(self, path: str) -> None:
        try:
            self.cache.get_or_load(path)
        except WorktreeManagerError as e:
            logger.warning(f"Could not load status for {path}: {e}")

    def begin_delete(self) -> bool:
        """Enter CONFIRMING_DELETE for the selected worktree.

        Returns:
            False if there is nothing to delete or the selection is the main worktree
        """
        worktree = self.selected
        if worktree is None:
            return False
        if worktree.is_main:
            self._error(f"Cannot delete the main worktree {worktree.path}")
            return False

        try:
            snapshot = self.cache.get_or_load(worktree.path)
        except WorktreeManagerError as e:
            logger.warning(f"Could not load status for {worktree.path}: {e}")
            snapshot = None

        self.pending_delete = worktree
        self.delete_warnings = format_deletion_warnings(snapshot)
        self.message = ""
        self.state = SessionState.CONFIRMING_DELETE
        return True

    def _finish_delete(self) -> None:
        self.pending_delete = None
        self.delete_warnings = []
        self.state = SessionState.LISTING

    def cancel_delete(self) -> None:
        self._finish_delete()
        self._info("Deletion cancelled")

    def confirm_delete(self, delete_branch: bool = False) -> None:
        worktree = self.pending_delete
        if worktree is None:
            self._finish_delete()
            return

        try:
            self.manager.remove_worktree(worktree)
        except WorktreeManagerError as e:
            self._finish_delete()
            self._error(str(e))
            return

        # The worktree is gone from here on, whatever happens to the branch
        self.cache.invalidate(worktree.path)
        self._finish_delete()
        self.reload_worktrees()

        if delete_branch and worktree.branch:
            try:
                self.manager.delete_branch(worktree.branch)
            except WorktreeManagerError as e:
                self._error(f"Deleted worktree {worktree.path}, but {e}")
                return
            self._info(f"Deleted worktree {worktree.path} and branch '{worktree.branch}'")
        else:
            self._info(f"Deleted worktree {worktree.path}")

    def begin_create(self) -> None:
        self.message = ""
        self.state = SessionState.CREATING_NEW

    def cancel_create(self) -> None:
        self.state = SessionState.LISTING
        self._info("Creation cancelled")

    def submit_create(self, text: str) -> None:
        branch = text.strip()
        self.state = SessionState.LISTING

        if not branch:
            self._error("Branch name cannot be empty")
            return

        try:
            path = self.manager.create_worktree(branch)
        except WorktreeManagerError as e:
            self._error(str(e))
            return

        self.reload_worktrees(select_path=path)
        self._load_status(path)
        self._info(f"Created {path}")

        ok, error = self.manager.open_in_editor(path)
        if not ok:
            self._error(f"Created {path}, but {error}")

    def quit(self) -> None:
        self.state = SessionState.EXITED
        logger.info("Session ended")


class WorktreeManagerApp(App):
    """Interactive TUI for worktree-manager."""

    TITLE = "Worktree Manager"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    #repo-line {
        height: auto;
        padding: 0 1;
    }

    DataTable {
        height: 1fr;
    }

    #empty-hint {
        padding: 1 2;
        color: $text-muted;
    }

    #legend {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    #status-bar {
        height: auto;
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("o", "open", "Open"),
        Binding("p", "push", "Push"),
        Binding("d", "delete", "Delete"),
        Binding("n", "new", "New"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        self._refresh_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header(show_clock=False)
        yield Static(
            repository_line(self.session.repo_path, self.session.config.refresh_interval),
            id="repo-line",
        )
        yield DataTable(id="worktree-table", cursor_type="row", zebra_stripes=True)
        yield Static("No other worktrees. Press n to create one.", id="empty-hint")
        yield Static(LEGEND_TEXT, id="legend")
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Set up the table, load every status and start the refresh timer."""
        table = self.query_one(DataTable)
        for col in COLUMNS:
            table.add_column(col.label, width=col.width or None, key=col.key)

        self.session.reload_worktrees()
        self.session.cache.bulk_refresh(wt.path for wt in self.session.worktrees)
        self._update_view()
        table.focus()

        interval = self.session.config.refresh_interval
        if interval > 0:
            self._refresh_timer = self.set_interval(interval, self._on_refresh_tick)
        else:
            logger.debug("Periodic refresh disabled")

    async def on_event(self, event: events.Event) -> None:
        # User activity postpones the next refresh
        if isinstance(event, events.Key) and self._refresh_timer is not None:
            self._refresh_timer.reset()
        await super().on_event(event)

    def _on_refresh_tick(self) -> None:
        self.session.refresh_all()
        self._update_view()

    def _update_view(self) -> None:
        """Redraw the table and the status bar from the session."""
        session = self.session
        table = self.query_one(DataTable)
        table.clear()

        root = str(session.config.worktrees_root)
        for wt in session.worktrees:
            table.add_row(*worktree_row(wt, session.cache.get(wt.path), root), key=wt.path)
        if session.worktrees:
            table.cursor_coordinate = Coordinate(session.selected_index, 0)

        self.query_one("#empty-hint", Static).display = not session.worktrees
        self.query_one("#status-bar", Static).update(
            status_message(session.message, session.message_style)
        )

    def _sync_selection(self) -> None:
        table = self.query_one(DataTable)
        if table.row_count:
            self.session.select(table.cursor_row)

    def _listing(self) -> bool:
        return self.session.state is SessionState.LISTING

    def action_cursor_down(self) -> None:
        self._move(1)

    def action_cursor_up(self) -> None:
        self._move(-1)

    def _move(self, delta: int) -> None:
        if not self._listing():
            return
        self._sync_selection()
        self.session.move_selection(delta)
        if self.session.worktrees:
            self.query_one(DataTable).cursor_coordinate = Coordinate(self.session.selected_index, 0)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter on a row opens it."""
        self.action_open()

    def action_open(self) -> None:
        if not self._listing():
            return
        self._sync_selection()
        self.session.open_selected()
        self._update_view()

    def action_push(self) -> None:
        if not self._listing():
            return
        self._sync_selection()
        self.session.push_selected()
        self._update_view()

    def action_refresh(self) -> None:
        if not self._listing():
            return
        self._sync_selection()
        self.session.refresh()
        self._update_view()

    def action_delete(self) -> None:
        if not self._listing():
            return
        self._sync_selection()
        if not self.session.begin_delete():
            self._update_view()
            return

        worktree = self.session.pending_delete
        message = delete_prompt(worktree, self.session.delete_warnings)
        self.push_screen(
            DeleteConfirmScreen(message, has_branch=bool(worktree.branch)),
            self._handle_delete_confirmation,
        )

    def _handle_delete_confirmation(self, choice: Optional[str]) -> None:
        if choice is None:
            self.session.cancel_delete()
        else:
            self.session.confirm_delete(delete_branch=choice == DELETE_WITH_BRANCH)
        self._update_view()

    def action_new(self) -> None:
        if not self._listing():
            return
        self._sync_selection()
        self.session.begin_create()
        self.push_screen(CreateWorktreeScreen(), self._handle_create)

    def _handle_create(self, branch: Optional[str]) -> None:
        if branch is None:
            self.session.cancel_create()
        else:
            self.session.submit_create(branch)
        self._update_view()

    async def action_quit(self) -> None:
        self.session.quit()
        self.exit()
