"""Modal screens for the worktree-manager TUI."""

from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

# Results of DeleteConfirmScreen
DELETE_WORKTREE = "worktree"
DELETE_WITH_BRANCH = "branch"


class DeleteConfirmScreen(ModalScreen[Optional[str]]):
    """Confirm deleting a worktree, optionally together with its branch.

    Dismisses with DELETE_WORKTREE, DELETE_WITH_BRANCH, or None when cancelled.
    """

    DEFAULT_CSS = """
    DeleteConfirmScreen {
        align: center middle;
    }

    #delete-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #delete-message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "choose('worktree')", "Delete worktree"),
        Binding("b", "choose('branch')", "Delete with branch"),
        Binding("n", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("q", "cancel", "Cancel", show=False),
    ]

    def __init__(self, message: Text, has_branch: bool = True):
        super().__init__()
        self.message = message
        self.has_branch = has_branch

    def compose(self) -> ComposeResult:
        with Vertical(id="delete-dialog"):
            yield Static(self.message, id="delete-message")
            with Container(id="button-container"):
                yield Button("Delete worktree (y)", variant="error", id=DELETE_WORKTREE)
                if self.has_branch:
                    yield Button("Delete with branch (b)", variant="warning", id=DELETE_WITH_BRANCH)
                yield Button("Cancel (n)", variant="primary", id="cancel")

    def action_choose(self, choice: str) -> None:
        if choice == DELETE_WITH_BRANCH and not self.has_branch:
            choice = DELETE_WORKTREE
        self.dismiss(choice)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        if event.button.id == "cancel":
            self.dismiss(None)
        else:
            self.action_choose(event.button.id)


class CreateWorktreeScreen(ModalScreen[Optional[str]]):
    """Ask for the branch of a new worktree. Dismisses with the text, or None."""

    DEFAULT_CSS = """
    CreateWorktreeScreen {
        align: center middle;
    }

    #create-dialog {
        width: 60%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #create-hint {
        color: $text-muted;
        padding: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="create-dialog"):
            yield Label("New branch name:")
            yield Input(placeholder="feature/my-change", id="branch-input")
            yield Static("Enter to create, Escape to cancel", id="create-hint")

    def on_mount(self) -> None:
        self.query_one("#branch-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
