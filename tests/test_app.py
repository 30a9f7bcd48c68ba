"""Tests for the Textual app driving the session"""
import asyncio
from unittest.mock import patch

import pytest
from textual.widgets import DataTable

from worktree_manager.config import Config
from worktree_manager.models.session import SessionState
from worktree_manager.models.worktree import Worktree
from worktree_manager.services.cache_service import StatusCache
from worktree_manager.tui import Session, WorktreeManagerApp
from worktree_manager.ui.screens import CreateWorktreeScreen, DeleteConfirmScreen


@pytest.fixture
def make_app(mock_manager, loader, temp_dir):
    def factory(refresh_interval=5):
        config = Config(worktrees_root=temp_dir / "worktrees", refresh_interval=refresh_interval)
        return WorktreeManagerApp(Session(mock_manager, StatusCache(loader), config))

    return factory


def run_app(app, scenario):
    """Run `scenario(pilot)` against the app in headless mode."""

    async def runner():
        async with app.run_test() as pilot:
            await pilot.pause()
            await scenario(pilot)

    asyncio.run(runner())


class TestStartup:
    """Test the first screen."""

    def test_lists_and_loads_every_worktree(self, make_app, loader):
        app = make_app()

        async def scenario(pilot):
            assert app.query_one(DataTable).row_count == 3
            assert loader.call_count == 3
            assert app._refresh_timer is not None

        run_app(app, scenario)

    def test_zero_interval_starts_no_timer(self, make_app):
        app = make_app(refresh_interval=0)

        async def scenario(pilot):
            assert app._refresh_timer is None

        run_app(app, scenario)

    def test_empty_list_shows_hint(self, make_app, mock_manager):
        mock_manager.list_worktrees.return_value = []
        app = make_app()

        async def scenario(pilot):
            assert app.query_one(DataTable).row_count == 0
            assert app.query_one("#empty-hint").display is True

        run_app(app, scenario)


class TestKeys:
    """Test key bindings of the list."""

    def test_navigation(self, make_app):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("j", "j", "j")
            assert app.session.selected_index == 2
            assert app.query_one(DataTable).cursor_row == 2

            await pilot.press("k")
            assert app.session.selected_index == 1

        run_app(app, scenario)

    def test_enter_opens_selected(self, make_app, mock_manager):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("j", "enter")
            await pilot.pause()

        run_app(app, scenario)
        mock_manager.open_in_editor.assert_called_once_with("/wt/beta_0000bbbb")

    def test_key_postpones_refresh(self, make_app):
        app = make_app()

        async def scenario(pilot):
            with patch("textual.timer.Timer.reset") as reset:
                await pilot.press("j")
            assert reset.called

        run_app(app, scenario)

    def test_refresh_tick_reloads_everything(self, make_app, mock_manager, loader):
        app = make_app()

        async def scenario(pilot):
            app._on_refresh_tick()
            assert mock_manager.list_worktrees.call_count == 2
            assert loader.call_count == 6

        run_app(app, scenario)

    def test_quit(self, make_app):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("q")

        run_app(app, scenario)
        assert app.session.state is SessionState.EXITED


class TestDeleteDialog:
    """Test the delete confirmation screen."""

    def test_confirm_worktree_only(self, make_app, mock_manager, sample_worktrees):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("d")
            await pilot.pause()
            assert isinstance(app.screen, DeleteConfirmScreen)
            assert app.session.state is SessionState.CONFIRMING_DELETE

            await pilot.press("y")
            await pilot.pause()
            assert not isinstance(app.screen, DeleteConfirmScreen)
            assert app.session.state is SessionState.LISTING

        run_app(app, scenario)
        mock_manager.remove_worktree.assert_called_once_with(sample_worktrees[0])
        mock_manager.delete_branch.assert_not_called()

    def test_confirm_with_branch(self, make_app, mock_manager):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("d")
            await pilot.pause()
            await pilot.press("b")
            await pilot.pause()

        run_app(app, scenario)
        mock_manager.delete_branch.assert_called_once_with("feature/alpha")

    def test_cancel(self, make_app, mock_manager):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("d")
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()
            assert app.session.message == "Deletion cancelled"

        run_app(app, scenario)
        mock_manager.remove_worktree.assert_not_called()

    def test_main_worktree_opens_no_dialog(self, make_app, mock_manager, sample_worktrees):
        main = Worktree(path="/repo", branch="main", commit_hash="0" * 40, is_main=True)
        mock_manager.list_worktrees.return_value = [main] + sample_worktrees
        app = make_app()

        async def scenario(pilot):
            await pilot.press("d")
            await pilot.pause()
            assert not isinstance(app.screen, DeleteConfirmScreen)
            assert "main worktree" in app.session.message

        run_app(app, scenario)
        mock_manager.remove_worktree.assert_not_called()


class TestCreateDialog:
    """Test the new-worktree input screen."""

    def test_typed_letters_are_input_not_commands(self, make_app, mock_manager):
        mock_manager.create_worktree.return_value = "/wt/quick-jdn_1234abcd"
        app = make_app()

        async def scenario(pilot):
            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.screen, CreateWorktreeScreen)
            assert app.session.state is SessionState.CREATING_NEW

            await pilot.press(*"feature/quick-jdn")
            await pilot.press("enter")
            await pilot.pause()
            assert app.session.state is SessionState.LISTING

        run_app(app, scenario)
        mock_manager.create_worktree.assert_called_once_with("feature/quick-jdn")
        mock_manager.remove_worktree.assert_not_called()

    def test_escape_cancels(self, make_app, mock_manager):
        app = make_app()

        async def scenario(pilot):
            await pilot.press("n")
            await pilot.pause()
            await pilot.press("a", "b", "escape")
            await pilot.pause()
            assert not isinstance(app.screen, CreateWorktreeScreen)
            assert app.session.message == "Creation cancelled"

        run_app(app, scenario)
        mock_manager.create_worktree.assert_not_called()
