"""Tests for the command-line entry point"""
import io
from pathlib import Path
from unittest.mock import patch

import pytest

from worktree_manager.cli.args import parse_args
from worktree_manager.cli.main import main
from worktree_manager.constants import DEFAULT_EDITOR, DEFAULT_REFRESH_INTERVAL, WORKTREES_DIR_NAME

MISSING_EDITOR = "worktree-manager-test-editor-does-not-exist"


def captured(capsys) -> str:
    """Captured stdout with line wrapping undone."""
    return " ".join(capsys.readouterr().out.split())


@pytest.fixture
def in_repo(git_repo, temp_dir, monkeypatch):
    """Run from inside the test repository with HOME pointing at the temp dir."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(git_repo.working_dir)
    return home


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.branch is None
        assert args.refresh_interval == DEFAULT_REFRESH_INTERVAL
        assert args.editor == DEFAULT_EDITOR
        assert args.remote == "origin"

    def test_branch_and_interval(self):
        args = parse_args(["feature/x", "--refresh-interval", "0"])
        assert args.branch == "feature/x"
        assert args.refresh_interval == 0

    @pytest.mark.parametrize("value", ["-1", "soon", "1.5"])
    def test_bad_interval_rejected(self, value):
        with pytest.raises(SystemExit):
            parse_args(["--refresh-interval", value])


class TestDirectMode:
    """Test create-and-exit mode."""

    def test_creates_worktree(self, in_repo, git_repo, capsys):
        exit_code = main(["feature/cli", "--editor", MISSING_EDITOR])

        assert exit_code == 0
        root = in_repo / WORKTREES_DIR_NAME
        created = list(root.iterdir())
        assert len(created) == 1
        assert created[0].name.startswith("cli_")
        assert "feature/cli" in [h.name for h in git_repo.heads]

        output = captured(capsys)
        assert "Created worktree" in output
        # Missing editor is a warning, not a failure
        assert "not found" in output

    def test_invalid_branch(self, in_repo, capsys):
        exit_code = main(["invalid branch name", "--editor", MISSING_EDITOR])

        assert exit_code == 1
        assert "Invalid branch name" in captured(capsys)
        assert not (in_repo / WORKTREES_DIR_NAME).exists()

    def test_existing_branch_reports_git_failure(self, in_repo, capsys):
        exit_code = main(["main", "--editor", MISSING_EDITOR])

        assert exit_code == 1
        assert "worktree add" in captured(capsys)

    def test_outside_repository(self, temp_dir, monkeypatch, capsys):
        outside = temp_dir / "outside"
        outside.mkdir()
        monkeypatch.setenv("HOME", str(temp_dir))
        monkeypatch.chdir(outside)

        assert main(["feature/x"]) == 1
        assert "not a git repository" in captured(capsys)


class TestInteractiveMode:
    """Test the interactive entry without a terminal."""

    def test_requires_terminal(self, in_repo, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO())

        assert main(["--editor", MISSING_EDITOR]) == 1
        assert "needs a terminal" in captured(capsys)

    def test_logs_to_file(self, in_repo, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO())

        main(["--editor", MISSING_EDITOR])

        assert Path(in_repo, ".worktree-manager", "worktree-manager.log").exists()

    def test_runs_app_on_terminal(self, in_repo, monkeypatch):
        stdin = io.StringIO()
        stdin.isatty = lambda: True
        monkeypatch.setattr("sys.stdin", stdin)

        with patch("worktree_manager.tui.WorktreeManagerApp.run") as run:
            assert main(["--editor", MISSING_EDITOR, "--refresh-interval", "0"]) == 0

        run.assert_called_once_with()
