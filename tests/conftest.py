"""Pytest fixtures for worktree-manager tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from worktree_manager.config import Config
from worktree_manager.core import WorktreeManager
from worktree_manager.models.status import StatusSnapshot
from worktree_manager.models.worktree import Worktree
from worktree_manager.services.editor_service import EditorService


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config(temp_dir):
    """Configuration with worktrees created inside the temp directory."""
    return Config(
        worktrees_root=temp_dir / "worktrees",
        refresh_interval=5,
        editor="worktree-manager-test-editor-does-not-exist",
    )


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Repository whose 'origin' is a local bare repository with main pushed."""
    remote_path = temp_dir / "remote.git"
    git.Repo.init(remote_path, bare=True)
    git_repo.create_remote('origin', str(remote_path))
    git_repo.git.push('--set-upstream', 'origin', 'main')
    yield git_repo


@pytest.fixture
def mock_editor():
    """Editor launcher that never starts a process."""
    editor = Mock(spec=EditorService)
    editor.open.return_value = (True, None)
    return editor


@pytest.fixture
def manager(git_repo, config, mock_editor):
    """WorktreeManager bound to the test repository."""
    return WorktreeManager(git_repo.working_dir, config, editor=mock_editor)


@pytest.fixture
def sample_worktrees():
    """Worktrees as they would come out of a listing."""
    return [
        Worktree(path="/wt/alpha_0000aaaa", branch="feature/alpha", commit_hash="a" * 40),
        Worktree(path="/wt/beta_0000bbbb", branch="feature/beta", commit_hash="b" * 40),
        Worktree(path="/wt/gamma_0000cccc", branch="bugfix/gamma", commit_hash="c" * 40),
    ]


@pytest.fixture
def dirty_snapshot():
    """Snapshot of a worktree with local changes and unpushed commits."""
    return StatusSnapshot(
        has_uncommitted_changes=True,
        branch_name="feature/alpha",
        remote_exists=True,
        ahead_count=2,
        behind_count=0,
        added=1,
        modified=3,
        deleted=0,
        untracked=2,
    )


@pytest.fixture
def clean_snapshot():
    """Snapshot of a clean worktree in sync with its remote."""
    return StatusSnapshot(
        has_uncommitted_changes=False,
        branch_name="feature/beta",
        remote_exists=True,
    )


@pytest.fixture
def mock_manager(sample_worktrees):
    """WorktreeManager double listing the sample worktrees."""
    manager = Mock(spec=WorktreeManager)
    manager.repo_path = "/repo"
    manager.list_worktrees.return_value = list(sample_worktrees)
    manager.open_in_editor.return_value = (True, None)
    manager.push.return_value = (True, "pushed")
    return manager


@pytest.fixture
def loader(clean_snapshot):
    """Status loader that reports every worktree as clean."""
    return Mock(return_value=clean_snapshot)
