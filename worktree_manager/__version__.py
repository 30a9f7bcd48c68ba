"""Version information for worktree-manager."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("worktree-manager")
except PackageNotFoundError:
    # Fallback when running from a source checkout that is not installed
    __version__ = "0.0.0+unknown"
