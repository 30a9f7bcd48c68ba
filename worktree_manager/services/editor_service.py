"""External editor launcher for worktree-manager."""
import shlex
import shutil
import subprocess
from typing import Optional, Tuple

from worktree_manager.logging_config import get_logger

logger = get_logger(__name__)


class EditorService:
    """Opens worktree directories in an external editor."""

    def __init__(self, command: str):
        """Initialize the launcher.

        Args:
            command: Editor command line, e.g. "code" or "code --new-window"
        """
        self.command = command

    def open(self, path: str) -> Tuple[bool, Optional[str]]:
        """Launch the editor on `path` without waiting for it.

        Returns:
            Tuple of (success, error_message). A missing editor is reported, not raised.
        """
        try:
            args = shlex.split(self.command)
        except ValueError as e:
            error_msg = f"Cannot parse editor command '{self.command}': {e}"
            logger.warning(error_msg)
            return False, error_msg

        executable = shutil.which(args[0]) if args else None
        if executable is None:
            error_msg = f"Editor '{self.command}' not found on PATH"
            logger.warning(error_msg)
            return False, error_msg

        try:
            subprocess.Popen(
                [executable, *args[1:], path],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            error_msg = f"Could not launch editor '{self.command}': {e}"
            logger.warning(error_msg)
            return False, error_msg

        logger.info(f"Opened {path} in {self.command}")
        return True, None
