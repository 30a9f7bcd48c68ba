"""In-memory cache of per-worktree status snapshots."""
from typing import Callable, Dict, Iterable, Optional

from worktree_manager.exceptions import WorktreeManagerError
from worktree_manager.logging_config import get_logger
from worktree_manager.models.status import StatusSnapshot

logger = get_logger(__name__)


class StatusCache:
    """Maps worktree paths to their latest StatusSnapshot.

    Entries never expire on their own; callers invalidate them after a
    mutating action and clear them on every timed refresh. Changes made with
    git outside the tool stay invisible until the next refresh.
    """

    def __init__(self, loader: Callable[[str], StatusSnapshot]):
        """Initialize the cache.

        Args:
            loader: Function that queries the status of one worktree path
        """
        self._loader = loader
        self._snapshots: Dict[str, StatusSnapshot] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)

    def get(self, path: str) -> Optional[StatusSnapshot]:
        """Return the cached snapshot for a path, never querying."""
        return self._snapshots.get(path)

    def get_or_load(self, path: str) -> StatusSnapshot:
        """Return the cached snapshot, querying and storing it on a miss.

        Raises:
            WorktreeManagerError: if the status query fails
        """
        snapshot = self._snapshots.get(path)
        if snapshot is None:
            logger.debug(f"Status cache miss for {path}")
            snapshot = self._loader(path)
            self._snapshots[path] = snapshot
        return snapshot

    def invalidate(self, path: str) -> None:
        """Drop the snapshot of a single path."""
        if self._snapshots.pop(path, None) is not None:
            logger.debug(f"Invalidated status for {path}")

    def clear(self) -> None:
        """Drop every snapshot."""
        self._snapshots.clear()
        logger.debug("Status cache cleared")

    def bulk_refresh(self, paths: Iterable[str]) -> None:
        """Invalidate and reload every given path.

        A failing path gets an error snapshot instead of aborting the batch.
        """
        refreshed = 0
        failed = 0
        for path in paths:
            self.invalidate(path)
            try:
                self._snapshots[path] = self._loader(path)
                refreshed += 1
            except WorktreeManagerError as e:
                logger.warning(f"Could not refresh status for {path}: {e}")
                self._snapshots[path] = StatusSnapshot.from_error(str(e))
                failed += 1
        logger.debug(f"Bulk refresh done: {refreshed} refreshed, {failed} failed")
