"""Directory scanning utilities for sync operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .filters import SyncFilter

logger = logging.getLogger(__name__)


@dataclass
class LocalFile:
    """Represents a file below a scanned root with its metadata."""

    path: Path
    """Absolute path to the file"""

    relative_path: str
    """Path relative to the scanned root (forward slashes on all platforms)"""

    size: int
    """File size in bytes"""

    mtime_ns: int
    """Last modification time in nanoseconds since the epoch (UTC)"""

    creation_time: Optional[float] = None
    """Creation time (Unix timestamp) if the platform reports one"""

    @property
    def mtime(self) -> float:
        """Last modification time (Unix timestamp)."""
        return self.mtime_ns / 1_000_000_000

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "LocalFile":
        """Create LocalFile from a path.

        Args:
            file_path: Absolute path to the file
            base_path: Base path for calculating relative paths

        Returns:
            LocalFile instance
        """
        stat = file_path.stat()
        relative_path = file_path.relative_to(base_path).as_posix()

        # st_birthtime exists on macOS and BSD only
        stat_any: Any = stat
        creation_time: Optional[float] = getattr(stat_any, "st_birthtime", None)

        return cls(
            path=file_path,
            relative_path=relative_path,
            size=stat.st_size,
            mtime_ns=stat.st_mtime_ns,
            creation_time=creation_time,
        )


class DirectoryScanner:
    """Recursively lists the files below a root that pass a SyncFilter.

    The filter is applied to the path relative to the scanned root, so the
    same filter gives the same answer for a file and its counterpart under a
    different root.

    Examples:
        >>> scanner = DirectoryScanner(SyncFilter.from_strings(ignore=".git"))
        >>> files = scanner.scan(Path("/data/projects"))
        >>> for f in files:
        ...     print(f.relative_path)
    """

    def __init__(self, sync_filter: Optional[SyncFilter] = None):
        """Initialize directory scanner.

        Args:
            sync_filter: Filter deciding which files participate
                (defaults to a filter that accepts everything)
        """
        self.sync_filter = sync_filter or SyncFilter()

    def scan(self, root: Path) -> list[LocalFile]:
        """Scan ``root`` recursively.

        Entries are visited in sorted order so that both passes and repeated
        runs process files in a stable sequence. Symbolic links to directories
        are not followed.

        Args:
            root: Directory to scan

        Returns:
            List of participating files
        """
        return self._scan_directory(root, root)

    def _scan_directory(self, directory: Path, base_path: Path) -> list[LocalFile]:
        files: list[LocalFile] = []

        try:
            entries = sorted(directory.iterdir())
        except PermissionError as e:
            logger.warning("Skipping unreadable directory %s: %s", directory, e)
            return files

        for item in entries:
            relative = item.relative_to(base_path).as_posix()

            if item.is_dir() and not item.is_symlink():
                # An ignored segment excludes every descendant as well
                if self.sync_filter.is_ignored(relative):
                    logger.debug("Ignoring directory: %s", relative)
                    continue
                files.extend(self._scan_directory(item, base_path))
            elif item.is_file():
                if not self.sync_filter.participates(relative):
                    logger.debug("Filtered out: %s", relative)
                    continue
                files.append(LocalFile.from_path(item, base_path))

        return files
