"""Removal of target files that no longer exist at the source."""

import logging
from pathlib import Path
from typing import Optional

from ..output import OutputFormatter
from .filters import SyncFilter
from .models import RunCounters
from .operations import SyncOperations
from .scanner import DirectoryScanner, LocalFile

logger = logging.getLogger(__name__)


class OrphanReaper:
    """Deletes orphans: target files without a counterpart at the source.

    The counterpart of a target file is the path with the same relative path
    below the source root. Files that do not participate in the filter are
    never orphans.
    """

    def __init__(
        self,
        output: Optional[OutputFormatter] = None,
        operations: Optional[SyncOperations] = None,
    ):
        """Initialize the reaper.

        Args:
            output: Output formatter for progress and error lines
            operations: File operations used for deleting
        """
        self.output = output or OutputFormatter()
        self.operations = operations or SyncOperations()

    def find_orphans(
        self, source_root: Path, target_root: Path, sync_filter: SyncFilter
    ) -> list[LocalFile]:
        """List the orphans below ``target_root`` in enumeration order."""
        if not target_root.is_dir():
            logger.debug("Target %s does not exist yet, nothing to reap", target_root)
            return []

        scanner = DirectoryScanner(sync_filter)
        return [
            target_file
            for target_file in scanner.scan(target_root)
            if not (source_root / target_file.relative_path).is_file()
        ]

    def reap(
        self,
        source_root: Path,
        target_root: Path,
        sync_filter: SyncFilter,
        dry_run: bool,
        counters: RunCounters,
    ) -> None:
        """Delete all orphans, updating ``removed``, ``to_remove`` and ``errors``.

        A failed deletion is reported and counted; the pass goes on with the
        next file.

        Args:
            source_root: Source directory
            target_root: Target directory
            sync_filter: Filter shared with the copy pass
            dry_run: If True, count orphans as removed without deleting them
            counters: Run counters (modified in place)
        """
        self.output.info("Calculating files to remove...")

        orphans = self.find_orphans(source_root, target_root, sync_filter)
        counters.set("to_remove", len(orphans))

        for index, orphan in enumerate(orphans, start=1):
            self.output.info(
                f"- Deleting [{index}/{counters.to_remove}]: {orphan.relative_path}"
            )

            result = self.operations.delete_file(orphan.path, dry_run=dry_run)
            if result.success:
                counters.increment("removed")
            else:
                counters.increment("errors")
                if result.error is not None:
                    self.output.exception(result.error)
