"""Core sync engine that sequences the orphan pass and the copy pass."""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..exceptions import InvalidPathError
from ..output import OutputFormatter
from ..utils import describe_segments, format_elapsed
from .acl import AclProvider, get_acl_provider
from .filters import SyncFilter
from .models import RunCounters, SyncOptions, SyncResult
from .operations import SyncOperations
from .planner import SyncPlanner
from .progress import ProgressCallback
from .reaper import OrphanReaper

logger = logging.getLogger(__name__)


class SyncEngine:
    """Mirrors a source directory onto a target directory.

    A run first removes orphans from the target, then copies every source
    file that is missing or out of date. Both passes share one filter, so
    they operate on the same logical file set.

    Examples:
        >>> engine = SyncEngine(OutputFormatter())
        >>> result = engine.run(Path("/data"), Path("/backup/data"))
        >>> print(f"Copied {result.counters.synced} files")
    """

    def __init__(
        self,
        output: Optional[OutputFormatter] = None,
        acl_provider: Optional[AclProvider] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """Initialize sync engine.

        Args:
            output: Output formatter for displaying progress/status
            acl_provider: Access-control provider (selected for the running
                platform if not given)
            progress_callback: Optional per-file copy progress callback
        """
        self.output = output or OutputFormatter()
        self.operations = SyncOperations(acl_provider or get_acl_provider())
        self.reaper = OrphanReaper(self.output, self.operations)
        self.planner = SyncPlanner(self.output, self.operations, progress_callback)

    def run(
        self,
        source: Union[str, Path],
        target: Union[str, Path],
        sync_filter: Optional[SyncFilter] = None,
        options: Optional[SyncOptions] = None,
    ) -> SyncResult:
        """Run one complete sync.

        Any exception ends the run at this boundary: it is reported, the error
        counter is raised to at least one, and the summary is still written.

        Args:
            source: Source directory
            target: Target directory (created on demand)
            sync_filter: Include/ignore filter for both passes
            options: Sync options

        Returns:
            SyncResult with the final counters, elapsed time and the
            aborting error, if any
        """
        sync_filter = sync_filter or SyncFilter()
        options = options or SyncOptions()
        source_root = Path(source)
        target_root = Path(target)

        counters = RunCounters()
        result = SyncResult(counters=counters)
        started = time.monotonic()

        self._log_header(source_root, target_root, sync_filter, options)

        try:
            self._validate_roots(source_root, target_root)

            self.output.info("Removing files that are no longer present at the source")
            self.reaper.reap(
                source_root, target_root, sync_filter, options.dry_run, counters
            )
            self.output.print()

            self.output.info("Syncing files from source to target")
            self.planner.plan_and_sync(
                source_root, target_root, sync_filter, options, counters
            )
        except Exception as e:
            logger.debug("Sync run aborted", exc_info=True)
            if counters.errors < 1:
                counters.set("errors", 1)
            result.error = e
            self.output.exception(e)
        finally:
            result.elapsed = time.monotonic() - started
            self._log_summary(result)

        return result

    @staticmethod
    def _validate_roots(source_root: Path, target_root: Path) -> None:
        if not source_root.exists():
            raise InvalidPathError(f"Source directory does not exist: {source_root}")
        if not source_root.is_dir():
            raise InvalidPathError(f"Source path is not a directory: {source_root}")
        if target_root.exists() and not target_root.is_dir():
            raise InvalidPathError(f"Target path is not a directory: {target_root}")

    def _log_header(
        self,
        source_root: Path,
        target_root: Path,
        sync_filter: SyncFilter,
        options: SyncOptions,
    ) -> None:
        self.output.print()
        self.output.info(
            f"Starting sync {datetime.now():%Y-%m-%d %H:%M:%S} "
            f"Source: {source_root} Target: {target_root}"
        )
        self.output.info(f" - DryRun: {options.dry_run}")
        self.output.info(f" - Include: {describe_segments(sync_filter.include, 'ALL')}")
        self.output.info(f" - Ignore: {describe_segments(sync_filter.ignore, 'NONE')}")
        if options.dry_run:
            self.output.warning("Dry run: No changes will be made")
        self.output.print()

    def _log_summary(self, result: SyncResult) -> None:
        counters = result.counters
        self.output.print()
        message = (
            f"Operation completed. Synced: {counters.synced} "
            f"Removed from target: {counters.removed} "
            f"Errors: {counters.errors}. "
            f"Elapsed: {format_elapsed(result.elapsed)}"
        )
        if result.success:
            self.output.success(message)
        else:
            self.output.error(message)
