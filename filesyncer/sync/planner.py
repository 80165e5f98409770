"""Planning and execution of the copy pass."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from ..exceptions import InsufficientSpaceError
from ..output import OutputFormatter
from ..utils import format_bytes
from .comparator import FileComparator
from .filters import SyncFilter
from .models import FilePlanEntry, RunCounters, SyncOptions
from .operations import SyncOperations
from .progress import ProgressCallback
from .scanner import DirectoryScanner
from .space import free_space

logger = logging.getLogger(__name__)


class SyncPlanner:
    """Builds the copy plan, checks it against free space and runs it."""

    def __init__(
        self,
        output: Optional[OutputFormatter] = None,
        operations: Optional[SyncOperations] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """Initialize the planner.

        Args:
            output: Output formatter for progress and error lines
            operations: File operations used for copying
            progress_callback: Optional per-file copy progress callback
        """
        self.output = output or OutputFormatter()
        self.operations = operations or SyncOperations()
        self.progress_callback = progress_callback

    def build_plan(
        self,
        source_root: Path,
        target_root: Path,
        sync_filter: SyncFilter,
        options: SyncOptions,
    ) -> list[FilePlanEntry]:
        """Compute the files that have to be copied, in enumeration order.

        Args:
            source_root: Source directory
            target_root: Target directory
            sync_filter: Filter shared with the orphan pass
            options: Sync options (timestamp and access-control comparison)

        Returns:
            Ordered list of plan entries
        """
        comparator = FileComparator(
            copy_timestamps=options.copy_timestamps,
            compare_acl=options.copy_access_control,
            acl_provider=self.operations.acl_provider,
        )

        plan: list[FilePlanEntry] = []
        for source_file in DirectoryScanner(sync_filter).scan(source_root):
            target_path = target_root / source_file.relative_path
            decision = comparator.compare(source_file, target_path)
            logger.debug("%s: %s", source_file.relative_path, decision.reason)
            if decision.needs_copy:
                plan.append(
                    FilePlanEntry(
                        source_path=source_file.path,
                        target_path=target_path,
                        size_bytes=source_file.size,
                        relative_path=source_file.relative_path,
                    )
                )
        return plan

    def plan_and_sync(
        self,
        source_root: Path,
        target_root: Path,
        sync_filter: SyncFilter,
        options: SyncOptions,
        counters: RunCounters,
    ) -> None:
        """Plan the copy pass, check free space, then copy every planned file.

        The space check is conservative: it sums the full size of every planned
        file, even those that overwrite an existing target.

        Args:
            source_root: Source directory
            target_root: Target directory
            sync_filter: Filter shared with the orphan pass
            options: Sync options
            counters: Run counters (modified in place)

        Raises:
            InsufficientSpaceError: If the plan does not fit on the target
                volume. Raised before any file is copied.
        """
        self.output.info("Calculating files to sync...")

        plan = self.build_plan(source_root, target_root, sync_filter, options)
        required = sum(entry.size_bytes for entry in plan)
        counters.increment("required_free_space", required)
        counters.set("to_sync", len(plan))

        available, available_text = free_space(target_root)
        self.output.info(
            f"Required storage space: {format_bytes(required)} "
            f"Free target space: {available_text}"
        )

        if required > available:
            raise InsufficientSpaceError(required, available)

        if options.max_workers > 1 and len(plan) > 1:
            self._copy_parallel(plan, options, counters)
        else:
            for index, entry in enumerate(plan, start=1):
                self.output.info(
                    f"- Syncing [{index}/{counters.to_sync}]: {entry.relative_path}"
                )
                self._copy_entry(entry, options, counters)

    def _copy_entry(
        self, entry: FilePlanEntry, options: SyncOptions, counters: RunCounters
    ) -> bool:
        result = self.operations.copy_file(entry, options, self.progress_callback)
        if result.success:
            counters.increment("synced")
            return True

        counters.increment("errors")
        if result.error is not None:
            self.output.exception(result.error)
        return False

    def _copy_parallel(
        self, plan: list[FilePlanEntry], options: SyncOptions, counters: RunCounters
    ) -> None:
        """Copy plan entries on a thread pool.

        The plan and the space check are complete at this point, so entries are
        independent. Counter updates are locked; log lines may interleave but
        each names its file.
        """
        logger.debug(
            "Copying %d files with %d workers", len(plan), options.max_workers
        )

        def copy_with_log(index: int, entry: FilePlanEntry) -> bool:
            self.output.info(
                f"- Syncing [{index}/{counters.to_sync}]: {entry.relative_path}"
            )
            return self._copy_entry(entry, options, counters)

        with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
            futures = {
                executor.submit(copy_with_log, index, entry): entry
                for index, entry in enumerate(plan, start=1)
            }
            for future in as_completed(futures):
                entry = futures[future]
                if future.result():
                    logger.debug("Completed %s", entry.relative_path)
                else:
                    logger.debug("Failed %s", entry.relative_path)
