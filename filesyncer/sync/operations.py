"""File operations used by the sync passes: atomic copy and delete."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from ..exceptions import CopyError, DeleteError
from ..utils import TEMP_SUFFIX
from .acl import AclProvider, NullAclProvider
from .models import FilePlanEntry, OperationResult, SyncOptions
from .progress import CopyProgressTracker, ProgressCallback

logger = logging.getLogger(__name__)


def temp_path_for(target_path: Path) -> Path:
    """Temporary path a copy is written to before it replaces ``target_path``.

    It lives next to the target so that the final rename stays on one volume.
    """
    return target_path.with_name(target_path.name + TEMP_SUFFIX)


class SyncOperations:
    """Copies and deletes single files for the sync passes."""

    def __init__(self, acl_provider: Optional[AclProvider] = None):
        """Initialize sync operations.

        Args:
            acl_provider: Provider used when access control is copied
        """
        self.acl_provider = acl_provider or NullAclProvider()

    def copy_file(
        self,
        entry: FilePlanEntry,
        options: SyncOptions,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> OperationResult:
        """Copy one planned file to the target and publish it atomically.

        The bytes are streamed into ``<name>.tmp`` next to the target, which
        is then renamed over the target. The target never shows a partially
        written file. A copy that is interrupted before the rename leaves the
        ``.tmp`` file behind.

        In dry-run mode nothing is touched and the copy counts as successful.

        Args:
            entry: Plan entry to copy
            options: Sync options (dry run, metadata, chunk size)
            progress_callback: Optional progress callback
                function(CopyProgressInfo)

        Returns:
            OperationResult; on failure ``error`` is a CopyError
        """
        if options.dry_run:
            return OperationResult.ok()

        temp_path = temp_path_for(entry.target_path)
        published = False
        try:
            temp_path.parent.mkdir(parents=True, exist_ok=True)

            with open(entry.source_path, "rb") as source:
                total = os.fstat(source.fileno()).st_size
                tracker = CopyProgressTracker(
                    entry.relative_path, total, progress_callback
                )
                with open(temp_path, "wb") as target:
                    self._stream(source, target, tracker, options.chunk_size)

            self._remove_shadowing_directory(entry.target_path)
            os.replace(temp_path, entry.target_path)
            published = True

            if options.copy_access_control:
                self.acl_provider.copy(entry.source_path, entry.target_path)

            if options.copy_timestamps:
                self.copy_timestamps(entry.source_path, entry.target_path)

        except OSError as e:
            if not published:
                self._discard_temp(temp_path)
            logger.debug("Copy of %s failed", entry.relative_path, exc_info=True)
            error = CopyError(entry.source_path, str(e))
            error.__cause__ = e
            return OperationResult.failed(error)

        return OperationResult.ok()

    @staticmethod
    def _stream(source, target, tracker: CopyProgressTracker, chunk_size: int) -> None:
        tracker.start()
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            target.write(chunk)
            tracker.advance(len(chunk))
        tracker.finish()

    @staticmethod
    def _remove_shadowing_directory(target_path: Path) -> None:
        """Remove a directory that occupies the name of a file being published."""
        if target_path.is_dir() and not target_path.is_symlink():
            logger.info("Replacing directory %s with a file", target_path)
            shutil.rmtree(target_path)

    @staticmethod
    def copy_timestamps(source: Path, target: Path) -> None:
        """Set access and modification times of ``target`` to those of ``source``."""
        st = source.stat()
        os.utime(target, ns=(st.st_atime_ns, st.st_mtime_ns))

    @staticmethod
    def _discard_temp(temp_path: Path) -> None:
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", temp_path, e)

    def delete_file(self, path: Path, dry_run: bool = False) -> OperationResult:
        """Delete a file from the target.

        Args:
            path: File to delete
            dry_run: If True, only report success

        Returns:
            OperationResult; on failure ``error`` is a DeleteError
        """
        if dry_run:
            return OperationResult.ok()

        try:
            path.unlink()
        except OSError as e:
            error = DeleteError(path, str(e))
            error.__cause__ = e
            return OperationResult.failed(error)

        return OperationResult.ok()
