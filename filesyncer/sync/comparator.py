"""File comparison logic for sync operations."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .acl import AclProvider, NullAclProvider
from .scanner import LocalFile


@dataclass
class CopyDecision:
    """Represents a decision about whether a file has to be copied."""

    needs_copy: bool
    """True if the target is missing or out of date"""

    reason: str
    """Human-readable reason for this decision"""

    source_file: LocalFile
    """Source file"""

    target_path: Path
    """Where the file lives (or would live) under the target root"""

    def __bool__(self) -> bool:
        return self.needs_copy


class FileComparator:
    """Decides whether a target file is up to date with its source.

    Checks, in order: target existence, modification time (only when
    ``copy_timestamps`` is enabled), size, and access-control metadata (only
    when ``compare_acl`` is enabled).

    With ``copy_timestamps`` disabled a change that keeps the file size is
    not detected: size is the primary signal.
    """

    def __init__(
        self,
        copy_timestamps: bool = False,
        compare_acl: bool = False,
        acl_provider: Optional[AclProvider] = None,
    ):
        """Initialize file comparator.

        Args:
            copy_timestamps: Treat differing modification times as a change
            compare_acl: Treat differing access-control metadata as a change
            acl_provider: Provider used for the access-control comparison
        """
        self.copy_timestamps = copy_timestamps
        self.compare_acl = compare_acl
        self.acl_provider = acl_provider or NullAclProvider()

    def compare(self, source: LocalFile, target_path: Path) -> CopyDecision:
        """Compare a source file with its counterpart under the target root.

        Args:
            source: Source file
            target_path: Path of the counterpart under the target root

        Returns:
            CopyDecision for this pair
        """
        if not target_path.is_file():
            return self._decision(True, "Missing at target", source, target_path)

        target_stat = target_path.stat()

        if self.copy_timestamps and source.mtime_ns != target_stat.st_mtime_ns:
            return self._decision(
                True, "Modification times differ", source, target_path
            )

        if source.size != target_stat.st_size:
            reason = f"Sizes differ ({source.size} vs {target_stat.st_size})"
            return self._decision(True, reason, source, target_path)

        if self.compare_acl and not self.acl_provider.equal(source.path, target_path):
            return self._decision(
                True, "Access control differs", source, target_path
            )

        return self._decision(False, "Up to date", source, target_path)

    def needs_copy(self, source: LocalFile, target_path: Path) -> bool:
        return self.compare(source, target_path).needs_copy

    @staticmethod
    def _decision(
        needs_copy: bool, reason: str, source: LocalFile, target_path: Path
    ) -> CopyDecision:
        return CopyDecision(
            needs_copy=needs_copy,
            reason=reason,
            source_file=source,
            target_path=target_path,
        )
