"""Exceptions raised by FileSyncer."""

from pathlib import Path
from typing import Optional, Union


class FileSyncerError(Exception):
    """Base exception for all FileSyncer errors."""


class ArgumentError(FileSyncerError):
    """Required command-line input is missing or invalid."""


class ConfigError(FileSyncerError):
    """Configuration file or environment holds an invalid value."""


class InvalidPathError(FileSyncerError):
    """A path cannot be used for syncing (e.g. no volume root can be resolved)."""


class InsufficientSpaceError(FileSyncerError):
    """The copy plan does not fit into the free space of the target volume."""

    def __init__(self, required: int, available: int, message: Optional[str] = None):
        self.required = required
        self.available = available
        super().__init__(
            message or "Target directory has not enough free storage space!"
        )


class _FileOperationError(FileSyncerError):
    """Failure of an operation on a single file."""

    action = "process"

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Failed to {self.action} {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CopyError(_FileOperationError):
    """Copying, publishing or updating metadata of a file failed."""

    action = "copy"


class DeleteError(_FileOperationError):
    """Removing an orphaned file from the target failed."""

    action = "delete"
