"""FileSyncer - one-way directory mirroring with atomic, progress-reporting copies."""

from .exceptions import (
    ArgumentError,
    ConfigError,
    CopyError,
    DeleteError,
    FileSyncerError,
    InsufficientSpaceError,
    InvalidPathError,
)
from .sync import SyncEngine, SyncFilter, SyncOptions, SyncResult
from .utils import format_bytes

__all__ = [
    "SyncEngine",
    "SyncFilter",
    "SyncOptions",
    "SyncResult",
    "FileSyncerError",
    "ArgumentError",
    "ConfigError",
    "CopyError",
    "DeleteError",
    "InsufficientSpaceError",
    "InvalidPathError",
    "format_bytes",
]
