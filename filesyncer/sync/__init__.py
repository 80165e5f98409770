"""Sync engine for FileSyncer - one-way directory mirroring."""

from .acl import AclProvider, NullAclProvider, PosixAclProvider, get_acl_provider
from .comparator import CopyDecision, FileComparator
from .engine import SyncEngine
from .filters import SyncFilter, path_segments
from .models import (
    FilePlanEntry,
    OperationResult,
    RunCounters,
    SyncOptions,
    SyncResult,
)
from .operations import SyncOperations, temp_path_for
from .planner import SyncPlanner
from .progress import CopyProgressEvent, CopyProgressInfo, CopyProgressTracker
from .reaper import OrphanReaper
from .scanner import DirectoryScanner, LocalFile
from .space import free_space, volume_root

__all__ = [
    "SyncEngine",
    "SyncPlanner",
    "OrphanReaper",
    "SyncOperations",
    "temp_path_for",
    "SyncFilter",
    "path_segments",
    "SyncOptions",
    "FilePlanEntry",
    "OperationResult",
    "RunCounters",
    "SyncResult",
    "DirectoryScanner",
    "LocalFile",
    "FileComparator",
    "CopyDecision",
    "AclProvider",
    "NullAclProvider",
    "PosixAclProvider",
    "get_acl_provider",
    "CopyProgressEvent",
    "CopyProgressInfo",
    "CopyProgressTracker",
    "free_space",
    "volume_root",
]
