"""Data model shared by the sync passes."""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..utils import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_WORKERS


@dataclass(frozen=True)
class SyncOptions:
    """Options for one sync run. Immutable for the duration of the run."""

    dry_run: bool = False
    """Only report what would be done, without touching the target"""

    copy_access_control: bool = False
    """Compare and copy access-control metadata"""

    copy_timestamps: bool = False
    """Compare and copy modification timestamps"""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    """Buffer size used when streaming file contents"""

    max_workers: int = DEFAULT_MAX_WORKERS
    """Number of parallel copy workers"""

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")


@dataclass(frozen=True)
class FilePlanEntry:
    """A single pending copy, created during planning."""

    source_path: Path
    target_path: Path
    size_bytes: int
    relative_path: str


@dataclass
class OperationResult:
    """Outcome of a per-file copy or delete operation."""

    success: bool
    error: Optional[Exception] = None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: Exception) -> "OperationResult":
        return cls(success=False, error=error)


_COUNTER_FIELDS = (
    "synced",
    "to_sync",
    "removed",
    "to_remove",
    "errors",
    "required_free_space",
)


@dataclass
class RunCounters:
    """Counters of one sync run.

    Owned by the engine for the lifetime of a run. Updates go through
    ``increment`` which holds a lock, so a parallel copy pass can share
    one instance.
    """

    synced: int = 0
    to_sync: int = 0
    removed: int = 0
    to_remove: int = 0
    errors: int = 0
    required_free_space: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def increment(self, name: str, amount: int = 1) -> int:
        """Add ``amount`` to the named counter and return the new value."""
        if name not in _COUNTER_FIELDS:
            raise AttributeError(f"Unknown counter: {name}")
        with self._lock:
            value = getattr(self, name) + amount
            setattr(self, name, value)
            return value

    def set(self, name: str, value: int) -> None:
        if name not in _COUNTER_FIELDS:
            raise AttributeError(f"Unknown counter: {name}")
        with self._lock:
            setattr(self, name, value)

    def reset(self) -> None:
        with self._lock:
            for name in _COUNTER_FIELDS:
                setattr(self, name, 0)

    def to_dict(self) -> dict:
        """Convert counters to a dictionary for JSON output."""
        with self._lock:
            return {name: getattr(self, name) for name in _COUNTER_FIELDS}


@dataclass
class SyncResult:
    """Result of a complete sync run."""

    counters: RunCounters
    """Final run counters"""

    elapsed: float = 0.0
    """Wall-clock duration of the run in seconds"""

    error: Optional[Exception] = None
    """Error that aborted the run, if any"""

    @property
    def success(self) -> bool:
        return self.counters.errors == 0

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 without errors, 1 otherwise."""
        return 0 if self.success else 1

    def to_dict(self) -> dict:
        data = self.counters.to_dict()
        data["elapsed"] = round(self.elapsed, 3)
        data["error"] = str(self.error) if self.error else None
        return data
