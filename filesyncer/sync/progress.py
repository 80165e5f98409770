"""Progress tracking for file copies.

A :class:`CopyProgressTracker` turns raw byte counts into progress events.
It only emits when the integer percentage changes, which bounds the number of
events per file independently of file size and chunk count.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class CopyProgressEvent(str, Enum):
    """Kinds of progress events emitted while copying a file."""

    FILE_START = "file_start"
    """Copy of a file started"""

    FILE_PROGRESS = "file_progress"
    """Percentage of the current file changed"""

    FILE_COMPLETE = "file_complete"
    """All bytes of the current file were written"""


@dataclass
class CopyProgressInfo:
    """Snapshot of the progress of a single file copy."""

    event: CopyProgressEvent
    relative_path: str
    bytes_copied: int
    total_bytes: int
    percent: int
    speed: float
    """Average throughput since the start of the copy, in bytes per second"""


ProgressCallback = Callable[[CopyProgressInfo], None]


class CopyProgressTracker:
    """Tracks the progress of one file copy and forwards changes to a callback."""

    def __init__(
        self,
        relative_path: str,
        total_bytes: int,
        callback: Optional[ProgressCallback] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the tracker.

        Args:
            relative_path: Path of the file being copied, for display
            total_bytes: Size of the file
            callback: Function receiving CopyProgressInfo events
            clock: Monotonic time source in seconds
        """
        self.relative_path = relative_path
        self.total_bytes = total_bytes
        self.callback = callback
        self._clock = clock
        self._started_at = clock()
        self.bytes_copied = 0
        self.last_percent = 0
        self.emitted = 0

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started_at

    @property
    def percent(self) -> int:
        if self.total_bytes <= 0:
            return 100
        return min(self.bytes_copied * 100 // self.total_bytes, 100)

    @property
    def speed(self) -> float:
        elapsed = self.elapsed
        if elapsed <= 0:
            return 0.0
        return self.bytes_copied / elapsed

    def start(self) -> None:
        self._started_at = self._clock()
        self._emit(CopyProgressEvent.FILE_START)

    def advance(self, amount: int) -> Optional[CopyProgressInfo]:
        """Record ``amount`` more bytes copied.

        Returns:
            The emitted CopyProgressInfo, or None if the percentage is unchanged
        """
        self.bytes_copied += amount
        percent = self.percent
        if percent == self.last_percent:
            return None
        self.last_percent = percent
        return self._emit(CopyProgressEvent.FILE_PROGRESS)

    def finish(self) -> CopyProgressInfo:
        self.last_percent = 100
        return self._emit(CopyProgressEvent.FILE_COMPLETE)

    def _emit(self, event: CopyProgressEvent) -> CopyProgressInfo:
        info = CopyProgressInfo(
            event=event,
            relative_path=self.relative_path,
            bytes_copied=self.bytes_copied,
            total_bytes=self.total_bytes,
            percent=self.last_percent,
            speed=self.speed,
        )
        if event == CopyProgressEvent.FILE_PROGRESS:
            self.emitted += 1
        if self.callback is not None:
            self.callback(info)
        return info
