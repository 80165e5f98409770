"""CLI progress display for copy operations.

This module provides a Rich-based progress display that consumes the
CopyProgressInfo events emitted by the sync engine.
"""

import threading
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .sync.progress import CopyProgressEvent, CopyProgressInfo
from .utils import format_bytes


class CopyProgressDisplay:
    """Rich-based progress display for file copies.

    One bar per file in flight shows the copied percentage and the average
    transfer speed; the bar is removed once the file is complete. Use
    :meth:`handle_event` as the engine's progress callback.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the progress display.

        Args:
            console: Console to render to (share it with the OutputFormatter
                so log lines print above the bars)
        """
        self._console = console
        self._progress: Optional[Progress] = None
        self._tasks: dict[str, TaskID] = {}
        self._lock = threading.Lock()

    def handle_event(self, info: CopyProgressInfo) -> None:
        """Handle a progress event from a CopyProgressTracker.

        Args:
            info: Progress information
        """
        if self._progress is None:
            return

        speed = f"{format_bytes(info.speed)}/s"

        with self._lock:
            if info.event == CopyProgressEvent.FILE_START:
                self._tasks[info.relative_path] = self._progress.add_task(
                    info.relative_path, total=100, speed=speed
                )
                return

            task = self._tasks.get(info.relative_path)
            if task is None:
                return

            if info.event == CopyProgressEvent.FILE_COMPLETE:
                # Finished files leave the live display
                self._progress.remove_task(task)
                del self._tasks[info.relative_path]
                return

            self._progress.update(task, completed=info.percent, speed=speed)

    def __enter__(self) -> "CopyProgressDisplay":
        """Enter context manager - start progress display."""
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("[cyan]{task.fields[speed]}"),
            TimeElapsedColumn(),
            console=self._console,
            refresh_per_second=4,
        )
        self._progress.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - stop progress display."""
        if self._progress is not None:
            self._progress.__exit__(exc_type, exc_val, exc_tb)
            self._progress = None
            self._tasks.clear()
