"""Console and log-file output for FileSyncer."""

import json
import logging
from pathlib import Path
from types import TracebackType
from typing import Any, Optional, Union

from rich.console import Console
from rich.table import Table

LOG_FILE_FORMAT = "%(message)s"


class OutputFormatter:
    """Writes user-facing lines to the console and, optionally, a log file.

    Every line goes to standard output. When a log file is configured the
    line is appended there as well, possibly with a different, more detailed
    text (exceptions get their full traceback in the file only).

    Examples:
        >>> with OutputFormatter(log_file=Path("sync.log")) as out:
        ...     out.info("Starting sync")
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        log_file: Optional[Union[str, Path]] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the output formatter.

        Args:
            json_output: Emit machine-readable JSON instead of text lines
            quiet: Suppress non-essential console output
            log_file: Optional file every line is appended to
            console: Rich console to print to (defaults to stdout)
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.log_file = Path(log_file) if log_file else None
        self._file_logger: Optional[logging.Logger] = None
        self._file_handler: Optional[logging.FileHandler] = None

        if self.log_file is not None:
            self._open_log_file(self.log_file)

    def _open_log_file(self, log_file: Path) -> None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))

        # One logger per formatter so that two runs never share a file handle
        file_logger = logging.getLogger(f"filesyncer.logfile.{id(self)}")
        file_logger.setLevel(logging.INFO)
        file_logger.propagate = False
        file_logger.addHandler(handler)

        self._file_logger = file_logger
        self._file_handler = handler

    @property
    def _console_enabled(self) -> bool:
        return not (self.quiet or self.json_output)

    def _write_console(self, message: str, style: Optional[str] = None) -> None:
        self.console.print(
            message, style=style, markup=False, highlight=False, soft_wrap=True
        )

    def _write_file(
        self, message: str, level: int = logging.INFO, exc_info: Any = None
    ) -> None:
        if self._file_logger is not None:
            self._file_logger.log(level, message, exc_info=exc_info)

    def log(
        self,
        message: str,
        file_message: Optional[str] = None,
        style: Optional[str] = None,
    ) -> None:
        """Write a line to the console and the log file.

        Args:
            message: Console text
            file_message: Log file text (defaults to ``message``)
            style: Optional rich style for the console line
        """
        if self._console_enabled:
            self._write_console(message, style)
        self._write_file(file_message or message)

    def info(self, message: str, file_message: Optional[str] = None) -> None:
        self.log(message, file_message)

    def success(self, message: str, file_message: Optional[str] = None) -> None:
        self.log(message, file_message, style="green")

    def warning(self, message: str, file_message: Optional[str] = None) -> None:
        if self._console_enabled:
            self._write_console(message, "yellow")
        self._write_file(file_message or message, logging.WARNING)

    def error(self, message: str, file_message: Optional[str] = None) -> None:
        """Write an error line. Errors are shown even in quiet mode."""
        if not self.json_output:
            self._write_console(message, "red")
        self._write_file(file_message or message, logging.ERROR)

    def exception(self, exc: BaseException, message: Optional[str] = None) -> None:
        """Report an exception: short text on the console, traceback in the file.

        Args:
            exc: Exception to report
            message: Optional console text (defaults to ``Error: <exc>``)
        """
        text = message or f"Error: {exc}"
        if not self.json_output:
            self._write_console(text, "red")
        self._write_file(
            text, logging.ERROR, exc_info=(type(exc), exc, exc.__traceback__)
        )

    def print(self, message: str = "") -> None:
        """Print to the console only (blank separators, progress lines)."""
        if self._console_enabled:
            self._write_console(message)

    def print_summary(self, title: str, rows: list[tuple[str, str]]) -> None:
        """Print a two-column summary table and log its rows."""
        for key, value in rows:
            self._write_file(f"{key}: {value}")

        if not self._console_enabled:
            return

        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Key", style="bold")
        table.add_column("Value")
        for key, value in rows:
            table.add_row(key, value)
        self.console.print(table)

    def output_json(self, data: Any) -> None:
        self.console.print_json(json.dumps(data, default=str))

    def close(self) -> None:
        """Flush and close the log file."""
        if self._file_logger is not None and self._file_handler is not None:
            self._file_handler.flush()
            self._file_logger.removeHandler(self._file_handler)
            self._file_handler.close()
        self._file_logger = None
        self._file_handler = None

    def __enter__(self) -> "OutputFormatter":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
