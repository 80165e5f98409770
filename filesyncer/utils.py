"""Utility functions for FileSyncer."""

from collections.abc import Iterable
from typing import Optional

# =============================================================================
# Constants for file operations
# =============================================================================

# Buffer size for streaming copies (80 KB)
DEFAULT_CHUNK_SIZE: int = 80 * 1024

# Suffix of the temporary file a copy is written to before it is published
TEMP_SUFFIX: str = ".tmp"

# Number of parallel copy workers
DEFAULT_MAX_WORKERS: int = 1


# =============================================================================
# Size formatting utilities
# =============================================================================

_SIZE_UNITS = ("TB", "GB", "MB", "KB")


def _trim(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_bytes(size_bytes: float) -> str:
    """Format a byte count on a binary (1024-based) scale.

    The largest unit whose threshold the value exceeds is used, with at most
    two decimal places.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "512 B", "0 Bytes")

    Examples:
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(1024)
        '1024 B'
        >>> format_bytes(0)
        '0 Bytes'
        >>> format_bytes(1)
        '0 Bytes'
    """
    threshold = 1024 ** len(_SIZE_UNITS)

    for unit in _SIZE_UNITS:
        if size_bytes > threshold:
            return f"{_trim(size_bytes / threshold)} {unit}"
        threshold //= 1024

    if size_bytes > 1:
        return f"{_trim(size_bytes)} B"
    return "0 Bytes"


def format_elapsed(seconds: float) -> str:
    """Format a duration as ``H:MM:SS.ff``."""
    minutes, secs = divmod(max(seconds, 0.0), 60)
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}:{minutes:02d}:{secs:05.2f}"


# =============================================================================
# Parsing utilities
# =============================================================================


def split_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated option value, dropping empty entries.

    Examples:
        >>> split_list("bin,obj,,.git")
        ['bin', 'obj', '.git']
        >>> split_list(None)
        []
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def describe_segments(segments: Iterable[str], empty: str) -> str:
    """Render a segment set for the run header ("ALL"/"NONE" when empty)."""
    items = sorted(segments)
    return ",".join(items) if items else empty
