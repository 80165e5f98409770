"""Free space lookup for the volume hosting a directory."""

import logging
import os
import shutil
from pathlib import Path
from typing import Union

from ..exceptions import InvalidPathError
from ..utils import format_bytes

logger = logging.getLogger(__name__)


def volume_root(directory: Union[str, Path]) -> Path:
    """Resolve the mount point of the volume containing ``directory``.

    The directory itself does not need to exist yet; the nearest existing
    ancestor decides which volume it would live on.

    Raises:
        InvalidPathError: If no volume root can be resolved
    """
    if not str(directory).strip():
        raise InvalidPathError("Invalid directory path: empty path")

    path = Path(directory).expanduser().absolute()
    existing = next((p for p in (path, *path.parents) if p.exists()), None)
    if existing is None:
        raise InvalidPathError(f"Invalid directory path: {directory}")

    candidate = existing.resolve()
    while not os.path.ismount(candidate):
        if candidate.parent == candidate:
            break
        candidate = candidate.parent
    return candidate


def free_space(directory: Union[str, Path]) -> tuple[int, str]:
    """Report the free space available on the volume hosting ``directory``.

    Args:
        directory: Directory whose volume should be queried

    Returns:
        Tuple of (free bytes, human-readable representation)

    Raises:
        InvalidPathError: If no volume root can be resolved
    """
    root = volume_root(directory)
    try:
        available = shutil.disk_usage(root).free
    except OSError as e:
        raise InvalidPathError(f"Cannot query free space of {root}: {e}") from e

    logger.debug("Free space on %s: %d bytes", root, available)
    return available, format_bytes(available)
