"""Include/ignore filtering of paths by path segment."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Optional, Union

from ..utils import split_list

_SEPARATORS = re.compile(r"[\\/]")


def path_segments(path: Union[str, PurePath]) -> list[str]:
    """Split a path on both ``/`` and ``\\`` into its non-empty segments.

    Examples:
        >>> path_segments("sub\\\\dir/file.txt")
        ['sub', 'dir', 'file.txt']
    """
    return [segment for segment in _SEPARATORS.split(str(path)) if segment]


@dataclass(frozen=True)
class SyncFilter:
    """Decides whether a path participates in synchronization.

    Segments are matched verbatim and case-sensitively: no globbing and no
    extension matching. The filter only looks at the path string, never at
    file state, so the orphan pass and the copy pass see the same file set.

    Examples:
        >>> f = SyncFilter(ignore=frozenset({"node_modules"}))
        >>> f.participates("app/node_modules/x.js")
        False
        >>> f.participates("app/src/x.js")
        True
    """

    include: frozenset[str] = field(default_factory=frozenset)
    """Segments of which at least one must appear (empty means everything)"""

    ignore: frozenset[str] = field(default_factory=frozenset)
    """Segments that exclude a path when any of them appears"""

    @classmethod
    def from_strings(
        cls, include: Optional[str] = None, ignore: Optional[str] = None
    ) -> "SyncFilter":
        """Create a filter from comma-separated segment lists."""
        return cls(
            include=frozenset(split_list(include)),
            ignore=frozenset(split_list(ignore)),
        )

    @classmethod
    def from_iterables(
        cls,
        include: Optional[Iterable[str]] = None,
        ignore: Optional[Iterable[str]] = None,
    ) -> "SyncFilter":
        return cls(include=frozenset(include or ()), ignore=frozenset(ignore or ()))

    def is_included(self, path: Union[str, PurePath]) -> bool:
        if not self.include:
            return True
        return any(segment in self.include for segment in path_segments(path))

    def is_ignored(self, path: Union[str, PurePath]) -> bool:
        if not self.ignore:
            return False
        return any(segment in self.ignore for segment in path_segments(path))

    def participates(self, path: Union[str, PurePath]) -> bool:
        """Return True if the path is included and not ignored."""
        return self.is_included(path) and not self.is_ignored(path)
