"""Access-control metadata providers.

The provider is chosen once per run by :func:`get_acl_provider`. Platforms
without a supported notion of file ownership and permission bits get the
no-op provider, which reports every pair of files as equal.
"""

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class AclProvider(Protocol):
    """Compares and copies the access-control metadata of files."""

    name: str

    def equal(self, source: Path, target: Path) -> bool: ...

    def copy(self, source: Path, target: Path) -> None: ...


class NullAclProvider:
    """Provider for platforms without access-control support."""

    name = "none"

    def equal(self, source: Path, target: Path) -> bool:
        return True

    def copy(self, source: Path, target: Path) -> None:
        return None


class PosixAclProvider:
    """Permission bits and ownership of POSIX files.

    The descriptor of a file is ``(mode, uid, gid)``. Copying applies the
    mode with :func:`shutil.copymode` and changes ownership only when it
    differs, since that usually needs elevated privileges.
    """

    name = "posix"

    @staticmethod
    def descriptor(path: Path) -> tuple[int, int, int]:
        st = path.stat()
        return stat.S_IMODE(st.st_mode), st.st_uid, st.st_gid

    def equal(self, source: Path, target: Path) -> bool:
        if not source.exists() or not target.exists():
            return False
        return self.descriptor(source) == self.descriptor(target)

    def copy(self, source: Path, target: Path) -> None:
        shutil.copymode(source, target)
        _, uid, gid = self.descriptor(source)
        _, target_uid, target_gid = self.descriptor(target)
        if (uid, gid) != (target_uid, target_gid):
            logger.debug("Changing owner of %s to %d:%d", target, uid, gid)
            os.chown(target, uid, gid)


def get_acl_provider() -> AclProvider:
    """Select the access-control provider for the running platform."""
    if os.name == "posix" and hasattr(os, "chown"):
        return PosixAclProvider()
    return NullAclProvider()
