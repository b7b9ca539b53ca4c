"""Capture and restore the on-disk state that build tools use for freshness checks."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path


@dataclass
class FileSnapshot:
    """Timestamps and permission bits of a file taken before it is rewritten."""

    path: Path
    atime_ns: int
    mtime_ns: int
    mode: int
    cleared_read_only: bool = False

    @classmethod
    def capture(cls, path: Path) -> "FileSnapshot":
        info = path.stat()
        return cls(
            path=path,
            atime_ns=info.st_atime_ns,
            mtime_ns=info.st_mtime_ns,
            mode=stat.S_IMODE(info.st_mode),
        )

    @property
    def is_read_only(self) -> bool:
        return not self.mode & stat.S_IWRITE

    def ensure_writable(self) -> bool:
        """Clear the read-only flag if set; return whether this call cleared it."""

        if not self.is_read_only or self.cleared_read_only:
            return False
        os.chmod(self.path, self.mode | stat.S_IWRITE)
        self.cleared_read_only = True
        return True

    def restore(self) -> None:
        """Put back the last-write time, then the mode if read-only was cleared."""

        os.utime(self.path, ns=(self.atime_ns, self.mtime_ns))
        if self.cleared_read_only:
            os.chmod(self.path, self.mode)


__all__ = ["FileSnapshot"]
