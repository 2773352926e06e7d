"""Filesystem adapter for DazzlePathLib.

The adapter is the only place the synchronous walker and the resolver
touch the filesystem. Tests can swap it for a double to inject failures.
"""

import os
from typing import List, Union


PathArg = Union[str, "os.PathLike[str]"]


class FileSystemAdapter:
    """Blocking filesystem capabilities consumed by the walker and resolver.

    Every predicate answers False instead of raising. ``list_children``,
    ``stat`` and ``lstat`` raise ``OSError`` so callers can decide whether
    a failure is fatal.
    """

    def exists(self, path: PathArg) -> bool:
        """Check whether ``path`` exists (following symlinks)."""
        return os.path.exists(path)

    def is_directory(self, path: PathArg) -> bool:
        """Check whether ``path`` is a directory (following symlinks)."""
        return os.path.isdir(path)

    def list_children(self, path: PathArg) -> List[str]:
        """Return entry names of a directory in the order the OS yields them.

        Raises:
            OSError: If the directory cannot be listed
        """
        return os.listdir(path)

    def stat(self, path: PathArg) -> os.stat_result:
        """Stat ``path``, following symbolic links.

        Raises:
            OSError: If the path or a link target cannot be stat'ed
        """
        return os.stat(path)

    def lstat(self, path: PathArg) -> os.stat_result:
        """Stat ``path`` without following a final symbolic link."""
        return os.lstat(path)

    def real_path(self, path: PathArg) -> str:
        """Resolve symlinks and relative segments (strict).

        Raises:
            OSError: If the path does not exist
        """
        return os.path.realpath(path, strict=True)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
