"""Async filesystem adapter.

Blocking calls run in a worker thread via ``asyncio.to_thread``. A
semaphore bounds how many of them are in flight at once.
"""

import asyncio
import os
from typing import List, Union

PathArg = Union[str, "os.PathLike[str]"]


class AsyncFileSystemAdapter:
    """Async filesystem capabilities consumed by the async walker.

    The walker creates this with ``max_concurrent=1`` so at most one
    listing or stat is outstanding. Errors are raised as ``OSError``.
    """

    def __init__(self, max_concurrent: int = 1):
        """Initialize adapter with concurrency control.

        Args:
            max_concurrent: Maximum concurrent I/O operations
        """
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)

    async def list_children(self, path: PathArg) -> List[str]:
        """List entry names of a directory in OS order.

        Raises:
            OSError: If the directory cannot be listed
        """
        async with self.semaphore:
            return await asyncio.to_thread(os.listdir, path)

    async def stat(self, path: PathArg) -> os.stat_result:
        """Stat ``path`` following symbolic links.

        Raises:
            OSError: If the path or its link target cannot be stat'ed
        """
        async with self.semaphore:
            return await asyncio.to_thread(os.stat, path)

    async def lstat(self, path: PathArg) -> os.stat_result:
        """Stat ``path`` without following a final symbolic link.

        Raises:
            OSError: If the path itself cannot be stat'ed
        """
        async with self.semaphore:
            return await asyncio.to_thread(os.lstat, path)

    async def is_directory(self, path: PathArg) -> bool:
        """Check whether ``path`` is a directory (following symlinks)."""
        async with self.semaphore:
            return await asyncio.to_thread(os.path.isdir, path)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(max_concurrent={self.max_concurrent})"
