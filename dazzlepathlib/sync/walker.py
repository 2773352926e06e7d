"""Synchronous tree walker for DazzlePathLib.

Walks a directory subtree depth-first, pre-order, calling caller-supplied
visitors. The directory visitor's result decides whether the walker
descends, which is how callers prune subtrees.
"""

import logging
import os
import stat as stat_module
from typing import Any, Callable, Optional

from ..config import EntryKind, TraversalRequest, PathLike
from .adapters.filesystem import FileSystemAdapter

logger = logging.getLogger(__name__)


class TreeWalker:
    """Depth-first, pre-order directory walker with visitor pruning.

    Children are visited in the order the adapter lists them. A symbolic
    link is treated as whatever it points to; links whose target cannot
    be stat'ed are skipped without calling either visitor.

    Any other listing or stat failure propagates and aborts the walk.
    """

    def __init__(self, adapter: Optional[FileSystemAdapter] = None):
        """Initialize walker.

        Args:
            adapter: Filesystem adapter (creates default if None)
        """
        self.adapter = adapter or FileSystemAdapter()

    def walk(self, request: TraversalRequest) -> None:
        """Walk the tree described by ``request``.

        Args:
            request: Root and visitors for this walk
        """
        if not self.adapter.is_directory(request.root):
            logger.debug("Walk root %s is not a directory, nothing to do", request.root)
            return
        self._walk_directory(request.root, request.on_file, request.on_directory)

    def resolve_kind(self, path: str) -> Optional[EntryKind]:
        """Determine the kind of ``path`` with symlinks resolved.

        Returns:
            The entry kind, or None for a symlink whose target is unreachable
        """
        st = self.adapter.lstat(path)
        if stat_module.S_ISLNK(st.st_mode):
            try:
                st = self.adapter.stat(path)
            except OSError as e:
                logger.debug("Skipping broken symlink %s: %s", path, e)
                return None
        return EntryKind.from_stat(st)

    def _walk_directory(self,
                        directory: str,
                        on_file: Callable[[str], Any],
                        on_directory: Callable[[str], Any]) -> None:
        for name in self.adapter.list_children(directory):
            child_path = os.path.join(directory, name)
            kind = self.resolve_kind(child_path)

            if kind is EntryKind.DIRECTORY:
                # Visitor fires even when it is about to prune
                if on_directory(child_path):
                    self._walk_directory(child_path, on_file, on_directory)
                else:
                    logger.debug("Pruned %s", child_path)
            elif kind is EntryKind.FILE:
                on_file(child_path)


def walk_sync(root: PathLike,
              on_file: Callable[[str], Any],
              on_directory: Optional[Callable[[str], Any]] = None,
              adapter: Optional[FileSystemAdapter] = None) -> None:
    """Walk a directory tree synchronously.

    Args:
        root: Directory to walk (a missing root is an empty walk)
        on_file: Called with each file path
        on_directory: Called with each directory path; truthy to descend.
            Defaults to ``on_file``.
        adapter: Optional filesystem adapter

    Example:
        >>> files = []
        >>> walk_sync('/project', files.append,
        ...           lambda d: os.path.basename(d) != '.git')
    """
    request = TraversalRequest(root=root, on_file=on_file, on_directory=on_directory)
    TreeWalker(adapter).walk(request)
