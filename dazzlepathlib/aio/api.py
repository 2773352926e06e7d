"""High-level async API for DazzlePathLib.

Async counterparts of :mod:`dazzlepathlib.sync.api`, built on
:func:`walk_async`.
"""

import os
from typing import Callable, Iterable, List, Optional

from .._common.paths import normalize_extension
from ..config import PathLike, VisitResult
from .adapters.filesystem import AsyncFileSystemAdapter
from .error_policies import ErrorPolicy
from .walker import walk_async


async def get_tree_paths_async(
    root: PathLike,
    prune: Optional[Callable[[str], bool]] = None,
    adapter: Optional[AsyncFileSystemAdapter] = None,
    error_policy: Optional[ErrorPolicy] = None
) -> List[str]:
    """Collect every visited file and directory path in visit order.

    Args:
        root: Directory to walk
        prune: Predicate; a directory for which it returns True is listed
            but not descended into
        adapter: Optional async filesystem adapter
        error_policy: How to treat stat/listing failures

    Returns:
        Paths in pre-order
    """
    paths: List[str] = []

    def on_directory(path: str) -> VisitResult:
        paths.append(path)
        if prune is not None and prune(path):
            return VisitResult.SKIP
        return VisitResult.DESCEND

    await walk_async(root, paths.append, on_directory,
                     adapter=adapter, error_policy=error_policy)
    return paths


async def find_files_async(
    root: PathLike,
    extensions: Optional[Iterable[str]] = None,
    exclude_dirs: Optional[Iterable[str]] = None,
    adapter: Optional[AsyncFileSystemAdapter] = None,
    error_policy: Optional[ErrorPolicy] = None
) -> List[str]:
    """Find files below ``root`` asynchronously.

    Args:
        root: Directory to walk
        extensions: Extensions to keep (``"py"`` or ``".py"``); None keeps all
        exclude_dirs: Directory names never descended into
        adapter: Optional async filesystem adapter
        error_policy: How to treat stat/listing failures

    Returns:
        Matching file paths in visit order
    """
    wanted = None if extensions is None else {normalize_extension(e) for e in extensions}
    excluded = set(exclude_dirs or ())
    found: List[str] = []

    def on_file(path: str) -> None:
        if wanted is None or normalize_extension(os.path.splitext(path)[1]) in wanted:
            found.append(path)

    def on_directory(path: str) -> bool:
        return os.path.basename(path) not in excluded

    await walk_async(root, on_file, on_directory,
                     adapter=adapter, error_policy=error_policy)
    return found
