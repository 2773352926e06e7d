"""High-level synchronous API for DazzlePathLib.

Convenience functions for common walks, built on :func:`walk_sync`.
"""

import os
from typing import Callable, Iterable, List, Optional, Set

from .._common.paths import normalize_extension
from ..config import PathLike, VisitResult
from .adapters.filesystem import FileSystemAdapter
from .walker import walk_sync


def get_tree_paths(root: PathLike,
                   prune: Optional[Callable[[str], bool]] = None,
                   adapter: Optional[FileSystemAdapter] = None) -> List[str]:
    """Collect every visited file and directory path in visit order.

    Args:
        root: Directory to walk
        prune: Predicate; a directory for which it returns True is listed
            but not descended into
        adapter: Optional filesystem adapter

    Returns:
        Paths in pre-order
    """
    paths: List[str] = []

    def on_directory(path: str) -> VisitResult:
        paths.append(path)
        if prune is not None and prune(path):
            return VisitResult.SKIP
        return VisitResult.DESCEND

    walk_sync(root, paths.append, on_directory, adapter=adapter)
    return paths


def find_files(root: PathLike,
               extensions: Optional[Iterable[str]] = None,
               exclude_dirs: Optional[Iterable[str]] = None,
               adapter: Optional[FileSystemAdapter] = None) -> List[str]:
    """Find files below ``root``.

    Args:
        root: Directory to walk
        extensions: Extensions to keep (``"py"`` or ``".py"``); None keeps all
        exclude_dirs: Directory names never descended into (e.g. {'.git'})
        adapter: Optional filesystem adapter

    Returns:
        Matching file paths in visit order
    """
    wanted = _extension_set(extensions)
    excluded = set(exclude_dirs or ())
    found: List[str] = []

    def on_file(path: str) -> None:
        if wanted is None or _extension_of(path) in wanted:
            found.append(path)

    def on_directory(path: str) -> bool:
        return os.path.basename(path) not in excluded

    walk_sync(root, on_file, on_directory, adapter=adapter)
    return found


def _extension_set(extensions: Optional[Iterable[str]]) -> Optional[Set[str]]:
    if extensions is None:
        return None
    return {normalize_extension(ext) for ext in extensions}


def _extension_of(path: str) -> str:
    return normalize_extension(os.path.splitext(path)[1])
