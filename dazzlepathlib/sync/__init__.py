"""Synchronous implementation of DazzlePathLib.

All components here operate in a blocking, synchronous manner.
"""

# Core components
from .walker import TreeWalker, walk_sync

# Adapters
from .adapters.filesystem import FileSystemAdapter

# High-level API
from .api import get_tree_paths, find_files

__all__ = [
    # Core
    'TreeWalker',
    'walk_sync',
    # Adapters
    'FileSystemAdapter',
    # API
    'get_tree_paths',
    'find_files',
]
