"""Asynchronous implementation of DazzlePathLib.

The async walker runs on a concurrency-one work queue: filesystem I/O is
non-blocking for the event loop but strictly sequential.
"""

# Core
from .walker import AsyncTreeWalker, walk_async

# Adapters
from .adapters import AsyncFileSystemAdapter

# Error handling
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    ThresholdPolicy,
)

# High-level API
from .api import get_tree_paths_async, find_files_async

__all__ = [
    # Core
    'AsyncTreeWalker',
    'walk_async',
    # Adapters
    'AsyncFileSystemAdapter',
    # Error handling
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'ThresholdPolicy',
    # High-level API
    'get_tree_paths_async',
    'find_files_async',
]
