"""Synchronous filesystem adapters."""

from .filesystem import FileSystemAdapter

__all__ = [
    'FileSystemAdapter',
]
