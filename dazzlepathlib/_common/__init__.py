"""Common components shared between sync and aio implementations.

This internal package contains code that is identical between both
implementations. It should NOT be imported directly by users.

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .paths import (
    home_directory,
    expand_home,
    absolute,
    is_absolute,
    normalize_extension,
)

__all__ = [
    'home_directory',
    'expand_home',
    'absolute',
    'is_absolute',
    'normalize_extension',
]
