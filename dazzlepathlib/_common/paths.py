"""Pure path helpers shared by the sync and aio implementations.

Nothing here walks a tree. The only filesystem access is the strict
real-path lookup performed by :func:`absolute`.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)


def home_directory() -> str:
    """Return the current user's home directory."""
    return str(Path.home())


def expand_home(path: str, home: Optional[str] = None) -> str:
    """Expand a leading ``~`` or ``~/`` against the home directory.

    Only the current user's home is supported; ``~user`` forms are
    returned unchanged.

    Args:
        path: Path that may start with ``~``
        home: Home directory override (defaults to :func:`home_directory`)

    Returns:
        Path with the home prefix expanded
    """
    if path == "~":
        return home or home_directory()
    if path.startswith("~/") or (os.sep != "/" and path.startswith("~" + os.sep)):
        return os.path.join(home or home_directory(), path[2:])
    return path


def _strict_real_path(path: str) -> str:
    return str(Path(path).resolve(strict=True))


def absolute(path: Optional[Union[str, "os.PathLike[str]"]],
             home: Optional[str] = None,
             real_path: Optional[Callable[[str], str]] = None) -> Optional[str]:
    """Canonicalize a path.

    Expands ``~`` then resolves symbolic links and relative segments. When
    the real path cannot be determined (missing file, broken link, loop,
    permission error) the home-expanded input is returned as-is.

    Args:
        path: Path to canonicalize
        home: Home directory override
        real_path: Strict real-path lookup raising ``OSError`` on failure
            (defaults to ``Path.resolve(strict=True)``)

    Returns:
        Canonical path, the expanded input on failure, or None for None
    """
    if path is None:
        return None
    expanded = expand_home(os.fspath(path), home)
    try:
        return (real_path or _strict_real_path)(expanded)
    except (OSError, RuntimeError) as e:
        logger.debug("Could not canonicalize %s: %s", expanded, e)
        return expanded


def is_absolute(path: str) -> bool:
    """Check whether ``path`` is absolute on this platform."""
    return os.path.isabs(path)


def normalize_extension(extension: str) -> str:
    """Strip a single leading ``.`` from an extension ("" stays "")."""
    if extension.startswith("."):
        return extension[1:]
    return extension
