"""Load-path resolution for DazzlePathLib.

Resolves a logical path against an ordered list of root directories,
optionally trying file extensions in priority order. Resolution is pure
first-match: the first load path that yields an existing candidate wins.
A miss is reported as ``None``, never as an exception.
"""

import logging
import os
import sys
from typing import List, Optional, Sequence

from ._common.paths import absolute, is_absolute
from .config import PathLike, ResolutionRequest, ResolverConfig
from .sync.adapters.filesystem import FileSystemAdapter

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolve paths against load paths and extension lists.

    Example:
        >>> resolver = PathResolver()
        >>> resolver.resolve(['/a', '/b'], 'lib/util', ['js', ''])
        '/b/lib/util.js'
    """

    def __init__(self,
                 config: Optional[ResolverConfig] = None,
                 adapter: Optional[FileSystemAdapter] = None):
        """Initialize resolver.

        Args:
            config: Resolver configuration (search paths, home directory)
            adapter: Filesystem adapter used for existence checks
        """
        self.config = config or ResolverConfig()
        self.adapter = adapter or FileSystemAdapter()

    def absolute(self, path: Optional[PathLike]) -> Optional[str]:
        """Canonicalize ``path``, falling back to the input on failure."""
        return absolute(path, home=self.config.home_directory,
                        real_path=self.adapter.real_path)

    def resolve(self,
                load_paths: Sequence[PathLike],
                path_to_resolve: Optional[PathLike],
                extensions: Optional[Sequence[str]] = None) -> Optional[str]:
        """Resolve ``path_to_resolve`` against ``load_paths``.

        Args:
            load_paths: Directories tried in order
            path_to_resolve: Absolute or relative path
            extensions: Extensions tried in order for each candidate;
                ``""`` tries the bare path

        Returns:
            Canonical path of the first match, or None
        """
        request = ResolutionRequest(
            load_paths=load_paths,
            path_to_resolve=path_to_resolve,
            extensions=extensions,
        )
        return self.resolve_request(request)

    def resolve_request(self, request: ResolutionRequest) -> Optional[str]:
        """Resolve a prepared :class:`ResolutionRequest`."""
        target = request.path_to_resolve
        if not target:
            return None
        extensions = request.normalized_extensions

        # Absolute input never consults the load paths
        if is_absolute(target):
            if extensions is not None:
                return self._resolve_extension(target, extensions)
            if self.adapter.exists(target):
                return self.absolute(target)
            logger.debug("Absolute path %s does not exist", target)
            return None

        for load_path in request.load_paths:
            candidate = os.path.join(load_path, target)
            if extensions is not None:
                resolved = self._resolve_extension(candidate, extensions)
                if resolved is not None:
                    return resolved
            elif self.adapter.exists(candidate):
                return self.absolute(candidate)

        logger.debug("Could not resolve %s on %d load paths", target, len(request.load_paths))
        return None

    def resolve_extension(self,
                          path_to_resolve: PathLike,
                          extensions: Sequence[str]) -> Optional[str]:
        """Try each extension on ``path_to_resolve`` in order.

        Args:
            path_to_resolve: Base path
            extensions: Extensions with or without a leading ``.``; ``""``
                tests the base path itself

        Returns:
            Canonical path of the first existing candidate, or None
        """
        request = ResolutionRequest(path_to_resolve=path_to_resolve, extensions=extensions)
        return self._resolve_extension(request.path_to_resolve, request.normalized_extensions)

    def _resolve_extension(self, base: str, extensions: List[str]) -> Optional[str]:
        for extension in extensions:
            candidate = base if extension == "" else f"{base}.{extension}"
            if self.adapter.exists(candidate):
                return self.absolute(candidate)
        return None

    def search_paths(self) -> List[str]:
        """Configured module search roots (current ``sys.path`` by default)."""
        if self.config.search_paths is None:
            return list(sys.path)
        return [os.fspath(p) for p in self.config.search_paths]

    def resolve_on_load_path(self,
                             path_to_resolve: Optional[PathLike],
                             extensions: Optional[Sequence[str]] = None,
                             extra_paths: Optional[Sequence[PathLike]] = None) -> Optional[str]:
        """Resolve against the module search roots.

        Args:
            path_to_resolve: Path to resolve
            extensions: Optional extensions tried in order
            extra_paths: The caller's own search roots (e.g. a package's
                ``__path__``), tried after the configured search paths

        Returns:
            Canonical path of the first match, or None
        """
        load_paths = self.search_paths() + [os.fspath(p) for p in (extra_paths or ())]
        return self.resolve(load_paths, path_to_resolve, extensions)


_default_resolver = PathResolver()


def resolve(load_paths: Sequence[PathLike],
            path_to_resolve: Optional[PathLike],
            extensions: Optional[Sequence[str]] = None) -> Optional[str]:
    """Resolve a path against load paths with the default resolver.

    See :meth:`PathResolver.resolve`.
    """
    return _default_resolver.resolve(load_paths, path_to_resolve, extensions)


def resolve_extension(path_to_resolve: PathLike,
                      extensions: Sequence[str]) -> Optional[str]:
    """Try extensions on a base path with the default resolver.

    See :meth:`PathResolver.resolve_extension`.
    """
    return _default_resolver.resolve_extension(path_to_resolve, extensions)


def resolve_on_load_path(path_to_resolve: Optional[PathLike],
                         extensions: Optional[Sequence[str]] = None,
                         extra_paths: Optional[Sequence[PathLike]] = None) -> Optional[str]:
    """Resolve against ``sys.path`` followed by ``extra_paths``.

    See :meth:`PathResolver.resolve_on_load_path`.
    """
    return _default_resolver.resolve_on_load_path(path_to_resolve, extensions, extra_paths)
