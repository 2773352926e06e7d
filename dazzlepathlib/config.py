"""Configuration system for DazzlePathLib.

This module defines the request objects built for each walk or resolve
call, the explicit visitor result type, and resolver configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Callable, Sequence, Any, List, Union
import os
import stat as stat_module

from ._common.paths import normalize_extension


PathLike = Union[str, "os.PathLike[str]"]


class VisitResult(Enum):
    """What a directory visitor wants the walker to do next.

    Directory visitors may return one of these instead of a bare boolean.
    Both members are usable in a boolean context, so walkers only ever
    test the truthiness of whatever a visitor returns.
    """
    DESCEND = "descend"     # Walk into the directory's children
    SKIP = "skip"           # Prune the directory's subtree

    def __bool__(self) -> bool:
        return self is VisitResult.DESCEND


class EntryKind(Enum):
    """Resolved kind of a traversal entry (symlinks take their target's kind)."""
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "EntryKind":
        """Map a stat result to an EntryKind."""
        if stat_module.S_ISDIR(st.st_mode):
            return cls.DIRECTORY
        if stat_module.S_ISREG(st.st_mode):
            return cls.FILE
        return cls.OTHER


@dataclass
class TraversalRequest:
    """A single directory walk.

    Attributes:
        root: Directory to walk. A root that is not an existing directory
            makes the walk a no-op.
        on_file: Called with the path of every visited file.
        on_directory: Called with the path of every visited directory. Its
            truthiness decides whether the walker descends. Defaults to
            ``on_file``.
    """

    root: PathLike
    on_file: Callable[[str], Any]
    on_directory: Optional[Callable[[str], Any]] = None

    def __post_init__(self):
        if not callable(self.on_file):
            raise ValueError(f"on_file must be callable, got {self.on_file!r}")
        if self.on_directory is None:
            self.on_directory = self.on_file
        elif not callable(self.on_directory):
            raise ValueError(
                f"on_directory must be callable, got {self.on_directory!r}"
            )
        self.root = os.fspath(self.root)


@dataclass
class ResolutionRequest:
    """A single load-path resolution.

    Attributes:
        load_paths: Directories searched in order; the first match wins.
        path_to_resolve: Absolute or relative path to look up.
        extensions: Optional extensions tried in order for every candidate.
            ``"js"`` and ``".js"`` are equivalent, ``""`` means the bare path.
    """

    load_paths: Sequence[PathLike] = field(default_factory=list)
    path_to_resolve: Optional[PathLike] = None
    extensions: Optional[Sequence[str]] = None

    def __post_init__(self):
        if isinstance(self.extensions, str):
            raise TypeError(
                f"extensions must be a sequence of strings, not a str: {self.extensions!r}"
            )
        self.load_paths = [os.fspath(p) for p in self.load_paths]
        if self.path_to_resolve is not None:
            self.path_to_resolve = os.fspath(self.path_to_resolve)

    @property
    def normalized_extensions(self) -> Optional[List[str]]:
        """Extensions with one leading separator stripped, or None."""
        if self.extensions is None:
            return None
        return [normalize_extension(ext) for ext in self.extensions]


@dataclass
class ResolverConfig:
    """Configuration for PathResolver.

    Attributes:
        search_paths: Module search roots used by ``resolve_on_load_path``.
            ``None`` means a snapshot of ``sys.path`` taken at call time.
        home_directory: Directory that ``~`` expands to. ``None`` means the
            current user's home directory.
    """

    search_paths: Optional[Sequence[PathLike]] = None
    home_directory: Optional[str] = None
