"""DazzlePathLib - Directory Walking and Load-Path Resolution.

DazzlePathLib walks directory trees with caller-controlled pruning and
resolves logical paths against an ordered list of load paths.

Choose your walker:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from dazzlepathlib.sync import walk_sync

Asynchronous:
    from dazzlepathlib.aio import walk_async
━━━━━━━━━━━━━━━━━━━━━━━━━━

Resolution:
    from dazzlepathlib import resolve
"""

__version__ = "0.1.0"

# Re-export submodules for convenient access
from . import sync
from . import aio

from .config import (
    VisitResult,
    EntryKind,
    TraversalRequest,
    ResolutionRequest,
    ResolverConfig,
)
from ._common.paths import absolute
from .resolver import (
    PathResolver,
    resolve,
    resolve_extension,
    resolve_on_load_path,
)

__all__ = [
    "__version__",
    "sync",
    "aio",
    # Config
    "VisitResult",
    "EntryKind",
    "TraversalRequest",
    "ResolutionRequest",
    "ResolverConfig",
    # Resolution
    "absolute",
    "PathResolver",
    "resolve",
    "resolve_extension",
    "resolve_on_load_path",
]
