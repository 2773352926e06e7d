"""Async tree walker with a concurrency-one work queue.

Discovered paths go through a work list drained by a single worker, so
at most one filesystem operation is in flight and visitors are never
invoked concurrently. Children of a descended directory are pushed to
the front of the list, which finishes that subtree before any sibling
queued after it.
"""

import inspect
import logging
import os
import stat as stat_module
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Optional, Union

from ..config import EntryKind, TraversalRequest, PathLike
from .adapters.filesystem import AsyncFileSystemAdapter
from .error_policies import ErrorPolicy, FailFastPolicy

logger = logging.getLogger(__name__)

Visitor = Callable[[str], Union[Any, Awaitable[Any]]]


async def _invoke(callback: Callable[..., Any], *args) -> Any:
    """Call a visitor, awaiting its result when it returns an awaitable."""
    result = callback(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class AsyncTreeWalker:
    """Async directory walker with visitor pruning.

    Each queued path is stat'ed, with symbolic links resolved to their
    target; links whose target cannot be stat'ed are skipped silently.
    Files go to the file visitor, directories to the directory visitor,
    whose truthy result makes the walker list the directory and queue its
    children. Anything else is ignored.

    Other failures stat'ing or listing a queued path go to the error policy.
    The default :class:`FailFastPolicy` re-raises, aborting the walk.
    """

    def __init__(self,
                 adapter: Optional[AsyncFileSystemAdapter] = None,
                 error_policy: Optional[ErrorPolicy] = None):
        """Initialize walker.

        Args:
            adapter: Async filesystem adapter (creates a concurrency-one
                adapter if None)
            error_policy: Error handling policy (defaults to FailFastPolicy)
        """
        self.adapter = adapter or AsyncFileSystemAdapter(max_concurrent=1)
        self.error_policy = error_policy or FailFastPolicy()

    async def walk(self,
                   request: TraversalRequest,
                   on_done: Optional[Callable[[], Any]] = None) -> None:
        """Walk the tree described by ``request``.

        Args:
            request: Root and visitors for this walk
            on_done: Called once, with no arguments, when the work list drains
        """
        try:
            names = await self.adapter.list_children(request.root)
        except OSError as e:
            # Completes like an empty walk; callers cannot tell the two apart
            logger.warning("Could not list walk root %s: %s", request.root, e)
            await self._done(on_done)
            return

        queue: Deque[str] = deque(os.path.join(request.root, name) for name in names)
        while queue:
            path = queue.popleft()
            await self._process(path, queue, request)

        await self._done(on_done)

    async def _process(self, path: str, queue: Deque[str], request: TraversalRequest) -> None:
        try:
            st = await self.adapter.lstat(path)
        except OSError as e:
            await self.error_policy.handle(e, 'stat', path)
            return
        if stat_module.S_ISLNK(st.st_mode):
            try:
                st = await self.adapter.stat(path)
            except OSError as e:
                logger.debug("Skipping broken symlink %s: %s", path, e)
                return

        kind = EntryKind.from_stat(st)
        if kind is EntryKind.FILE:
            await _invoke(request.on_file, path)
        elif kind is EntryKind.DIRECTORY:
            if not await _invoke(request.on_directory, path):
                logger.debug("Pruned %s", path)
                return
            try:
                names = await self.adapter.list_children(path)
            except OSError as e:
                await self.error_policy.handle(e, 'list_children', path)
                return
            queue.extendleft(reversed([os.path.join(path, name) for name in names]))

    async def _done(self, on_done: Optional[Callable[[], Any]]) -> None:
        if on_done is not None:
            await _invoke(on_done)


async def walk_async(root: PathLike,
                     on_file: Visitor,
                     on_directory: Optional[Visitor] = None,
                     on_done: Optional[Callable[[], Any]] = None,
                     adapter: Optional[AsyncFileSystemAdapter] = None,
                     error_policy: Optional[ErrorPolicy] = None) -> None:
    """Walk a directory tree asynchronously, one filesystem operation at a time.

    Args:
        root: Directory to walk
        on_file: Called with each file path (may be a coroutine function)
        on_directory: Called with each directory path; truthy to descend.
            Defaults to ``on_file``.
        on_done: Called once with no arguments when the walk completes.
            Also called when ``root`` cannot be listed.
        adapter: Optional async filesystem adapter
        error_policy: How to treat stat/listing failures (default: abort)

    Raises:
        OSError: If a queued path cannot be stat'ed or a descended
            directory cannot be listed under the default policy

    Example:
        >>> files = []
        >>> await walk_async('/project', files.append, lambda d: True)
    """
    request = TraversalRequest(root=root, on_file=on_file, on_directory=on_directory)
    walker = AsyncTreeWalker(adapter=adapter, error_policy=error_policy)
    await walker.walk(request, on_done=on_done)
