#!/usr/bin/env python3
"""
Walk a project tree and resolve modules against load paths.

This example demonstrates:
- Pruning with the synchronous walker
- The same walk with the async walker and a completion callback
- Resolving a logical path with extension priority

Usage:
    python examples/walk_and_resolve.py [ROOT]
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

from dazzlepathlib import VisitResult, resolve
from dazzlepathlib.aio import walk_async
from dazzlepathlib.sync import walk_sync

IGNORED = {".git", "__pycache__", "node_modules"}


def prune_ignored(path: str) -> VisitResult:
    if os.path.basename(path) in IGNORED:
        return VisitResult.SKIP
    return VisitResult.DESCEND


def sync_walk(root: Path) -> int:
    files = []
    walk_sync(root, files.append, prune_ignored)
    return len(files)


async def async_walk(root: Path) -> int:
    files = []
    await walk_async(root, files.append, prune_ignored,
                     on_done=lambda: print("  async walk complete"))
    return len(files)


def main():
    logging.basicConfig(level=logging.INFO)
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    print(f"Walking {root}")
    print(f"  sync:  {sync_walk(root)} files")
    print(f"  async: {asyncio.run(async_walk(root))} files")

    found = resolve([root, root / "src"], "setup", ["py", "cfg", ""])
    print(f"Resolved 'setup' -> {found}")


if __name__ == "__main__":
    main()
