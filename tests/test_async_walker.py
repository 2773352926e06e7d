"""
Tests for the async tree walker.

Covers completion callback semantics, depth-first ordering through the
work queue, pruning, abort behavior and error policies.
"""

import asyncio
import os
from pathlib import Path

import pytest

from dazzlepathlib import TraversalRequest, VisitResult
from dazzlepathlib.aio import (
    AsyncFileSystemAdapter,
    AsyncTreeWalker,
    ContinueOnErrorsPolicy,
    walk_async,
)
from dazzlepathlib.sync import walk_sync


def create_test_tree(base: Path) -> Path:
    """Create the same small tree the sync tests use."""
    (base / "dir1" / "sub").mkdir(parents=True)
    (base / "dir2").mkdir()
    (base / "a.txt").write_text("a")
    (base / "dir1" / "b.txt").write_text("b")
    (base / "dir1" / "sub" / "c.txt").write_text("c")
    (base / "dir2" / "d.py").write_text("d")
    return base


def make_symlink(target: Path, link: Path) -> None:
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"Symlinks not supported: {e}")


class SortedAdapter(AsyncFileSystemAdapter):
    """Adapter that lists children sorted by name for deterministic order."""

    async def list_children(self, path):
        return sorted(await super().list_children(path))


class InFlightTrackingAdapter(SortedAdapter):
    """Adapter that records the maximum number of concurrent operations."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.in_flight = 0
        self.max_in_flight = 0

    async def _track(self, coro):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            return await coro
        finally:
            self.in_flight -= 1

    async def list_children(self, path):
        return await self._track(super().list_children(path))

    async def stat(self, path):
        return await self._track(super().stat(path))

    async def lstat(self, path):
        return await self._track(super().lstat(path))


class FailingListingAdapter(AsyncFileSystemAdapter):
    """Adapter whose listing fails for one directory name."""

    def __init__(self, failing_name):
        super().__init__()
        self.failing_name = failing_name

    async def list_children(self, path):
        if os.path.basename(path) == self.failing_name:
            raise PermissionError(13, "Permission denied", path)
        return sorted(await super().list_children(path))


class FailingStatAdapter(AsyncFileSystemAdapter):
    """Adapter whose stat fails for one regular entry name."""

    def __init__(self, failing_name):
        super().__init__()
        self.failing_name = failing_name

    async def lstat(self, path):
        if os.path.basename(path) == self.failing_name:
            raise PermissionError(13, "Permission denied", path)
        return await super().lstat(path)


class Recorder:
    """Collects visits in order."""

    def __init__(self, descend=lambda path: True):
        self.files = []
        self.dirs = []
        self.order = []
        self.done_calls = 0
        self._descend = descend

    def on_file(self, path):
        self.files.append(path)
        self.order.append(path)

    def on_directory(self, path):
        self.dirs.append(path)
        self.order.append(path)
        return self._descend(path)

    def on_done(self, *args):
        assert args == ()
        self.done_calls += 1


class TestWalkAsync:
    """Test walk_async over a real directory tree."""

    @pytest.mark.asyncio
    async def test_visits_every_file_and_calls_done_once(self, tmp_path):
        root = create_test_tree(tmp_path)
        rec = Recorder()

        await walk_async(root, rec.on_file, rec.on_directory, rec.on_done)

        assert sorted(rec.files) == sorted([
            str(root / "a.txt"),
            str(root / "dir1" / "b.txt"),
            str(root / "dir1" / "sub" / "c.txt"),
            str(root / "dir2" / "d.py"),
        ])
        assert rec.done_calls == 1

    @pytest.mark.asyncio
    async def test_same_file_set_as_sync(self, tmp_path):
        """Sync and async walks agree on the set of visited files."""
        root = create_test_tree(tmp_path)
        async_rec = Recorder()
        sync_rec = Recorder()

        await walk_async(root, async_rec.on_file, async_rec.on_directory)
        walk_sync(root, sync_rec.on_file, sync_rec.on_directory)

        assert set(async_rec.files) == set(sync_rec.files)
        assert set(async_rec.dirs) == set(sync_rec.dirs)

    @pytest.mark.asyncio
    async def test_pre_order(self, tmp_path):
        root = create_test_tree(tmp_path)
        rec = Recorder()

        await walk_async(root, rec.on_file, rec.on_directory)

        for directory in rec.dirs:
            dir_index = rec.order.index(directory)
            for index, path in enumerate(rec.order):
                if path.startswith(directory + os.sep):
                    assert dir_index < index

    @pytest.mark.asyncio
    async def test_subtree_completes_before_siblings(self, tmp_path):
        """Children are pushed to the front of the work list."""
        root = create_test_tree(tmp_path)
        rec = Recorder()

        await walk_async(root, rec.on_file, rec.on_directory, adapter=SortedAdapter())

        assert rec.order == [
            str(root / "a.txt"),
            str(root / "dir1"),
            str(root / "dir1" / "b.txt"),
            str(root / "dir1" / "sub"),
            str(root / "dir1" / "sub" / "c.txt"),
            str(root / "dir2"),
            str(root / "dir2" / "d.py"),
        ]

    @pytest.mark.asyncio
    async def test_prune(self, tmp_path):
        root = create_test_tree(tmp_path)
        rec = Recorder(descend=lambda p: os.path.basename(p) != "dir1")

        await walk_async(root, rec.on_file, rec.on_directory, rec.on_done)

        assert str(root / "dir1") in rec.dirs
        assert str(root / "dir1" / "sub") not in rec.dirs
        assert sorted(rec.files) == sorted([str(root / "a.txt"), str(root / "dir2" / "d.py")])
        assert rec.done_calls == 1

    @pytest.mark.asyncio
    async def test_visit_result_skip(self, tmp_path):
        root = create_test_tree(tmp_path)
        rec = Recorder(descend=lambda p: VisitResult.SKIP)

        await walk_async(root, rec.on_file, rec.on_directory)

        assert rec.files == [str(root / "a.txt")]

    @pytest.mark.asyncio
    async def test_missing_root_completes(self, tmp_path):
        """An unlistable root completes through on_done with no visits."""
        rec = Recorder()

        await walk_async(tmp_path / "missing", rec.on_file, rec.on_directory, rec.on_done)

        assert rec.order == []
        assert rec.done_calls == 1

    @pytest.mark.asyncio
    async def test_empty_root_completes(self, tmp_path):
        rec = Recorder()

        await walk_async(tmp_path, rec.on_file, rec.on_directory, rec.on_done)

        assert rec.order == []
        assert rec.done_calls == 1

    @pytest.mark.asyncio
    async def test_coroutine_visitors_are_awaited(self, tmp_path):
        root = create_test_tree(tmp_path)
        files = []
        done = asyncio.Event()

        async def on_file(path):
            await asyncio.sleep(0)
            files.append(path)

        async def on_directory(path):
            await asyncio.sleep(0)
            return os.path.basename(path) != "dir2"

        async def on_done():
            done.set()

        await walk_async(root, on_file, on_directory, on_done)

        assert str(root / "dir1" / "sub" / "c.txt") in files
        assert str(root / "dir2" / "d.py") not in files
        assert done.is_set()

    @pytest.mark.asyncio
    async def test_one_operation_in_flight(self, tmp_path):
        root = create_test_tree(tmp_path)
        adapter = InFlightTrackingAdapter(max_concurrent=1)
        rec = Recorder()

        await walk_async(root, rec.on_file, rec.on_directory, adapter=adapter)

        assert adapter.max_in_flight == 1
        assert len(rec.files) == 4


class TestWalkAsyncFailures:
    """Test abort and tolerance behavior."""

    @pytest.mark.asyncio
    async def test_stat_failure_aborts(self, tmp_path):
        root = create_test_tree(tmp_path)
        rec = Recorder()

        with pytest.raises(PermissionError):
            await walk_async(root, rec.on_file, rec.on_directory, rec.on_done,
                             adapter=FailingStatAdapter("b.txt"))

        assert str(root / "dir1" / "b.txt") not in rec.files
        assert rec.done_calls == 0

    @pytest.mark.asyncio
    async def test_broken_symlink_skipped(self, tmp_path):
        """A link to a missing target is visited by neither visitor."""
        root = create_test_tree(tmp_path)
        make_symlink(tmp_path / "nowhere", root / "broken")
        make_symlink(tmp_path / "gone", root / "dir1" / "broken_dir")
        rec = Recorder()

        await walk_async(root, rec.on_file, rec.on_directory, rec.on_done)

        assert str(root / "broken") not in rec.order
        assert str(root / "dir1" / "broken_dir") not in rec.order
        assert len(rec.files) == 4
        assert rec.done_calls == 1

    @pytest.mark.asyncio
    async def test_broken_symlink_same_set_as_sync(self, tmp_path):
        root = create_test_tree(tmp_path)
        make_symlink(tmp_path / "nowhere", root / "broken")
        async_rec = Recorder()
        sync_rec = Recorder()

        await walk_async(root, async_rec.on_file, async_rec.on_directory)
        walk_sync(root, sync_rec.on_file, sync_rec.on_directory)

        assert set(async_rec.files) == set(sync_rec.files)
        assert set(async_rec.dirs) == set(sync_rec.dirs)

    @pytest.mark.asyncio
    async def test_symlink_to_file_visited_as_file(self, tmp_path):
        target = tmp_path / "target.txt"
        target.write_text("t")
        root = tmp_path / "root"
        root.mkdir()
        make_symlink(target, root / "link.txt")
        rec = Recorder()

        await walk_async(root, rec.on_file, rec.on_directory)

        assert rec.files == [str(root / "link.txt")]

    @pytest.mark.asyncio
    async def test_listing_failure_aborts(self, tmp_path):
        root = create_test_tree(tmp_path)
        rec = Recorder()

        with pytest.raises(PermissionError):
            await walk_async(root, rec.on_file, rec.on_directory, rec.on_done,
                             adapter=FailingListingAdapter("sub"))

        assert str(root / "dir1" / "sub") in rec.dirs
        assert str(root / "dir1" / "sub" / "c.txt") not in rec.files
        assert rec.done_calls == 0

    @pytest.mark.asyncio
    async def test_pruned_directory_is_never_listed(self, tmp_path):
        """Pruning happens before listing, so an unlistable pruned dir is fine."""
        root = create_test_tree(tmp_path)
        rec = Recorder(descend=lambda p: os.path.basename(p) != "sub")

        await walk_async(root, rec.on_file, rec.on_directory, rec.on_done,
                         adapter=FailingListingAdapter("sub"))

        assert rec.done_calls == 1

    @pytest.mark.asyncio
    async def test_continue_policy_tolerates_failures(self, tmp_path):
        root = create_test_tree(tmp_path)
        make_symlink(tmp_path / "nowhere", tmp_path / "broken")
        policy = ContinueOnErrorsPolicy(verbose=False)
        rec = Recorder()

        walker = AsyncTreeWalker(adapter=FailingListingAdapter("sub"), error_policy=policy)
        request = TraversalRequest(root=root, on_file=rec.on_file, on_directory=rec.on_directory)
        await walker.walk(request, on_done=rec.on_done)

        assert rec.done_calls == 1
        assert str(root / "dir2" / "d.py") in rec.files
        # Broken links are skipped before the policy sees anything
        assert policy.skipped_paths == [str(root / "dir1" / "sub")]
        assert [e['operation'] for e in policy.errors] == ['list_children']


class TestAsyncTreeWalker:
    """Test AsyncTreeWalker construction."""

    def test_default_adapter_is_concurrency_one(self):
        walker = AsyncTreeWalker()
        assert walker.adapter.max_concurrent == 1

    def test_invalid_concurrency_rejected(self):
        with pytest.raises(ValueError):
            AsyncFileSystemAdapter(max_concurrent=0)
