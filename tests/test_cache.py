"""Tests for the copy-on-write SnapshotCache."""

from __future__ import annotations

import threading

import pytest

from fieldtag.cache import SnapshotCache


class TestSnapshotCache:
    def test_miss_then_hit(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()
        assert cache.get("a") is None
        assert cache.get_or_create("a", lambda: 1) == 1
        assert cache.get_or_create("a", lambda: 2) == 1
        assert cache.get("a") == 1
        assert "a" in cache
        assert len(cache) == 1

    def test_snapshot_is_immutable_and_stable(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()
        cache.get_or_create("a", lambda: 1)
        before = cache.snapshot()
        cache.get_or_create("b", lambda: 2)
        assert dict(before) == {"a": 1}
        assert dict(cache.snapshot()) == {"a": 1, "b": 2}
        with pytest.raises(TypeError):
            before["c"] = 3  # type: ignore[index]

    def test_factory_error_not_published(self) -> None:
        cache: SnapshotCache[str, int] = SnapshotCache()

        def boom() -> int:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_create("a", boom)
        assert "a" not in cache
        assert cache.get_or_create("a", lambda: 5) == 5

    def test_factory_runs_once_under_contention(self) -> None:
        cache: SnapshotCache[str, object] = SnapshotCache()
        calls = 0
        start = threading.Barrier(8)
        results: list[object] = []

        def factory() -> object:
            nonlocal calls
            calls += 1
            return object()

        def worker() -> None:
            start.wait()
            results.append(cache.get_or_create("k", factory))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert calls == 1
        assert all(r is results[0] for r in results)
