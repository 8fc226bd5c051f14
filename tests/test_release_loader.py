"""Tests for concurrent release loading."""

import threading
from pathlib import Path

import pytest

from changes.errors import AggregationError, DecodeError
from changes.infra import ReleaseStore
from changes.services import load_releases


def write_info(directory: Path, version: str, created_at: str = "2023-01-01T00:00:00Z") -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "info.yml").write_text(f"version: {version}\ncreatedAt: {created_at}\n")


def make_store(root: Path, count: int) -> ReleaseStore:
    for i in range(count):
        write_info(root / f"1.{i}.0", f"1.{i}.0")
    return ReleaseStore(root)


class TestLoadReleases:
    """Tests for load_releases."""

    def test_loads_every_release(self, tmp_path):
        store = make_store(tmp_path / "releases", 12)
        records = load_releases(store)
        assert sorted(r.version.minor for r in records) == list(range(12))

    def test_missing_root(self, tmp_path):
        assert load_releases(ReleaseStore(tmp_path / "nope")) == []

    def test_empty_root(self, tmp_path):
        (tmp_path / "releases").mkdir()
        assert load_releases(ReleaseStore(tmp_path / "releases")) == []

    @pytest.mark.parametrize("count", [1, 5, 40])
    def test_one_malformed_release_fails_whole_load(self, tmp_path, count):
        root = tmp_path / "releases"
        store = make_store(root, count)
        (root / "1.0.0" / "info.yml").write_text("version: [broken\n")

        with pytest.raises(AggregationError) as exc_info:
            load_releases(store)

        error = exc_info.value
        assert isinstance(error.error, DecodeError)
        assert error.__cause__ is error.error
        assert error.failed == 1
        assert error.error.path == root / "1.0.0" / "info.yml"

    @pytest.mark.parametrize("content", [
        b"version: 1.1.0\ncreatedAt: 2023-02-30\n",
        b"version: 1.1.0\ncreatedAt: \xff\xfe\n",
        b"version: 1.1.0\ncreatedAt: [2023-01-01]\n",
    ])
    def test_invalid_info_content_fails_whole_load(self, tmp_path, content):
        root = tmp_path / "releases"
        store = make_store(root, 3)
        (root / "1.1.0" / "info.yml").write_bytes(content)

        with pytest.raises(AggregationError) as exc_info:
            load_releases(store)

        error = exc_info.value
        assert isinstance(error.error, DecodeError)
        assert error.failed == 1
        assert error.error.path == root / "1.1.0" / "info.yml"

    def test_multiple_failures_report_one_error(self, tmp_path):
        root = tmp_path / "releases"
        store = make_store(root, 6)
        for name in ("1.1.0", "1.3.0", "1.5.0"):
            (root / name / "info.yml").unlink()

        with pytest.raises(AggregationError) as exc_info:
            load_releases(store)

        error = exc_info.value
        assert error.failed == 3
        assert error.error.path.parent.name in {"1.1.0", "1.3.0", "1.5.0"}
        assert "and 2 more" in str(error)

    def test_waits_for_every_load_before_failing(self, tmp_path):
        root = tmp_path / "releases"
        store = make_store(root, 8)
        (root / "1.0.0" / "info.yml").unlink()

        finished = []
        lock = threading.Lock()
        original = store.load_release

        def tracking_load(directory):
            try:
                return original(directory)
            finally:
                with lock:
                    finished.append(Path(directory).name)

        store.load_release = tracking_load

        with pytest.raises(AggregationError):
            load_releases(store)
        assert len(finished) == 8

    def test_runs_loads_concurrently(self, tmp_path):
        # Every load blocks until all of them have started; a bounded
        # or sequential loader would time out at the barrier.
        root = tmp_path / "releases"
        count = 10
        store = make_store(root, count)
        barrier = threading.Barrier(count, timeout=10)
        original = store.load_release

        def blocking_load(directory):
            barrier.wait()
            return original(directory)

        store.load_release = blocking_load

        assert len(load_releases(store)) == count
