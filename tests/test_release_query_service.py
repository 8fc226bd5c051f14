"""Tests for ReleaseQuerier against an on-disk store."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from changes import ReleaseQuerier, Version, VersionRange
from changes.errors import AggregationError, NotFoundError


def write_info(directory: Path, version: str, created_at: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "info.yml").write_text(f"version: {version}\ncreatedAt: {created_at}\n")


def v(text):
    return Version.parse(text)


class TestReleaseQuerier:
    """Query behaviour over the example store."""

    @pytest.fixture
    def releases_dir(self, tmp_path):
        root = tmp_path / ".changes" / "releases"
        write_info(root / "1.0.0", "1.0.0", "2023-01-01T00:00:00Z")
        write_info(root / "1.1.0", "1.1.0", "2023-02-01T00:00:00Z")
        write_info(root / "1.1.0" / "1.1.0-beta.1", "1.1.0-beta.1", "2023-01-15T00:00:00Z")
        write_info(root / "2.0.0", "2.0.0", "2023-03-01T00:00:00Z")
        return root

    @pytest.fixture
    def querier(self, releases_dir):
        return ReleaseQuerier.for_releases_dir(releases_dir)

    def test_query_all(self, querier):
        items = querier.query_all()
        assert [i.version for i in items] == ["2.0.0", "1.1.0", "1.0.0"]
        assert [p.version for p in items[1].prereleases] == ["1.1.0-beta.1"]
        assert items[1].prereleases[0].created_at == datetime(2023, 1, 15, tzinfo=timezone.utc)
        assert items[0].prereleases == ()

    def test_query_all_one_item_per_directory(self, querier, releases_dir):
        items = querier.query_all()
        assert len(items) == len([p for p in releases_dir.iterdir() if p.is_dir()])
        parsed = [v(i.version) for i in items]
        assert all(a > b for a, b in zip(parsed, parsed[1:]))

    def test_query_versions(self, querier):
        items = querier.query_versions(["1.0.0", "2.0.0"])
        assert [i.version for i in items] == ["2.0.0", "1.0.0"]

    def test_query_versions_not_found(self, querier):
        with pytest.raises(NotFoundError) as exc_info:
            querier.query_versions(["1.0.0", "9.9.9"])
        assert str(exc_info.value.version) == "9.9.9"

    def test_query_versions_with_latest(self, querier):
        items = querier.query_versions([v("1.0.0")], include_latest=True)
        assert [i.version for i in items] == ["2.0.0", "1.0.0"]

    def test_query_versions_latest_duplicate_kept(self, querier):
        items = querier.query_versions(["2.0.0"], include_latest=True)
        assert [i.version for i in items] == ["2.0.0", "2.0.0"]

    def test_query_closed_range(self, querier):
        items = querier.query_range(VersionRange.closed(v("1.0.0"), v("1.9.9")))
        assert [i.version for i in items] == ["1.1.0", "1.0.0"]
        assert [p.version for p in items[0].prereleases] == ["1.1.0-beta.1"]

    def test_query_half_open_range(self, querier):
        items = querier.query_range(VersionRange.half_open(v("1.0.0"), v("2.0.0")))
        assert [i.version for i in items] == ["1.1.0", "1.0.0"]

    def test_query_open_ranges(self, querier):
        assert [i.version for i in querier.query_range(VersionRange.at_least(v("1.1.0")))] == ["2.0.0", "1.1.0"]
        assert [i.version for i in querier.query_range(VersionRange.below(v("1.1.0")))] == ["1.0.0"]
        assert [i.version for i in querier.query_range(VersionRange.through(v("1.1.0")))] == ["1.1.0", "1.0.0"]

    def test_query_up_to_latest(self, querier):
        expected = querier.query_range(VersionRange.closed(v("1.1.0"), v("2.0.0")))
        assert querier.query_up_to_latest("1.1.0") == expected

    def test_query_up_to_latest_empty_store(self, tmp_path):
        querier = ReleaseQuerier.for_releases_dir(tmp_path / "missing")
        assert querier.query_up_to_latest("1.0.0") == []
        assert querier.query_all() == []

    def test_idempotent(self, querier):
        first = [i.to_jsonl() for i in querier.query_all()]
        second = [i.to_jsonl() for i in querier.query_all()]
        assert first == second

    def test_malformed_release_fails_query(self, querier, releases_dir):
        (releases_dir / "1.0.0" / "info.yml").write_text("createdAt: 2023-01-01T00:00:00Z\n")
        with pytest.raises(AggregationError):
            querier.query_range(VersionRange.at_least(v("2.0.0")))

    def test_every_query_rereads_store(self, querier, releases_dir):
        assert len(querier.query_all()) == 3
        write_info(releases_dir / "3.0.0", "3.0.0", "2023-04-01T00:00:00Z")
        assert querier.query_all()[0].version == "3.0.0"
