"""Tests for version query resolution and result assembly."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from changes.domain import (
    AllReleases,
    ExplicitVersions,
    FromVersionToLatest,
    RangeQuery,
    ReleaseInfo,
    ReleaseRecord,
    Version,
    VersionBound,
    VersionRange,
)
from changes.errors import NotFoundError
from changes.services.assembler import assemble
from changes.services.resolver import (
    latest_record,
    resolve,
    select_all,
    select_explicit,
    select_from_version_to_latest,
    select_range,
)

BASE = datetime(2023, 1, 1, tzinfo=timezone.utc)


def v(text):
    return Version.parse(text)


def record(version, *prereleases, days=0):
    return ReleaseRecord(
        release=ReleaseInfo(v(version), BASE + timedelta(days=days)),
        prereleases=tuple(ReleaseInfo(v(p), BASE) for p in prereleases),
    )


def versions(records):
    return [str(r.version) for r in records]


@pytest.fixture
def records():
    return [
        record("1.1.0", "1.1.0-beta.1", days=31),
        record("2.0.0", days=59),
        record("1.0.0"),
        record("10.0.0", "10.0.0-rc.1", "10.0.0-alpha", days=90),
    ]


class TestLatest:
    """Tests for latest_record."""

    def test_latest_uses_version_order(self, records):
        assert str(latest_record(records).version) == "10.0.0"

    def test_latest_of_empty_is_none(self):
        assert latest_record([]) is None


class TestSelectExplicit:
    """Tests for explicit version selection."""

    def test_selects_in_request_order(self, records):
        selected = select_explicit(records, [v("2.0.0"), v("1.0.0")])
        assert versions(selected) == ["2.0.0", "1.0.0"]

    def test_missing_version_raises(self, records):
        with pytest.raises(NotFoundError) as exc_info:
            select_explicit(records, [v("1.0.0"), v("9.9.9"), v("8.8.8")])
        assert exc_info.value.version == v("9.9.9")
        assert '"9.9.9"' in str(exc_info.value)

    def test_include_latest_appends_latest(self, records):
        selected = select_explicit(records, [v("1.0.0")], include_latest=True)
        assert versions(selected) == ["1.0.0", "10.0.0"]

    def test_include_latest_keeps_duplicate(self, records):
        selected = select_explicit(records, [v("10.0.0")], include_latest=True)
        assert versions(selected) == ["10.0.0", "10.0.0"]

    def test_include_latest_on_empty_collection(self):
        assert select_explicit([], [], include_latest=True) == []

    def test_build_metadata_does_not_prevent_match(self, records):
        assert versions(select_explicit(records, [v("1.0.0+ci.4")])) == ["1.0.0"]


class TestSelectRange:
    """Range selection agrees with the plain predicate filter."""

    @pytest.mark.parametrize("version_range", [
        VersionRange.closed(v("1.0.0"), v("1.9.9")),
        VersionRange.closed(v("1.1.0"), v("10.0.0")),
        VersionRange.half_open(v("1.0.0"), v("2.0.0")),
        VersionRange.at_least(v("2.0.0")),
        VersionRange.below(v("2.0.0")),
        VersionRange.through(v("2.0.0")),
        VersionRange(lower=VersionBound(v("1.0.0"), inclusive=False)),
    ])
    def test_matches_filter(self, records, version_range):
        lower, upper = version_range.lower, version_range.upper

        def expected(r):
            if lower and (r.version < lower.version or (not lower.inclusive and r.version == lower.version)):
                return False
            if upper and (r.version > upper.version or (not upper.inclusive and r.version == upper.version)):
                return False
            return True

        assert select_range(records, version_range) == [r for r in records if expected(r)]

    def test_closed_range_example(self, records):
        selected = select_range(records, VersionRange.closed(v("1.0.0"), v("1.9.9")))
        assert sorted(versions(selected)) == ["1.0.0", "1.1.0"]


class TestFromVersionToLatest:
    """Tests for select_from_version_to_latest."""

    def test_empty_collection(self):
        assert select_from_version_to_latest([], v("1.0.0")) == []

    def test_equals_closed_range_to_latest(self, records):
        expected = select_range(records, VersionRange.closed(v("1.1.0"), v("10.0.0")))
        assert select_from_version_to_latest(records, v("1.1.0")) == expected

    def test_start_after_latest_is_empty(self, records):
        assert select_from_version_to_latest(records, v("11.0.0")) == []


class TestResolve:
    """Tests for resolve dispatch."""

    def test_dispatches_each_variant(self, records):
        assert resolve(AllReleases(), records) == select_all(records)
        assert versions(resolve(ExplicitVersions((v("2.0.0"),)), records)) == ["2.0.0"]
        assert len(resolve(RangeQuery(VersionRange.at_least(v("2.0.0"))), records)) == 2
        assert len(resolve(FromVersionToLatest(v("2.0.0")), records)) == 2

    def test_unknown_query(self, records):
        with pytest.raises(TypeError):
            resolve("everything", records)


class TestAssemble:
    """Tests for result assembly."""

    def test_sorted_descending_with_prereleases(self, records):
        items = assemble(records)
        assert [i.version for i in items] == ["10.0.0", "2.0.0", "1.1.0", "1.0.0"]
        assert [p.version for p in items[0].prereleases] == ["10.0.0-rc.1", "10.0.0-alpha"]
        assert [p.version for p in items[2].prereleases] == ["1.1.0-beta.1"]
        assert items[1].created_at == BASE + timedelta(days=59)

    def test_order_independent_of_input_order(self, records):
        expected = assemble(records)
        shuffled = list(records)
        for seed in range(5):
            random.Random(seed).shuffle(shuffled)
            assert assemble(shuffled) == expected

    def test_empty(self):
        assert assemble([]) == []
