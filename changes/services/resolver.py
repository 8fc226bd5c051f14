"""
Version query resolution for changes.

Pure functions that select release records for each query variant.
They operate on the fully loaded collection and never touch disk.
"""

from typing import Iterable, List, Optional, Sequence

from ..domain import (
    AllReleases,
    ExplicitVersions,
    FromVersionToLatest,
    RangeQuery,
    ReleaseRecord,
    Version,
    VersionRange,
)
from ..domain.query import Query
from ..errors import NotFoundError


def latest_record(records: Iterable[ReleaseRecord]) -> Optional[ReleaseRecord]:
    """Return the record with the greatest release version, or None."""
    ordered = sorted(records, key=lambda r: r.version, reverse=True)
    return ordered[0] if ordered else None


def select_all(records: Sequence[ReleaseRecord]) -> List[ReleaseRecord]:
    return list(records)


def select_explicit(
    records: Sequence[ReleaseRecord],
    versions: Iterable[Version],
    include_latest: bool = False
) -> List[ReleaseRecord]:
    """
    Select the records for exactly the requested versions.

    Latest is appended when requested and the collection is non-empty.
    It is not de-duplicated against explicitly requested versions.

    Raises:
        NotFoundError: For the first requested version with no release
    """
    selected = []
    for version in versions:
        match = next((r for r in records if r.version == version), None)
        if match is None:
            raise NotFoundError(version)
        selected.append(match)

    if include_latest:
        latest = latest_record(records)
        if latest is not None:
            selected.append(latest)

    return selected


def select_range(
    records: Sequence[ReleaseRecord],
    version_range: VersionRange
) -> List[ReleaseRecord]:
    return [r for r in records if version_range.contains(r.version)]


def select_from_version_to_latest(
    records: Sequence[ReleaseRecord],
    start: Version
) -> List[ReleaseRecord]:
    """Select ``start ... latest``; an empty store gives an empty result."""
    latest = latest_record(records)
    if latest is None:
        return []
    return select_range(records, VersionRange.closed(start, latest.version))


def resolve(query: Query, records: Sequence[ReleaseRecord]) -> List[ReleaseRecord]:
    """
    Select records for any query variant.

    Raises:
        NotFoundError: For an explicit version with no release
        TypeError: For an unknown query type
    """
    if isinstance(query, AllReleases):
        return select_all(records)
    if isinstance(query, ExplicitVersions):
        return select_explicit(records, query.versions, query.include_latest)
    if isinstance(query, RangeQuery):
        return select_range(records, query.range)
    if isinstance(query, FromVersionToLatest):
        return select_from_version_to_latest(records, query.start)
    raise TypeError(f"Unsupported query: {query!r}")
