"""
changes - Changelog entries tracked per release.

Pending entries live in ``.changes/Unreleased``; each release gets its
own directory under ``.changes/releases`` holding an ``info.yml`` and
its entries, with prereleases nested inside their release.

Quick Start:
    from changes import ReleaseQuerier, Version, VersionRange

    querier = ReleaseQuerier.for_releases_dir(".changes/releases")

    # Every release, newest first
    for item in querier.query_all():
        print(item.version, item.created_at)

    # Explicit versions, plus the latest release
    querier.query_versions(["1.0.0"], include_latest=True)

    # Ranges
    querier.query_range(VersionRange.closed(Version.parse("1.0.0"),
                                            Version.parse("1.9.9")))
    querier.query_up_to_latest("1.1.0")

Domain Objects:
    Version - Semantic version with SemVer precedence
    ReleaseInfo / ReleaseRecord - Decoded release metadata
    ReleaseQueryItem - Query output
    VersionRange - Bounds for range queries

Services:
    ReleaseQuerier - Release queries
    EntryService - Adding changelog entries
    ReleaseService - Creating releases
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Version,
    ReleaseInfo,
    ReleaseRecord,
    ReleaseQueryItem,
    PrereleaseQueryItem,
    AllReleases,
    ExplicitVersions,
    RangeQuery,
    FromVersionToLatest,
    VersionBound,
    VersionRange,
    ChangelogEntry,
    Unreleased,
    Released,
)

# Services
from .services import (
    ReleaseQuerier,
    EntryService,
    ReleaseService,
)

# Errors
from .errors import (
    ChangesError,
    DecodeError,
    AggregationError,
    NotFoundError,
    ReleaseExistsError,
)

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Version",
    "ReleaseInfo",
    "ReleaseRecord",
    "ReleaseQueryItem",
    "PrereleaseQueryItem",
    "AllReleases",
    "ExplicitVersions",
    "RangeQuery",
    "FromVersionToLatest",
    "VersionBound",
    "VersionRange",
    "ChangelogEntry",
    "Unreleased",
    "Released",
    # Services
    "ReleaseQuerier",
    "EntryService",
    "ReleaseService",
    # Errors
    "ChangesError",
    "DecodeError",
    "AggregationError",
    "NotFoundError",
    "ReleaseExistsError",
]
