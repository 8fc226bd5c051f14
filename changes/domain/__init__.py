"""
Domain layer for changes.

Contains pure domain objects with no I/O or side effects:
- Version: Semantic version with SemVer precedence
- ReleaseInfo / ReleaseRecord: Decoded release metadata
- ReleaseQueryItem / PrereleaseQueryItem: Query output
- Query variants and VersionRange: What a query selects
- Target: Where a changelog entry is written
- ChangelogEntry: A single changelog entry

These objects are immutable and provide serialization methods for
JSONL and YAML output.
"""

from .version import Version
from .release import (
    ReleaseInfo,
    ReleaseRecord,
    ReleaseQueryItem,
    PrereleaseQueryItem,
)
from .query import (
    AllReleases,
    ExplicitVersions,
    RangeQuery,
    FromVersionToLatest,
    VersionBound,
    VersionRange,
    parse_query,
)
from .target import Unreleased, Released, target_for
from .entry import ChangelogEntry

__all__ = [
    'Version',
    'ReleaseInfo',
    'ReleaseRecord',
    'ReleaseQueryItem',
    'PrereleaseQueryItem',
    'AllReleases',
    'ExplicitVersions',
    'RangeQuery',
    'FromVersionToLatest',
    'VersionBound',
    'VersionRange',
    'parse_query',
    'Unreleased',
    'Released',
    'target_for',
    'ChangelogEntry',
]
