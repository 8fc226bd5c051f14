"""
Result assembly for changes queries.

Turns selected records into query items ordered newest first, both for
releases and for the prereleases inside each release. The order only
depends on versions, never on load completion order.
"""

from typing import Iterable, List

from ..domain import PrereleaseQueryItem, ReleaseQueryItem, ReleaseRecord


def to_query_item(record: ReleaseRecord) -> ReleaseQueryItem:
    prereleases = sorted(record.prereleases, key=lambda p: p.version, reverse=True)
    return ReleaseQueryItem(
        version=str(record.release.version),
        created_at=record.release.created_at,
        prereleases=tuple(
            PrereleaseQueryItem(version=str(p.version), created_at=p.created_at)
            for p in prereleases
        ),
    )


def assemble(records: Iterable[ReleaseRecord]) -> List[ReleaseQueryItem]:
    """Build query items sorted descending by release version."""
    ordered = sorted(records, key=lambda r: r.version, reverse=True)
    return [to_query_item(r) for r in ordered]
