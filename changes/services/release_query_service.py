"""
Release query service for changes.

Entry point for every release query. Each call re-reads the whole
store, resolves the query against it and assembles an ordered result:

    store -> load_releases -> resolve -> assemble
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..domain import (
    AllReleases,
    ExplicitVersions,
    FromVersionToLatest,
    RangeQuery,
    ReleaseQueryItem,
    Version,
    VersionRange,
)
from ..domain.query import Query
from ..domain.version import coerce_version
from ..infra import ReleaseStore
from .assembler import assemble
from .release_loader import load_releases
from .resolver import resolve

logger = logging.getLogger(__name__)


class ReleaseQuerier:
    """
    Query released versions.

    Example:
        querier = ReleaseQuerier.for_releases_dir(".changes/releases")

        for item in querier.query_all():
            print(item.version, [p.version for p in item.prereleases])

        querier.query_versions(["1.0.0"], include_latest=True)
        querier.query_range(VersionRange.half_open(v1, v2))
        querier.query_up_to_latest(Version.parse("1.1.0"))
    """

    def __init__(self, store: ReleaseStore):
        self.store = store

    @classmethod
    def for_releases_dir(cls, releases_dir: Union[str, Path]) -> 'ReleaseQuerier':
        return cls(ReleaseStore(releases_dir))

    def run(self, query: Query) -> List[ReleaseQueryItem]:
        """
        Run any query variant.

        Raises:
            AggregationError: If the store could not be loaded
            NotFoundError: If an explicitly requested version is missing
        """
        records = load_releases(self.store)
        logger.debug(f"Loaded {len(records)} releases from {self.store.root}")
        selected = resolve(query, records)
        return assemble(selected)

    def query_all(self) -> List[ReleaseQueryItem]:
        return self.run(AllReleases())

    def query_versions(
        self,
        versions: Iterable[Union[str, Version]],
        include_latest: bool = False
    ) -> List[ReleaseQueryItem]:
        requested = tuple(coerce_version(v) for v in versions)
        return self.run(ExplicitVersions(requested, include_latest))

    def query_range(self, version_range: VersionRange) -> List[ReleaseQueryItem]:
        return self.run(RangeQuery(version_range))

    def query_up_to_latest(self, start: Union[str, Version]) -> List[ReleaseQueryItem]:
        return self.run(FromVersionToLatest(coerce_version(start)))
