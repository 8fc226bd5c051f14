"""
Concurrent release loading for changes.

Every release directory is loaded on its own worker thread. Results are
drained on the calling thread as they complete, so the collection is
only ever written from one place. All loads run to completion before
the outcome is decided: either every release loaded, or exactly one
AggregationError is raised and nothing is returned.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from ..domain import ReleaseRecord
from ..errors import AggregationError, DecodeError
from ..infra import ReleaseStore


def load_releases(store: ReleaseStore) -> List[ReleaseRecord]:
    """
    Load every release in the store concurrently.

    Args:
        store: Release store to read from

    Returns:
        Release records in completion order (callers must not rely on it)

    Raises:
        AggregationError: If any release failed to decode. Which failure
            is reported when several occur is not deterministic.
    """
    directories = store.release_directories()
    if not directories:
        return []

    records: List[ReleaseRecord] = []
    error: Optional[DecodeError] = None
    failed = 0

    # One worker per directory; the pool is sized by the store, not fixed
    with ThreadPoolExecutor(max_workers=len(directories)) as executor:
        futures = {executor.submit(store.load_release, d): d for d in directories}

        for future in as_completed(futures):
            try:
                records.append(future.result())
            except DecodeError as e:
                error = e
                failed += 1

    if error is not None:
        raise AggregationError(error, failed=failed) from error

    return records
