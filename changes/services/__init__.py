"""
Service layer for changes.

Contains business logic that orchestrates domain objects and infrastructure:
- ReleaseQuerier: Release queries (load, resolve, assemble)
- EntryService: Adding changelog entries
- ReleaseService: Creating releases and prereleases

Services are the primary API for commands to use.
"""

from .release_query_service import ReleaseQuerier
from .entry_service import EntryService
from .release_service import ReleaseService, CreatedRelease
from .release_loader import load_releases

__all__ = [
    'ReleaseQuerier',
    'EntryService',
    'ReleaseService',
    'CreatedRelease',
    'load_releases',
]
