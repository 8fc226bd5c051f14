"""
Release service for changes.

Creates release and prerelease directories with their ``info.yml`` and,
by default, moves pending entries from the Unreleased bucket into the
new release.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from ..domain import Released, ReleaseInfo, Unreleased, Version
from ..domain.target import releases_directory
from ..errors import NotFoundError, ReleaseExistsError
from ..infra import ReleaseStore

logger = logging.getLogger(__name__)


@dataclass
class CreatedRelease:
    """Outcome of creating a release."""
    info: ReleaseInfo
    directory: Path
    moved_entries: List[Path] = field(default_factory=list)

    def to_dict(self):
        return {
            'version': str(self.info.version),
            'createdAt': self.info.created_at.isoformat(),
            'path': str(self.directory),
            'moved_entries': len(self.moved_entries),
        }


class ReleaseService:
    """
    Service for creating releases.

    Example:
        service = ReleaseService(Path(".changes"))
        created = service.create(Version.parse("1.2.0"))
        print(created.directory, len(created.moved_entries))
    """

    def __init__(self, changes_dir: Union[str, Path]):
        self.changes_dir = Path(changes_dir)
        self.store = ReleaseStore(releases_directory(self.changes_dir))

    def create(
        self,
        version: Version,
        created_at: Optional[datetime] = None,
        move_unreleased: bool = True
    ) -> CreatedRelease:
        """
        Create a release or prerelease.

        Args:
            version: Version to release
            created_at: Creation time (defaults to now, UTC)
            move_unreleased: Move pending Unreleased entries into the release

        Returns:
            CreatedRelease describing what was written

        Raises:
            ReleaseExistsError: If the release directory already exists
            NotFoundError: If a prerelease's parent release does not exist
        """
        target = Released(version)
        directory = target.directory(self.changes_dir)

        if directory.exists():
            raise ReleaseExistsError(target.display_version, directory)

        if target.is_prerelease:
            parent = Released(version.release).directory(self.changes_dir)
            if not parent.is_dir():
                raise NotFoundError(
                    version.release,
                    f"Release {version.release} was not found. Create it before its prereleases."
                )

        info = ReleaseInfo(
            version=target.display_version,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self.store.write_info(directory, info)
        logger.info(f"Created release {info.version} at {directory}")

        created = CreatedRelease(info=info, directory=directory)
        if move_unreleased:
            created.moved_entries = self._move_unreleased(target)
        return created

    def _move_unreleased(self, target: Released) -> List[Path]:
        source = Unreleased().entries_directory(self.changes_dir)
        if not source.is_dir():
            return []

        entries = sorted(p for p in source.glob('*.yml') if p.is_file())
        if not entries:
            return []

        destination = target.entries_directory(self.changes_dir)
        destination.mkdir(parents=True, exist_ok=True)

        moved = []
        for entry in entries:
            new_path = destination / entry.name
            entry.replace(new_path)
            moved.append(new_path)

        logger.info(f"Moved {len(moved)} unreleased entries into {target}")
        return moved
