"""
Entry service for changes.

Writes new changelog entries into the Unreleased bucket or into an
existing release. Releases are never created here; targeting a release
that does not exist is an error.
"""

import logging
import uuid
from pathlib import Path
from typing import Union

from ..domain import ChangelogEntry, Released
from ..domain.target import Target
from ..errors import NotFoundError
from ..infra import write_yaml

logger = logging.getLogger(__name__)


class EntryService:
    """
    Service for adding changelog entries.

    Example:
        service = EntryService(Path(".changes"))
        target = target_for(Version.parse("1.2.0"))
        service.validate_target(target)
        path = service.add(ChangelogEntry(("Added",), "New flag"), target)
    """

    def __init__(self, changes_dir: Union[str, Path]):
        self.changes_dir = Path(changes_dir)

    def validate_target(self, target: Target) -> None:
        """
        Check that a release target exists.

        Raises:
            NotFoundError: If the release or prerelease directory is missing
        """
        if isinstance(target, Released) and not target.directory(self.changes_dir).is_dir():
            raise NotFoundError(
                target.display_version,
                f"Release {target.display_version} was not found."
            )

    def add(self, entry: ChangelogEntry, target: Target) -> Path:
        """
        Write an entry to a target.

        Args:
            entry: Entry to write
            target: Unreleased or a release

        Returns:
            Path of the written entry file
        """
        self.validate_target(target)

        entries_dir = target.entries_directory(self.changes_dir)
        path = entries_dir / f"{str(uuid.uuid4()).upper()}.yml"
        write_yaml(path, entry.to_dict())

        logger.debug(f"Wrote entry for {target} to {path}")
        return path
