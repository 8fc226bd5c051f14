"""
Entry targets for changes.

An entry is written either to the Unreleased bucket or to a specific
release (or prerelease). Target resolves to its on-disk location in one
place so callers never rebuild the path rules themselves:

    Unreleased()                   -> .changes/Unreleased
    Released(1.2.0)                -> .changes/releases/1.2.0
    Released(1.2.0-beta.1+b5)      -> .changes/releases/1.2.0/1.2.0-beta.1
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .version import Version


UNRELEASED_DIR = 'Unreleased'
RELEASES_DIR = 'releases'
ENTRIES_DIR = 'entries'
INFO_FILE = 'info.yml'


def releases_directory(changes_dir: Path) -> Path:
    return Path(changes_dir) / RELEASES_DIR


@dataclass(frozen=True)
class Unreleased:
    """The default bucket for entries not yet assigned to a release."""

    def directory(self, changes_dir: Path) -> Path:
        return Path(changes_dir) / UNRELEASED_DIR

    def entries_directory(self, changes_dir: Path) -> Path:
        return self.directory(changes_dir)

    def __str__(self) -> str:
        return UNRELEASED_DIR


@dataclass(frozen=True)
class Released:
    """A release or prerelease directory."""

    version: Version

    @property
    def is_prerelease(self) -> bool:
        return self.version.is_prerelease

    @property
    def display_version(self) -> Version:
        """Version as named on disk (prereleases drop build metadata)."""
        if self.is_prerelease:
            return self.version.without_build_metadata
        return self.version.release

    def directory(self, changes_dir: Path) -> Path:
        release_dir = releases_directory(changes_dir) / str(self.version.release)
        if self.is_prerelease:
            return release_dir / str(self.version.without_build_metadata)
        return release_dir

    def entries_directory(self, changes_dir: Path) -> Path:
        return self.directory(changes_dir) / ENTRIES_DIR

    def __str__(self) -> str:
        return str(self.display_version)


Target = Union[Unreleased, Released]


def target_for(version: Union[Version, None]) -> Target:
    """Unreleased when no version is given, otherwise that release."""
    if version is None:
        return Unreleased()
    return Released(version)
