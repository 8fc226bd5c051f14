"""
Release metadata store for changes.

Reads release metadata from the on-disk layout:

    <releases>/<release>/info.yml
    <releases>/<release>/<prerelease>/info.yml

Only sub-directories whose names are valid versions count as
prereleases; ``entries/`` and anything else is ignored. Reading never
creates or modifies anything.
"""

from pathlib import Path
from typing import List, Union

import yaml

from ..domain import ReleaseInfo, ReleaseRecord, Version
from ..domain.target import INFO_FILE
from ..errors import DecodeError
from .file_store import read_yaml, write_yaml


def _subdirectories(directory: Path) -> List[Path]:
    return sorted(
        p for p in directory.iterdir()
        if p.is_dir() and not p.name.startswith('.')
    )


class ReleaseStore:
    """
    Read access to the releases directory.

    Example:
        store = ReleaseStore(Path(".changes/releases"))
        for directory in store.release_directories():
            record = store.load_release(directory)
            print(record.release.version, len(record.prereleases))
    """

    def __init__(self, root: Union[str, Path]):
        """
        Initialize ReleaseStore.

        Args:
            root: The releases directory (it does not need to exist)
        """
        self.root = Path(root)

    def release_directories(self) -> List[Path]:
        """
        List release directories.

        A missing root is an empty store, not an error.
        """
        if not self.root.is_dir():
            return []
        return _subdirectories(self.root)

    def read_info(self, directory: Path) -> ReleaseInfo:
        """
        Decode ``info.yml`` in a directory.

        Raises:
            DecodeError: If the file is missing, unreadable or malformed
        """
        path = Path(directory) / INFO_FILE
        try:
            data = read_yaml(path)
        except FileNotFoundError:
            raise DecodeError(path, "file not found")
        except OSError as e:
            raise DecodeError(path, str(e)) from e
        except yaml.YAMLError as e:
            raise DecodeError(path, f"invalid YAML: {e}") from e
        except ValueError as e:
            # Undecodable bytes, or a YAML timestamp that is not a real date
            raise DecodeError(path, str(e)) from e

        if not isinstance(data, dict):
            raise DecodeError(path, "expected a mapping with 'version' and 'createdAt'")

        try:
            return ReleaseInfo.from_dict(data)
        except ValueError as e:
            raise DecodeError(path, str(e)) from e

    def load_release(self, directory: Union[str, Path]) -> ReleaseRecord:
        """
        Load a release and its prereleases.

        Args:
            directory: Release directory

        Returns:
            ReleaseRecord with unsorted prereleases

        Raises:
            DecodeError: If any required info file is missing or malformed,
                or a prerelease belongs to a different release line
        """
        directory = Path(directory)
        release = self.read_info(directory)

        try:
            candidates = [p for p in _subdirectories(directory) if Version.is_valid(p.name)]
        except OSError as e:
            raise DecodeError(directory, str(e)) from e

        prereleases = []
        for candidate in candidates:
            prerelease = self.read_info(candidate)
            if prerelease.version.release != release.version.release:
                raise DecodeError(
                    candidate / INFO_FILE,
                    f"prerelease {prerelease.version} does not belong to release {release.version}"
                )
            prereleases.append(prerelease)

        return ReleaseRecord(release=release, prereleases=tuple(prereleases))

    def write_info(self, directory: Union[str, Path], info: ReleaseInfo) -> Path:
        """Write ``info.yml`` for a release, creating the directory."""
        path = Path(directory) / INFO_FILE
        write_yaml(path, info.to_dict())
        return path
