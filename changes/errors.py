"""
Error taxonomy for changes.

- DecodeError: a metadata file is missing or does not match the schema
- AggregationError: at least one concurrent release load failed
- NotFoundError: a requested version has no release directory
- ReleaseExistsError: a release to be created is already on disk

All of them are fatal to the operation that raised them; there is no
partial-success mode.
"""

from pathlib import Path
from typing import Optional, Union


class ChangesError(Exception):
    """Base class for errors raised by changes."""


class DecodeError(ChangesError):
    """A required metadata file is missing or fails to decode."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not decode {self.path}: {reason}")


class AggregationError(ChangesError):
    """
    Raised when loading releases concurrently failed.

    Exactly one underlying DecodeError is reported (also available as
    ``__cause__``). When several loads fail at once, which one is
    reported is not deterministic.
    """

    def __init__(self, error: DecodeError, failed: int = 1):
        self.error = error
        self.failed = failed
        message = f"Failed to load releases: {error}"
        if failed > 1:
            message += f" (and {failed - 1} more)"
        super().__init__(message)


class NotFoundError(ChangesError):
    """An explicitly requested version has no matching release."""

    def __init__(self, version, message: Optional[str] = None):
        self.version = version
        super().__init__(message or f'Version "{version}" was not found')


class ReleaseExistsError(ChangesError):
    """The release being created already exists."""

    def __init__(self, version, path: Union[str, Path]):
        self.version = version
        self.path = Path(path)
        super().__init__(f'Release "{version}" already exists at {self.path}')
