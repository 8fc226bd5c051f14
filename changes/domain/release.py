"""
Release domain objects for changes.

ReleaseInfo is the decoded content of an ``info.yml`` file. A
ReleaseRecord groups a release with the prereleases stored beneath it,
and the *QueryItem classes are the output projections handed back to
query callers.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Mapping, Tuple
import json

from .version import Version


# Older stores wrote the timestamp under this key
LEGACY_CREATED_AT_KEY = 'createdAtDate'


def parse_timestamp(value: Any) -> datetime:
    """
    Convert a decoded YAML value into a datetime.

    Accepts a datetime (YAML timestamp), a date (YAML date, taken as
    midnight UTC) or an ISO-8601 string.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        return datetime.fromisoformat(value.strip())
    raise ValueError(f"Invalid timestamp: {value!r}")


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


@dataclass(frozen=True)
class ReleaseInfo:
    """
    Metadata for one release or prerelease.

    Attributes:
        version: Release version
        created_at: When the release was created
    """

    version: Version
    created_at: datetime

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ReleaseInfo':
        """
        Build from a decoded info mapping.

        Raises:
            ValueError: If a field is missing or invalid
        """
        if 'version' not in data:
            raise ValueError("missing field 'version'")
        version = Version.parse(str(data['version']))

        if 'createdAt' in data:
            created_at = data['createdAt']
        elif LEGACY_CREATED_AT_KEY in data:
            created_at = data[LEGACY_CREATED_AT_KEY]
        else:
            raise ValueError("missing field 'createdAt'")

        return cls(version=version, created_at=parse_timestamp(created_at))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': str(self.version),
            'createdAt': format_timestamp(self.created_at),
        }


@dataclass(frozen=True)
class ReleaseRecord:
    """A release together with its (unordered) prereleases."""

    release: ReleaseInfo
    prereleases: Tuple[ReleaseInfo, ...] = ()

    @property
    def version(self) -> Version:
        return self.release.version


@dataclass(frozen=True)
class PrereleaseQueryItem:
    """Query output for a single prerelease."""

    version: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'createdAt': format_timestamp(self.created_at),
        }


@dataclass(frozen=True)
class ReleaseQueryItem:
    """
    Query output for a release.

    Prereleases are ordered newest first by the assembler; the item
    itself is never mutated after creation.
    """

    version: str
    created_at: datetime
    prereleases: Tuple[PrereleaseQueryItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'version': self.version,
            'createdAt': format_timestamp(self.created_at),
            'prereleases': [p.to_dict() for p in self.prereleases],
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        return self.version
