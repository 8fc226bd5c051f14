"""
Version domain object for changes.

Semantic versions as used for release directories:
- Releases: "1.2.0"
- Prereleases: "1.2.0-beta.1", "2.0.0-rc.1+build.7"

Parsing is strict SemVer 2.0.0. Ordering follows SemVer precedence,
and build metadata never takes part in comparison or equality.
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple, Union


_NUMERIC = r"0|[1-9][0-9]*"
_PRERELEASE_IDENTIFIER = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_IDENTIFIER = r"[0-9a-zA-Z-]+"

_VERSION_RE = re.compile(
    rf"^(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_IDENTIFIER}(?:\.{_PRERELEASE_IDENTIFIER})*))?"
    rf"(?:\+(?P<build>{_BUILD_IDENTIFIER}(?:\.{_BUILD_IDENTIFIER})*))?$"
)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """
    Semantic version with SemVer 2.0.0 precedence.

    Examples:
        Version.parse("1.1.0")                -> Version(1, 1, 0)
        Version.parse("1.1.0-beta.1")         -> prerelease=("beta", "1")
        Version.parse("1.1.0-beta.1+exp.sha") -> build=("exp", "sha")

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Prerelease identifiers, empty for a release
        build: Build metadata identifiers, ignored for ordering
    """

    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, version_string: str) -> 'Version':
        """
        Parse a version string.

        Args:
            version_string: Text such as "1.2.3" or "1.2.3-rc.1+build.5"

        Returns:
            Parsed Version

        Raises:
            ValueError: If the string is not a valid semantic version
        """
        if not isinstance(version_string, str):
            raise ValueError(f"Version must be a string, got {type(version_string).__name__}")

        match = _VERSION_RE.match(version_string.strip())
        if match is None:
            raise ValueError(f"Invalid semantic version: {version_string!r}")

        prerelease = match.group('prerelease')
        build = match.group('build')
        return cls(
            major=int(match.group('major')),
            minor=int(match.group('minor')),
            patch=int(match.group('patch')),
            prerelease=tuple(prerelease.split('.')) if prerelease else (),
            build=tuple(build.split('.')) if build else (),
        )

    @classmethod
    def is_valid(cls, version_string: str) -> bool:
        """Check whether a string parses as a semantic version."""
        try:
            cls.parse(version_string)
        except ValueError:
            return False
        return True

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def release(self) -> 'Version':
        """The release line this version belongs to (major.minor.patch only)."""
        return Version(self.major, self.minor, self.patch)

    @property
    def without_build_metadata(self) -> 'Version':
        return Version(self.major, self.minor, self.patch, self.prerelease)

    def _precedence_key(self) -> tuple:
        # Numeric identifiers sort before alphanumeric ones, and a release
        # sorts after every prerelease of the same major.minor.patch.
        identifiers = tuple(
            (0, int(part), '') if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.major, self.minor, self.patch, not self.prerelease, identifiers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: 'Version') -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += '-' + '.'.join(self.prerelease)
        if self.build:
            text += '+' + '.'.join(self.build)
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"


def coerce_version(value: Union[str, Version]) -> Version:
    """Accept either a Version or its string form."""
    if isinstance(value, Version):
        return value
    return Version.parse(value)

