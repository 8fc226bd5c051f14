"""
Query model for changes.

A query selects releases by version. Exactly one variant is used per
call:

    AllReleases()                              every release
    ExplicitVersions((v1, v2), True)           v1, v2, plus latest
    RangeQuery(VersionRange.closed(a, b))      a <= v <= b
    FromVersionToLatest(a)                     a <= v <= latest

Every range shape (closed, half-open, at-least, below, through) is a
VersionRange with optional, independently inclusive bounds.

Query expressions on the command line use the range notation:

    1.0.0...2.0.0    closed
    1.0.0..<2.0.0    half-open
    1.0.0...         at least
    ..<2.0.0         below
    ...2.0.0         through
    1.0.0...latest   from version to latest
    1.0.0 1.1.0      explicit versions ("latest" may be listed too)
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .version import Version


LATEST = 'latest'

_CLOSED = '...'
_HALF_OPEN = '..<'


@dataclass(frozen=True)
class VersionBound:
    """One end of a version range."""

    version: Version
    inclusive: bool = True


@dataclass(frozen=True)
class VersionRange:
    """
    Version range with optional lower and upper bounds.

    A missing bound is unbounded on that side. A range whose lower
    bound exceeds its upper bound simply contains nothing.
    """

    lower: Optional[VersionBound] = None
    upper: Optional[VersionBound] = None

    @classmethod
    def closed(cls, lower: Version, upper: Version) -> 'VersionRange':
        return cls(VersionBound(lower, True), VersionBound(upper, True))

    @classmethod
    def half_open(cls, lower: Version, upper: Version) -> 'VersionRange':
        return cls(VersionBound(lower, True), VersionBound(upper, False))

    @classmethod
    def at_least(cls, lower: Version) -> 'VersionRange':
        return cls(lower=VersionBound(lower, True))

    @classmethod
    def below(cls, upper: Version) -> 'VersionRange':
        return cls(upper=VersionBound(upper, False))

    @classmethod
    def through(cls, upper: Version) -> 'VersionRange':
        return cls(upper=VersionBound(upper, True))

    def contains(self, version: Version) -> bool:
        if self.lower is not None:
            if self.lower.inclusive:
                if version < self.lower.version:
                    return False
            elif version <= self.lower.version:
                return False

        if self.upper is not None:
            if self.upper.inclusive:
                if version > self.upper.version:
                    return False
            elif version >= self.upper.version:
                return False

        return True

    def __contains__(self, version: Version) -> bool:
        return self.contains(version)

    def __str__(self) -> str:
        lower = str(self.lower.version) if self.lower else ''
        upper = str(self.upper.version) if self.upper else ''
        if self.lower is not None and not self.lower.inclusive:
            lower = f"({lower}"
        operator = _CLOSED if self.upper is None or self.upper.inclusive else _HALF_OPEN
        return f"{lower}{operator}{upper}"


@dataclass(frozen=True)
class AllReleases:
    """Select every release."""


@dataclass(frozen=True)
class ExplicitVersions:
    """Select exactly the listed versions, optionally adding latest."""

    versions: Tuple[Version, ...] = ()
    include_latest: bool = False


@dataclass(frozen=True)
class RangeQuery:
    """Select releases inside a version range."""

    range: VersionRange


@dataclass(frozen=True)
class FromVersionToLatest:
    """Select releases from ``start`` up to and including latest."""

    start: Version


Query = Union[AllReleases, ExplicitVersions, RangeQuery, FromVersionToLatest]


def _parse_version(text: str) -> Version:
    try:
        return Version.parse(text)
    except ValueError as e:
        raise ValueError(f"{e} in query expression") from e


def _parse_range(expression: str) -> Query:
    if _HALF_OPEN in expression:
        lower_text, upper_text = expression.split(_HALF_OPEN, 1)
        if not upper_text:
            raise ValueError(f"Half-open range needs an upper bound: {expression!r}")
        upper = _parse_version(upper_text)
        if not lower_text:
            return RangeQuery(VersionRange.below(upper))
        return RangeQuery(VersionRange.half_open(_parse_version(lower_text), upper))

    lower_text, upper_text = expression.split(_CLOSED, 1)
    if not lower_text and not upper_text:
        raise ValueError("Range needs at least one bound")
    if not lower_text:
        if upper_text == LATEST:
            return AllReleases()
        return RangeQuery(VersionRange.through(_parse_version(upper_text)))
    lower = _parse_version(lower_text)
    if not upper_text:
        return RangeQuery(VersionRange.at_least(lower))
    if upper_text == LATEST:
        return FromVersionToLatest(lower)
    return RangeQuery(VersionRange.closed(lower, _parse_version(upper_text)))


def parse_query(expressions: Sequence[str]) -> Query:
    """
    Parse command-line query expressions.

    Args:
        expressions: Zero or more expressions (see module docstring)

    Returns:
        The query variant the expressions describe

    Raises:
        ValueError: On an invalid version or a malformed expression
    """
    expressions = [e.strip() for e in expressions if e and e.strip()]
    if not expressions:
        return AllReleases()

    ranges = [e for e in expressions if _CLOSED in e or _HALF_OPEN in e]
    if ranges:
        if len(expressions) > 1:
            raise ValueError("A range must be the only query expression")
        return _parse_range(ranges[0])

    include_latest = False
    versions = []
    for expression in expressions:
        if expression.lower() == LATEST:
            include_latest = True
        else:
            versions.append(_parse_version(expression))
    return ExplicitVersions(tuple(versions), include_latest)
