"""Semantic version parsing and ordering on top of the ``semver`` library.

Versions follow ``MAJOR.MINOR.PATCH[-PRE][+BUILD]``. Numeric fields with
leading zeros are rejected. Build metadata is kept so a version prints the
way it was published, but it never takes part in ordering or equality.
"""
from enum import Enum

import semver
from semver import Version

__all__ = ["Ordering", "ParseError", "Version", "compare", "is_pre_release", "parse"]


class ParseError(ValueError):
    """Raised when a string is not a valid semantic version."""


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of(cls, value: int) -> "Ordering":
        if value < 0:
            return cls.LESS
        if value > 0:
            return cls.GREATER
        return cls.EQUAL


def parse(text: str) -> Version:
    """Parse ``text`` into a :class:`semver.Version`.

    :raises ParseError: when ``text`` is not ``MAJOR.MINOR.PATCH[-PRE][+BUILD]``.
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected a version string, got {type(text).__name__}")

    text = text.strip()
    # semver's pattern uses \d, which also matches non-ASCII digits
    if not text.isascii():
        raise ParseError(f"Invalid version: {text!r}")

    try:
        return semver.Version.parse(text)
    except ValueError as e:
        raise ParseError(f"Invalid version: {text!r}") from e


def compare(a: Version, b: Version) -> Ordering:
    return Ordering.of(a.compare(b))


def is_pre_release(version: Version) -> bool:
    return bool(version.prerelease)
