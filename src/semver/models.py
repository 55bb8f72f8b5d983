# src/semver/models.py - v1
"""Version algebra value types: BumpType, Version and algebra errors.

Version is immutable; instances normally come from parse(), coerce() or
bump() in semver/algebra.py. Direct construction validates the same
invariants so an invalid Version can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_NUMERIC_ID = re.compile(r"^(0|[1-9]\d*)$")
_ALNUM_ID = re.compile(r"^[0-9A-Za-z-]+$")


class VersionAlgebraError(ValueError):
    """Base class for version algebra input errors."""


class ParseError(VersionAlgebraError):
    """Raised when a version string or range expression is malformed."""


class InvalidBumpType(VersionAlgebraError):
    """Raised when a bump type is not one of patch, minor, major."""


class BumpType(str, Enum):
    """Magnitude of a version increment, ordered patch < minor < major."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self.value]

    @classmethod
    def from_value(cls, value: BumpType | str) -> BumpType:
        """Coerce a string (case-insensitive) into a BumpType.

        Raises:
            InvalidBumpType: If the value names no known bump type.
        """
        if isinstance(value, BumpType):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidBumpType(
            f"Invalid bump type: {value!r}. Expected one of: patch, minor, major"
        )

    # str-mixin enums compare lexically by default; order by magnitude instead.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.ordinal >= other.ordinal

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value


_ORDINALS = {"patch": 1, "minor": 2, "major": 3}


def is_valid_prerelease_identifier(identifier: str) -> bool:
    """Numeric identifiers must not carry leading zeros; others are [0-9A-Za-z-]+."""
    if not identifier or not _ALNUM_ID.match(identifier):
        return False
    if identifier.isdigit():
        return bool(_NUMERIC_ID.match(identifier))
    return True


def is_valid_build_identifier(identifier: str) -> bool:
    return bool(identifier) and bool(_ALNUM_ID.match(identifier))


@dataclass(frozen=True)
class Version:
    """Semantic version MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD].

    Ordering operators follow compare(); build metadata is ignored for
    ordering but kept for equality and formatting.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: str | None = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ParseError(f"{name} must be a non-negative integer, got {value!r}")
        if not isinstance(self.prerelease, tuple):
            object.__setattr__(self, "prerelease", tuple(self.prerelease))
        for identifier in self.prerelease:
            if not is_valid_prerelease_identifier(identifier):
                raise ParseError(f"Invalid prerelease identifier: {identifier!r}")
        if self.build is not None:
            if not all(is_valid_build_identifier(p) for p in self.build.split(".")):
                raise ParseError(f"Invalid build metadata: {self.build!r}")

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + self.build
        return text

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) >= 0


def _compare_identifiers(left: str, right: str) -> int:
    left_numeric = left.isdigit()
    right_numeric = right.isdigit()
    if left_numeric and right_numeric:
        a, b = int(left), int(right)
    elif left_numeric:
        return -1
    elif right_numeric:
        return 1
    else:
        a, b = left, right  # type: ignore[assignment]
    if a == b:
        return 0
    return -1 if a < b else 1


def _compare(a: Version, b: Version) -> int:
    """Precedence comparison of two Versions, returning -1, 0 or 1."""
    if a.core != b.core:
        return -1 if a.core < b.core else 1

    if not a.prerelease and not b.prerelease:
        return 0
    # A release ranks above any of its prereleases.
    if not a.prerelease:
        return 1
    if not b.prerelease:
        return -1

    for left, right in zip(a.prerelease, b.prerelease):
        result = _compare_identifiers(left, right)
        if result:
            return result

    if len(a.prerelease) == len(b.prerelease):
        return 0
    return -1 if len(a.prerelease) < len(b.prerelease) else 1
