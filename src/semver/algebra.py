# src/semver/algebra.py - v1
"""Semantic version algebra: parse, format, compare, bump, sort.

Pure functions, no I/O. Malformed input raises ParseError and unknown bump
types raise InvalidBumpType; neither is ever downgraded to a default.
"""

from __future__ import annotations

import functools
import re
from typing import Iterable

from versionfusion.semver.models import (
    BumpType,
    ParseError,
    Version,
    _compare,
    is_valid_prerelease_identifier,
)

_SEMVER_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

# Lenient form for manifest strings: optional operator/v prefix, 1-3 parts.
_LOOSE_RE = re.compile(
    r"^\s*(?:[=v^~<>!]=?|~=|===)?\s*v?"
    r"(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-?(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
)

VersionLike = Version | str


def parse(text: str) -> Version:
    """Parse a strict semantic version string.

    Args:
        text: Version text, e.g. "1.2.3-beta.1+build.5".

    Returns:
        Parsed immutable Version.

    Raises:
        ParseError: If the text does not match the semver grammar.
    """
    if not isinstance(text, str):
        raise ParseError(f"Version must be a string, got {type(text).__name__}")
    match = _SEMVER_RE.match(text.strip())
    if not match:
        raise ParseError(f"Invalid semantic version: {text!r}")

    prerelease: tuple[str, ...] = ()
    if match.group("prerelease"):
        prerelease = tuple(match.group("prerelease").split("."))
        for identifier in prerelease:
            if not is_valid_prerelease_identifier(identifier):
                raise ParseError(
                    f"Invalid prerelease identifier {identifier!r} in {text!r}"
                )

    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=prerelease,
        build=match.group("build"),
    )


def coerce(text: str) -> Version:
    """Leniently recover a Version from manifest-style text.

    Accepts a leading operator or "v", and pads missing minor/patch parts
    with zeros: "^1.4" -> 1.4.0, "v2" -> 2.0.0, "==3.1.4" -> 3.1.4.

    Raises:
        ParseError: If no numeric version can be found.
    """
    if not isinstance(text, str):
        raise ParseError(f"Version must be a string, got {type(text).__name__}")
    match = _LOOSE_RE.match(text)
    if not match:
        raise ParseError(f"Cannot coerce {text!r} into a version")

    prerelease: tuple[str, ...] = ()
    raw_pre = match.group("prerelease")
    if raw_pre:
        prerelease = tuple(
            (p.lstrip("0") or "0") if p.isdigit() else p for p in raw_pre.split(".")
        )
    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor") or 0),
        patch=int(match.group("patch") or 0),
        prerelease=prerelease,
        build=match.group("build"),
    )


def is_valid(text: str) -> bool:
    """Whether text is a strict semantic version."""
    try:
        parse(text)
    except ParseError:
        return False
    return True


def format_version(version: Version) -> str:
    """Render a Version back to its canonical string form."""
    return str(version)


def ensure_version(value: VersionLike) -> Version:
    """Return value as a Version, parsing strings strictly."""
    return value if isinstance(value, Version) else parse(value)


def compare(a: VersionLike, b: VersionLike) -> int:
    """Compare two versions by semver precedence.

    Returns:
        -1 if a < b, 0 if equal precedence, 1 if a > b. Build metadata
        never participates.
    """
    return _compare(ensure_version(a), ensure_version(b))


def bump(
    version: VersionLike,
    bump_type: BumpType | str,
    prerelease_tag: str | None = None,
) -> Version:
    """Increment a version.

    major -> (M+1).0.0, minor -> M.(m+1).0, patch -> M.m.(p+1). Prerelease
    and build metadata are always cleared; prerelease_tag, when given, is
    appended to the result (e.g. "rc.1" -> 1.3.0-rc.1).

    Raises:
        InvalidBumpType: If bump_type is not patch, minor or major.
        ParseError: If version or prerelease_tag is malformed.
    """
    current = ensure_version(version)
    kind = BumpType.from_value(bump_type)

    if kind is BumpType.MAJOR:
        core = (current.major + 1, 0, 0)
    elif kind is BumpType.MINOR:
        core = (current.major, current.minor + 1, 0)
    else:
        core = (current.major, current.minor, current.patch + 1)

    prerelease: tuple[str, ...] = ()
    if prerelease_tag:
        prerelease = tuple(prerelease_tag.strip().lstrip("-").split("."))
        for identifier in prerelease:
            if not is_valid_prerelease_identifier(identifier):
                raise ParseError(f"Invalid prerelease tag: {prerelease_tag!r}")

    return Version(*core, prerelease=prerelease)


def sort_versions(
    versions: Iterable[VersionLike], ascending: bool = True
) -> list[Version]:
    """Sort versions by precedence (stable for equal precedence)."""
    parsed = [ensure_version(v) for v in versions]
    if ascending:
        return sorted(parsed, key=functools.cmp_to_key(_compare))
    # Negated comparator rather than reverse() so equal versions keep input order.
    return sorted(parsed, key=functools.cmp_to_key(lambda x, y: _compare(y, x)))


def latest(versions: Iterable[VersionLike]) -> Version | None:
    """Highest-precedence version, or None for an empty input."""
    ordered = sort_versions(versions, ascending=False)
    return ordered[0] if ordered else None


def oldest(versions: Iterable[VersionLike]) -> Version | None:
    """Lowest-precedence version, or None for an empty input."""
    ordered = sort_versions(versions, ascending=True)
    return ordered[0] if ordered else None


def is_stable(version: VersionLike) -> bool:
    """A stable version is >= 1.0.0 and carries no prerelease."""
    v = ensure_version(version)
    return v.major >= 1 and not v.prerelease


def is_prerelease(version: VersionLike) -> bool:
    return ensure_version(version).is_prerelease
