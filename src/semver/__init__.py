"""Semantic version algebra: pure functions over immutable Version values."""

from versionfusion.semver.algebra import (
    bump,
    coerce,
    compare,
    format_version,
    is_prerelease,
    is_stable,
    is_valid,
    latest,
    oldest,
    parse,
    sort_versions,
)
from versionfusion.semver.models import (
    BumpType,
    InvalidBumpType,
    ParseError,
    Version,
    VersionAlgebraError,
)
from versionfusion.semver.ranges import satisfies_range

__all__ = [
    "BumpType",
    "InvalidBumpType",
    "ParseError",
    "Version",
    "VersionAlgebraError",
    "bump",
    "coerce",
    "compare",
    "format_version",
    "is_prerelease",
    "is_stable",
    "is_valid",
    "latest",
    "oldest",
    "parse",
    "satisfies_range",
    "sort_versions",
]
