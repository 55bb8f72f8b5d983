# src/semver/ranges.py - v1
"""Range expressions over semantic versions.

Supported forms:
  - exact:        "1.2.3" or "=1.2.3"
  - comparators:  ">=1.2.3", ">1.2.3", "<=1.2.3", "<1.2.3"
  - tilde:        "~1.2.3"  ==  ">=1.2.3 <1.3.0"
  - caret:        "^1.2.3"  ==  ">=1.2.3 <2.0.0"
  - wildcard:     "*", "x" or an empty expression match everything

Whitespace-separated comparators are ANDed; "||" separates alternatives.
Partial operands ("1.2") are zero-padded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from versionfusion.semver.algebra import VersionLike, coerce, ensure_version
from versionfusion.semver.models import ParseError, Version, _compare

_COMPARATOR_RE = re.compile(r"^(>=|<=|>|<|=|~|\^)?\s*v?(\d+(?:\.\d+){0,2}(?:[-+][0-9A-Za-z.+-]+)?)$")


@dataclass(frozen=True)
class Comparator:
    """A single primitive constraint: operator + bound."""

    operator: str
    bound: Version

    def matches(self, version: Version) -> bool:
        result = _compare(version, self.bound)
        if self.operator == ">=":
            return result >= 0
        if self.operator == ">":
            return result > 0
        if self.operator == "<=":
            return result <= 0
        if self.operator == "<":
            return result < 0
        return result == 0


def _expand(token: str) -> list[Comparator]:
    """Expand one range token into primitive comparators."""
    match = _COMPARATOR_RE.match(token)
    if not match:
        raise ParseError(f"Invalid range comparator: {token!r}")
    operator = match.group(1) or "="
    try:
        bound = coerce(match.group(2))
    except ParseError as exc:
        raise ParseError(f"Invalid range operand in {token!r}: {exc}") from exc

    if operator == "~":
        upper = Version(bound.major, bound.minor + 1, 0)
        return [Comparator(">=", bound), Comparator("<", upper)]
    if operator == "^":
        upper = Version(bound.major + 1, 0, 0)
        return [Comparator(">=", bound), Comparator("<", upper)]
    return [Comparator(operator, bound)]


def _tokenize(alternative: str) -> list[str]:
    # Glue detached operators to their operand: ">= 1.2.3" -> ">=1.2.3".
    raw = alternative.split()
    tokens: list[str] = []
    pending = ""
    for part in raw:
        if part in (">=", "<=", ">", "<", "=", "~", "^"):
            pending += part
            continue
        tokens.append(pending + part)
        pending = ""
    if pending:
        raise ParseError(f"Dangling operator in range: {alternative!r}")
    return tokens


def parse_range(range_expr: str) -> list[list[Comparator]]:
    """Parse a range into OR-alternatives of AND-ed comparators.

    An empty list inside the result means "matches everything".

    Raises:
        ParseError: If any comparator is malformed.
    """
    if not isinstance(range_expr, str):
        raise ParseError(f"Range must be a string, got {type(range_expr).__name__}")

    alternatives: list[list[Comparator]] = []
    for alternative in range_expr.split("||"):
        alternative = alternative.strip()
        if alternative in ("", "*", "x", "X"):
            alternatives.append([])
            continue
        comparators: list[Comparator] = []
        for token in _tokenize(alternative):
            comparators.extend(_expand(token))
        alternatives.append(comparators)
    return alternatives


def satisfies_range(version: VersionLike, range_expr: str) -> bool:
    """Whether version falls inside range_expr.

    Raises:
        ParseError: If version or range_expr is malformed.
    """
    target = ensure_version(version)
    return any(
        all(c.matches(target) for c in comparators)
        for comparators in parse_range(range_expr)
    )
