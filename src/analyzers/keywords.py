# src/analyzers/keywords.py - v1
"""Keyword tables shared by the text-reading analyzers."""

from __future__ import annotations

import re

from versionfusion.semver.models import BumpType

# Conventional commit type -> (bump, weight)
COMMIT_TYPES: dict[str, tuple[BumpType, float]] = {
    "feat": (BumpType.MINOR, 0.9),
    "fix": (BumpType.PATCH, 0.9),
    "perf": (BumpType.PATCH, 0.8),
    "security": (BumpType.PATCH, 0.8),
    "revert": (BumpType.PATCH, 0.6),
    "refactor": (BumpType.PATCH, 0.6),
    "build": (BumpType.PATCH, 0.5),
    "docs": (BumpType.PATCH, 0.5),
    "ci": (BumpType.PATCH, 0.4),
    "chore": (BumpType.PATCH, 0.4),
    "style": (BumpType.PATCH, 0.4),
    "test": (BumpType.PATCH, 0.4),
}

CONVENTIONAL_HEADER = re.compile(
    r"^(?P<type>[A-Za-z]+)"
    r"(?:\((?P<scope>[^)]*)\))?"
    r"(?P<bang>!)?"
    r":\s*(?P<description>\S.*)$"
)

BREAKING_PATTERN = re.compile(
    r"BREAKING[ -]CHANGE"
    r"|\bbreaking[ -]changes?\b"
    r"|\bbackwards?[ -]incompatible\b"
    r"|\bincompatible\b"
    r"|\bbreaks? (?:backward |backwards )?compatibility\b",
    re.IGNORECASE,
)

FEATURE_PATTERN = re.compile(
    r"\b(?:feat(?:ure)?s?|add(?:s|ed|ing)?|introduc(?:e|es|ed|ing)"
    r"|implement(?:s|ed|ing)?|new|support(?:s)? for)\b",
    re.IGNORECASE,
)

FIX_PATTERN = re.compile(
    r"\b(?:fix(?:es|ed|ing)?|bug(?:fix)?s?|hotfix|patch(?:es|ed)?"
    r"|resolv(?:e|es|ed|ing)|correct(?:s|ed|ing)?|repair(?:s|ed)?|crash(?:es)?)\b",
    re.IGNORECASE,
)

# Rule-based analyzer vocabulary, checked in this order.
RULE_BREAKING_PATTERN = re.compile(
    r"\bbreaking(?: change)?\b|\bincompatible\b|\bdeprecat\w*"
    r"|\bremov(?:e|es|ed|al)\b|\bdelet(?:e|es|ed|ion)\b"
    r"|\bmajor change\b|\bapi change\b|\binterface change\b",
    re.IGNORECASE,
)
RULE_FIX_PATTERN = re.compile(r"\bfix\w*|\bbug\w*", re.IGNORECASE)
RULE_FEATURE_PATTERN = re.compile(r"\bfeat\w*|\badd\w*", re.IGNORECASE)
RULE_REFACTOR_PATTERN = re.compile(r"\brefactor\w*", re.IGNORECASE)

TASK_TYPE_BUMPS: dict[str, BumpType] = {
    "feature": BumpType.MINOR,
    "refactor": BumpType.MINOR,
    "optimization": BumpType.MINOR,
    "bug": BumpType.PATCH,
    "bugfix": BumpType.PATCH,
    "hotfix": BumpType.PATCH,
    "docs": BumpType.PATCH,
    "documentation": BumpType.PATCH,
    "test": BumpType.PATCH,
    "testing": BumpType.PATCH,
    "chore": BumpType.PATCH,
    "analysis": BumpType.PATCH,
}

# Hybrid fallback vocabulary (plain substring checks on lowercased text).
FALLBACK_BREAKING_KEYWORDS = ("breaking", "major", "api change")
FALLBACK_FEATURE_KEYWORDS = ("feature", "new", "add")
