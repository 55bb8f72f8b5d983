# src/analyzers/dependency_diff.py - v1
"""Manifest differ: turns before/after manifest text into a DependencyChangeSummary.

Supported manifests: package.json, requirements*.txt, pyproject.toml
(PEP 621 and Poetry tables), Cargo.toml and go.mod. Unknown or
unparsable manifests are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import PurePosixPath
from typing import Any, Callable

from versionfusion.core.models import (
    DependencyChange,
    DependencyChangeSummary,
    ManifestDelta,
)
from versionfusion.semver.algebra import coerce
from versionfusion.semver.models import ParseError

logger = logging.getLogger(__name__)

BREAKING_VERSION_INDICATORS = ("breaking", "incompatible")

# name -> (section, version spec)
Dependencies = dict[str, tuple[str, str]]


class ManifestParseError(ValueError):
    """Raised when a manifest cannot be parsed."""


# --- Parsers ---


def _expect_table(value: Any, where: str) -> dict[str, Any]:
    """A manifest section that must be a mapping; missing means empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestParseError(f"{where} must be a table, got {type(value).__name__}")
    return value


def _expect_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestParseError(f"{where} must be a list, got {type(value).__name__}")
    return value


def parse_package_json(text: str) -> Dependencies:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"invalid package.json: {e}") from e
    if not isinstance(data, dict):
        raise ManifestParseError("package.json root must be an object")
    deps: Dependencies = {}
    for section in (
        "dependencies",
        "devDependencies",
        "peerDependencies",
        "optionalDependencies",
    ):
        for name, spec in _expect_table(data.get(section), f"package.json {section}").items():
            deps[name] = (section, str(spec))
    return deps


_REQUIREMENT_RE = re.compile(
    r"^\s*(?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*(?P<spec>[^;#]*)"
)


def _normalize_python_name(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def _parse_requirement(line: str) -> tuple[str, str] | None:
    if not isinstance(line, str):
        raise ManifestParseError(f"requirement must be a string, got {type(line).__name__}")
    match = _REQUIREMENT_RE.match(line)
    if not match:
        return None
    spec = match.group("spec").strip().strip("()").strip()
    return _normalize_python_name(match.group("name")), spec


def parse_requirements_txt(text: str) -> Dependencies:
    deps: Dependencies = {}
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or line.startswith("-"):
            continue
        parsed = _parse_requirement(line)
        if parsed:
            deps[parsed[0]] = ("requirements", parsed[1])
    return deps


def _load_toml(text: str, manifest: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"invalid {manifest}: {e}") from e


def _table_spec(value: Any) -> str:
    if isinstance(value, dict):
        return str(value.get("version", ""))
    return str(value)


def parse_pyproject_toml(text: str) -> Dependencies:
    data = _load_toml(text, "pyproject.toml")
    deps: Dependencies = {}

    project = _expect_table(data.get("project"), "[project]")
    for requirement in _expect_list(project.get("dependencies"), "project.dependencies"):
        parsed = _parse_requirement(requirement)
        if parsed:
            deps[parsed[0]] = ("project", parsed[1])
    optional = _expect_table(project.get("optional-dependencies"), "project.optional-dependencies")
    for extra, requirements in optional.items():
        for requirement in _expect_list(requirements, f"optional-dependencies.{extra}"):
            parsed = _parse_requirement(requirement)
            if parsed:
                deps[parsed[0]] = (f"optional:{extra}", parsed[1])

    tool = _expect_table(data.get("tool"), "[tool]")
    poetry = _expect_table(tool.get("poetry"), "[tool.poetry]")
    tables: list[tuple[str, dict[str, Any]]] = [
        ("poetry", _expect_table(poetry.get("dependencies"), "poetry dependencies")),
        ("poetry-dev", _expect_table(poetry.get("dev-dependencies"), "poetry dev-dependencies")),
    ]
    for group, body in _expect_table(poetry.get("group"), "poetry groups").items():
        body = _expect_table(body, f"poetry group {group}")
        tables.append(
            (f"poetry-group:{group}", _expect_table(body.get("dependencies"), f"poetry group {group}"))
        )
    for section, table in tables:
        for name, value in table.items():
            if name.lower() == "python":
                continue
            deps[_normalize_python_name(name)] = (section, _table_spec(value))
    return deps


def parse_cargo_toml(text: str) -> Dependencies:
    data = _load_toml(text, "Cargo.toml")
    deps: Dependencies = {}
    for section in ("dependencies", "dev-dependencies", "build-dependencies"):
        for name, value in _expect_table(data.get(section), f"Cargo.toml {section}").items():
            deps[name] = (section, _table_spec(value))
    return deps


_GO_REQUIRE_LINE = re.compile(r"^\s*(?P<module>[^\s()]+)\s+(?P<version>v[^\s]+)")
_GO_REQUIRE_BLOCK = re.compile(r"^require\s*\($")


def parse_go_mod(text: str) -> Dependencies:
    deps: Dependencies = {}
    in_block = False
    for raw in text.splitlines():
        line = raw.split("//", 1)[0].strip()
        if not line:
            continue
        if in_block:
            if line == ")":
                in_block = False
                continue
            match = _GO_REQUIRE_LINE.match(line)
        elif _GO_REQUIRE_BLOCK.match(line):
            in_block = True
            continue
        elif line.startswith("require "):
            match = _GO_REQUIRE_LINE.match(line[len("require "):])
        else:
            continue
        if match:
            deps[match.group("module")] = ("require", match.group("version"))
    return deps


def manifest_parser(path: str) -> Callable[[str], Dependencies] | None:
    """Pick the parser for a manifest path, or None when unsupported."""
    name = PurePosixPath(path).name.lower()
    if name == "package.json":
        return parse_package_json
    if name.startswith("requirements") and name.endswith(".txt"):
        return parse_requirements_txt
    if name == "pyproject.toml":
        return parse_pyproject_toml
    if name == "cargo.toml":
        return parse_cargo_toml
    if name == "go.mod":
        return parse_go_mod
    return None


# --- Classification ---


def classify_version_change(before: str, after: str) -> str | None:
    """Classify a dependency spec change.

    Returns:
        "breaking", "major", "minor", "patch", "other", or None when the
        two specs are equivalent.
    """
    if before.strip() == after.strip():
        return None
    lowered = after.lower()
    if any(indicator in lowered for indicator in BREAKING_VERSION_INDICATORS):
        return "breaking"
    try:
        old = coerce(before)
        new = coerce(after)
    except ParseError:
        return "other"
    if old.major != new.major:
        return "major"
    if old.minor != new.minor:
        return "minor"
    if old.patch != new.patch or old.prerelease != new.prerelease:
        return "patch"
    return None


def diff_dependencies(
    before: Dependencies, after: Dependencies, manifest: str
) -> list[DependencyChange]:
    changes: list[DependencyChange] = []
    for name in sorted(set(before) | set(after)):
        if name not in before:
            section, spec = after[name]
            changes.append(
                DependencyChange(
                    name=name, change_type="added", to_version=spec,
                    manifest=manifest, section=section,
                )
            )
            continue
        if name not in after:
            section, spec = before[name]
            changes.append(
                DependencyChange(
                    name=name, change_type="removed", from_version=spec,
                    manifest=manifest, section=section,
                )
            )
            continue
        old_spec = before[name][1]
        section, new_spec = after[name]
        kind = classify_version_change(old_spec, new_spec)
        if kind is None:
            continue
        changes.append(
            DependencyChange(
                name=name, change_type=kind,  # type: ignore[arg-type]
                from_version=old_spec, to_version=new_spec,
                manifest=manifest, section=section,
            )
        )
    return changes


def diff_manifests(deltas: list[ManifestDelta]) -> DependencyChangeSummary:
    """Diff every supported manifest and summarise the changes."""
    changes: list[DependencyChange] = []
    analyzed = 0
    for delta in deltas:
        parser = manifest_parser(delta.path)
        if parser is None:
            logger.debug("Unsupported manifest skipped: %s", delta.path)
            continue
        try:
            before = parser(delta.before) if delta.before else {}
            after = parser(delta.after) if delta.after else {}
        except ManifestParseError as e:
            logger.warning("Skipping manifest %s: %s", delta.path, e)
            continue
        analyzed += 1
        changes.extend(diff_dependencies(before, after, delta.path))

    kinds = {c.change_type for c in changes}
    return DependencyChangeSummary(
        has_breaking_changes="breaking" in kinds,
        has_major_updates="major" in kinds,
        has_minor_updates="minor" in kinds,
        has_patch_updates="patch" in kinds,
        has_new_dependencies="added" in kinds,
        has_removed_dependencies="removed" in kinds,
        changes=changes,
        manifests_analyzed=analyzed,
    )
