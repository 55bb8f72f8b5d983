# tests/unit/analyzers/test_dependency_diff.py - v1
"""Tests for analyzers/dependency_diff.py: manifest parsing and diffing."""

from __future__ import annotations

import logging

import pytest

from versionfusion.analyzers.dependency_diff import (
    ManifestParseError,
    classify_version_change,
    diff_dependencies,
    diff_manifests,
    manifest_parser,
    parse_cargo_toml,
    parse_go_mod,
    parse_package_json,
    parse_pyproject_toml,
    parse_requirements_txt,
)
from versionfusion.core.models import ManifestDelta


class TestParsers:
    def test_package_json_sections(self):
        deps = parse_package_json(
            '{"dependencies": {"react": "^18.2.0"}, "devDependencies": {"jest": "29.0.0"}}'
        )
        assert deps == {
            "react": ("dependencies", "^18.2.0"),
            "jest": ("devDependencies", "29.0.0"),
        }

    def test_package_json_invalid(self):
        with pytest.raises(ManifestParseError, match="package.json"):
            parse_package_json("{not json")

    def test_package_json_non_object(self):
        with pytest.raises(ManifestParseError):
            parse_package_json("[]")

    def test_package_json_section_not_an_object(self):
        with pytest.raises(ManifestParseError, match="package.json dependencies must be a table"):
            parse_package_json('{"dependencies": ["left-pad"]}')

    def test_pyproject_poetry_group_not_a_table(self):
        with pytest.raises(ManifestParseError, match="poetry group dev"):
            parse_pyproject_toml('[tool.poetry]\ngroup = { dev = "pytest" }\n')

    def test_pyproject_dependencies_not_strings(self):
        with pytest.raises(ManifestParseError, match="must be a string"):
            parse_pyproject_toml("[project]\ndependencies = [1, 2]\n")

    def test_requirements(self):
        text = (
            "# pinned\n"
            "requests>=2.28\n"
            "Flask_Login==0.6.3\n"
            "-r base.txt\n"
            "uvicorn[standard]>=0.23 ; python_version >= '3.11'\n"
        )
        deps = parse_requirements_txt(text)
        assert deps["requests"] == ("requirements", ">=2.28")
        assert deps["flask-login"] == ("requirements", "==0.6.3")
        assert deps["uvicorn"] == ("requirements", ">=0.23")
        assert len(deps) == 3

    def test_pyproject_pep621_and_poetry(self):
        text = """
[project]
dependencies = ["pydantic>=2.5"]

[project.optional-dependencies]
redis = ["redis>=5.0"]

[tool.poetry.dependencies]
python = "^3.11"
httpx = { version = "^0.27", extras = ["http2"] }

[tool.poetry.group.dev.dependencies]
pytest = "^8.0"
"""
        deps = parse_pyproject_toml(text)
        assert deps["pydantic"] == ("project", ">=2.5")
        assert deps["redis"] == ("optional:redis", ">=5.0")
        assert deps["httpx"] == ("poetry", "^0.27")
        assert deps["pytest"] == ("poetry-group:dev", "^8.0")
        assert "python" not in deps

    def test_pyproject_invalid(self):
        with pytest.raises(ManifestParseError, match="pyproject.toml"):
            parse_pyproject_toml("[project\n")

    def test_cargo(self):
        text = '[dependencies]\nserde = "1.0"\ntokio = { version = "1.28", features = ["full"] }\n'
        deps = parse_cargo_toml(text)
        assert deps == {
            "serde": ("dependencies", "1.0"),
            "tokio": ("dependencies", "1.28"),
        }

    def test_go_mod(self):
        text = (
            "module example.com/app\n\n"
            "go 1.21\n\n"
            "require (\n"
            "\tgithub.com/a/b v1.2.3\n"
            "\tgithub.com/c/d v0.4.0 // indirect\n"
            ")\n\n"
            "require github.com/e/f v2.0.0\n"
        )
        deps = parse_go_mod(text)
        assert deps == {
            "github.com/a/b": ("require", "v1.2.3"),
            "github.com/c/d": ("require", "v0.4.0"),
            "github.com/e/f": ("require", "v2.0.0"),
        }

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("web/package.json", parse_package_json),
            ("requirements-dev.txt", parse_requirements_txt),
            ("pyproject.toml", parse_pyproject_toml),
            ("crates/x/Cargo.toml", parse_cargo_toml),
            ("go.mod", parse_go_mod),
            ("Gemfile", None),
        ],
    )
    def test_manifest_parser(self, path, expected):
        assert manifest_parser(path) is expected


class TestClassifyVersionChange:
    @pytest.mark.parametrize(
        "before,after,expected",
        [
            ("^1.2.0", "^2.0.0", "major"),
            ("1.2.0", "1.3.0", "minor"),
            ("~1.2.3", "~1.2.4", "patch"),
            ("1.0.0-rc.1", "1.0.0", "patch"),
            ("1.0.0", "2.0.0-incompatible", "breaking"),
            ("latest", "next", "other"),
            ("1.0", "1.0.0", None),
            ("1.0.0", " 1.0.0 ", None),
        ],
    )
    def test_table(self, before, after, expected):
        assert classify_version_change(before, after) == expected


class TestDiff:
    def test_added_removed_and_updated(self):
        before = {"a": ("deps", "1.0.0"), "b": ("deps", "1.0.0")}
        after = {"a": ("deps", "2.0.0"), "c": ("deps", "0.1.0")}
        changes = {c.name: c for c in diff_dependencies(before, after, "package.json")}
        assert changes["a"].change_type == "major"
        assert changes["a"].from_version == "1.0.0"
        assert changes["b"].change_type == "removed"
        assert changes["c"].change_type == "added"
        assert changes["c"].manifest == "package.json"

    def test_unchanged_omitted(self):
        deps = {"a": ("deps", "1.0.0")}
        assert diff_dependencies(deps, dict(deps), "x") == []

    def test_diff_manifests_summary(self):
        deltas = [
            ManifestDelta(
                path="package.json",
                before='{"dependencies": {"react": "^17.0.0", "lodash": "4.17.0"}}',
                after='{"dependencies": {"react": "^18.0.0", "lodash": "4.17.21", "zod": "3.22.0"}}',
            ),
            ManifestDelta(path="requirements.txt", before=None, after="requests==2.31.0\n"),
        ]
        summary = diff_manifests(deltas)
        assert summary.manifests_analyzed == 2
        assert summary.has_major_updates
        assert summary.has_patch_updates
        assert summary.has_new_dependencies
        assert not summary.has_removed_dependencies
        assert len(summary.changes) == 4

    def test_bad_and_unsupported_manifests_skipped(self, caplog):
        deltas = [
            ManifestDelta(path="package.json", before="{", after="{}"),
            ManifestDelta(path="Gemfile", before="a", after="b"),
        ]
        with caplog.at_level(logging.WARNING):
            summary = diff_manifests(deltas)
        assert summary.manifests_analyzed == 0
        assert summary.is_empty
        assert "Skipping manifest package.json" in caplog.text

    def test_malformed_manifest_does_not_drop_valid_ones(self, caplog):
        deltas = [
            ManifestDelta(
                path="frontend/package.json",
                before='{"dependencies": {"react": "^17.0.0"}}',
                after='{"dependencies": ["react"]}',
            ),
            ManifestDelta(
                path="requirements.txt",
                before="django==4.2.0\n",
                after="django==5.0.0\n",
            ),
        ]
        with caplog.at_level(logging.WARNING):
            summary = diff_manifests(deltas)
        assert summary.manifests_analyzed == 1
        assert summary.has_major_updates
        assert [c.name for c in summary.changes] == ["django"]
        assert "Skipping manifest frontend/package.json" in caplog.text
