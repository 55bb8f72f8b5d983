# src/analyzers/code_analyzer.py - v1
"""Code-diff analyzer.

Inspects changed source files: the unified diff when present (added and
removed lines only), else the supplied content, else the file on disk
under context.project_path. Public symbol declarations mark API changes;
removed public symbols and breaking/deprecation markers mark breaking
changes.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.core.models import (
    AnalysisContext,
    AnalyzerId,
    ChangedFile,
    ChangeEvidence,
    CodeAnalysisResult,
)
from versionfusion.semver.models import BumpType

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".py", ".js", ".jsx", ".ts", ".tsx", ".mjs", ".go", ".rs",
    ".java", ".kt", ".cs", ".rb", ".php", ".swift", ".c", ".h", ".cpp", ".hpp",
)

_PY_EXPORT = re.compile(r"^(?:async\s+)?(?:def|class)\s+([A-Za-z]\w*)")
_JS_EXPORT = re.compile(
    r"^\s*export\s+(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?"
    r"(?:function\*?|class|const|let|var|interface|type|enum)\s+([A-Za-z_$][\w$]*)"
)
_GO_EXPORT = re.compile(r"^(?:func\s+(?:\([^)]*\)\s*)?|type\s+|var\s+|const\s+)([A-Z]\w*)")
_RUST_EXPORT = re.compile(
    r"^\s*pub\s+(?:async\s+)?(?:unsafe\s+)?(?:fn|struct|enum|trait|type|mod|const|static)\s+(\w+)"
)
_JVM_EXPORT = re.compile(
    r"^\s*(?:public\s+(?:[\w<>\[\],?]+\s+)*?(\w+)\s*[({<]"
    r"|(?:public\s+)?fun\s+(?:<[^>]*>\s*)?(?:[\w.]+\.)?(\w+)\s*\()"
)

_EXPORT_PATTERNS: dict[str, re.Pattern[str]] = {
    ".py": _PY_EXPORT,
    ".js": _JS_EXPORT,
    ".jsx": _JS_EXPORT,
    ".ts": _JS_EXPORT,
    ".tsx": _JS_EXPORT,
    ".mjs": _JS_EXPORT,
    ".go": _GO_EXPORT,
    ".rs": _RUST_EXPORT,
    ".java": _JVM_EXPORT,
    ".kt": _JVM_EXPORT,
    ".cs": _JVM_EXPORT,
}

_BREAKING_MARKER = re.compile(r"BREAKING[ -]CHANGE|@breaking\b", re.IGNORECASE)
_DEPRECATION_MARKER = re.compile(
    r"@deprecated\b|\bDeprecationWarning\b|#\[deprecated|\[Obsolete\b|\bdeprecated\s*\(",
    re.IGNORECASE,
)
_FEATURE_PHRASE = re.compile(
    r"\bnew feature\b|\bfeat(?:ure)?:|\badd(?:s|ed)? support\b|\bintroduc(?:e|es|ed)\b",
    re.IGNORECASE,
)
_FIX_PHRASE = re.compile(
    r"\bfix(?:es|ed)?\b|\bbug\b|\bworkaround\b|\bhotfix\b|\bresolve[sd]?\b",
    re.IGNORECASE,
)


@dataclass
class FileSignals:
    """Signals detected in a single file."""

    path: str
    added_exports: set[str] = field(default_factory=set)
    removed_exports: set[str] = field(default_factory=set)
    breaking: bool = False
    deprecation: bool = False
    feature: bool = False
    fix: bool = False

    @property
    def api_change(self) -> bool:
        return bool(self.added_exports or self.removed_exports)

    @property
    def removed_public_symbols(self) -> set[str]:
        # A symbol removed and re-added in the same diff was only modified.
        return self.removed_exports - self.added_exports


def split_diff(diff: str) -> tuple[list[str], list[str]]:
    """Return (added, removed) line bodies of a unified diff."""
    added: list[str] = []
    removed: list[str] = []
    for line in diff.splitlines():
        if line.startswith(("+++", "---")):
            continue
        if line.startswith("+"):
            added.append(line[1:])
        elif line.startswith("-"):
            removed.append(line[1:])
    return added, removed


def _exports(lines: list[str], pattern: re.Pattern[str] | None) -> set[str]:
    if pattern is None:
        return set()
    found: set[str] = set()
    for line in lines:
        match = pattern.match(line)
        if match:
            name = next((g for g in match.groups() if g), None)
            if name:
                found.add(name)
    return found


def inspect_lines(
    path: str, added: list[str], removed: list[str]
) -> FileSignals:
    """Detect signals in the added/removed lines of one file."""
    pattern = _EXPORT_PATTERNS.get(PurePosixPath(path).suffix.lower())
    signals = FileSignals(
        path=path,
        added_exports=_exports(added, pattern),
        removed_exports=_exports(removed, pattern),
    )
    added_text = "\n".join(added)
    signals.deprecation = bool(_DEPRECATION_MARKER.search(added_text))
    signals.breaking = (
        bool(_BREAKING_MARKER.search(added_text))
        or bool(signals.removed_public_symbols)
        or signals.deprecation
    )
    signals.feature = bool(_FEATURE_PHRASE.search(added_text))
    signals.fix = bool(_FIX_PHRASE.search(added_text))
    return signals


class CodeChangeAnalyzer(BaseAnalyzer):
    """Recommends a bump from the content of changed source files."""

    def __init__(self, source_extensions: list[str] | tuple[str, ...] | None = None) -> None:
        exts = source_extensions or DEFAULT_SOURCE_EXTENSIONS
        self._extensions = frozenset(e.lower() for e in exts)

    @property
    def source(self) -> AnalyzerId:
        return AnalyzerId.CODE

    @property
    def fallback_factor(self) -> str:
        return "code-analysis-fallback"

    def is_source_file(self, path: str) -> bool:
        return PurePosixPath(path).suffix.lower() in self._extensions

    async def _analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> CodeAnalysisResult:
        if not evidence.changed_files:
            return self.missing_input_result("changed-files")  # type: ignore[return-value]

        inspected: list[FileSignals] = []
        for changed in evidence.changed_files:
            if not self.is_source_file(changed.path):
                continue
            signals = await self._inspect_file(changed, context.project_path)
            if signals is not None:
                inspected.append(signals)

        if not inspected:
            return self.missing_input_result("source-files")  # type: ignore[return-value]

        has_breaking = any(s.breaking for s in inspected)
        has_deprecation = any(s.deprecation for s in inspected)
        has_api = any(s.api_change for s in inspected)
        has_feature = any(s.feature for s in inspected)
        has_fix = any(s.fix for s in inspected)

        factors = {"code-analysis"}
        if has_breaking:
            factors.add("breaking-change")
        if has_deprecation:
            factors.add("deprecation")
        if has_api:
            factors.add("api-change")
        if has_feature:
            factors.add("new-feature")
        if has_fix:
            factors.add("bug-fix")

        if has_breaking:
            recommended = BumpType.MAJOR
        elif has_api or has_feature:
            recommended = BumpType.MINOR
        else:
            recommended = BumpType.PATCH

        categories = sum((has_breaking, has_api, has_feature, has_fix))
        confidence = 0.3 + 0.15 * categories + min(0.05 * len(inspected), 0.2)

        return CodeAnalysisResult(
            recommended_type=recommended,
            confidence=min(confidence, 1.0),
            reasoning=f"Found {len(inspected)} modified files.",
            factors=frozenset(factors),
            source=self.source,
            has_breaking_changes=has_breaking,
            has_api_changes=has_api,
            has_new_features=has_feature,
            has_bug_fixes=has_fix,
            has_deprecations=has_deprecation,
            modified_files=[s.path for s in inspected],
        )

    async def _inspect_file(
        self, changed: ChangedFile, project_path: Path | None
    ) -> FileSignals | None:
        if changed.diff:
            added, removed = split_diff(changed.diff)
            return inspect_lines(changed.path, added, removed)

        content = changed.content
        if content is None and project_path is not None:
            content = await asyncio.to_thread(_read_source, project_path, changed.path)
        if content is None:
            logger.debug("Skipping unreadable file: %s", changed.path)
            return None
        return inspect_lines(changed.path, content.splitlines(), [])


def _read_source(project_path: Path, relative: str) -> str | None:
    path = Path(project_path) / relative
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None
