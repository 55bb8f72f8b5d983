# src/analyzers/commit_analyzer.py - v1
"""Commit-message analyzer.

Parses conventional commit headers (type(scope)!: description) and scans
the free text of every commit for feature and fix keywords. Aggregation
precedence: any breaking -> major, any feature -> minor, any fix -> patch,
else a majority vote over the conventional categories, else patch.
"""

from __future__ import annotations

import logging
import re
from collections import Counter

from versionfusion.analyzers.base_analyzer import BaseAnalyzer
from versionfusion.analyzers.keywords import (
    BREAKING_PATTERN,
    COMMIT_TYPES,
    CONVENTIONAL_HEADER,
    FEATURE_PATTERN,
    FIX_PATTERN,
)
from versionfusion.core.models import (
    AnalysisContext,
    AnalyzerId,
    ChangeEvidence,
    CommitAnalysisResult,
    CommitBreakdown,
)
from versionfusion.semver.models import BumpType

logger = logging.getLogger(__name__)

_BASE_CONFIDENCE = 0.3
_SIGNAL_BONUS = {"breaking": 0.3, "feature": 0.2, "fix": 0.15}


def _free_text(message: str, header_match: re.Match[str] | None) -> str:
    """Message text with the conventional type(scope)! prefix removed."""
    if header_match is None:
        return message
    body = message.strip().partition("\n")[2]
    return f"{header_match.group('description')}\n{body}"


def classify_commit(message: str) -> CommitBreakdown:
    """Classify one commit message (header on the first line).

    Feature and fix keywords are scanned on every commit, so a conventional
    `chore: add support for X` still counts as a feature.
    """
    header = message.strip().splitlines()[0].strip() if message.strip() else ""
    is_breaking = bool(BREAKING_PATTERN.search(message))

    match = CONVENTIONAL_HEADER.match(header)
    if match is not None and match.group("type").lower() not in COMMIT_TYPES:
        match = None
    text = _free_text(message, match)
    is_feature = bool(FEATURE_PATTERN.search(text))
    is_fix = bool(FIX_PATTERN.search(text))

    if match is not None:
        commit_type = match.group("type").lower()
        type_bump, weight = COMMIT_TYPES[commit_type]
        is_breaking = is_breaking or bool(match.group("bang"))
        is_feature = is_feature or commit_type == "feat"
        is_fix = is_fix or commit_type == "fix"
        if is_breaking:
            bump_type = BumpType.MAJOR
        elif is_feature:
            bump_type = max(type_bump, BumpType.MINOR)
        else:
            bump_type = type_bump
        return CommitBreakdown(
            header=header,
            commit_type=commit_type,
            scope=match.group("scope") or None,
            is_conventional=True,
            is_breaking=is_breaking,
            is_feature=is_feature,
            is_fix=is_fix,
            bump_type=bump_type,
            weight=weight,
        )

    if is_breaking:
        free_bump: BumpType | None = BumpType.MAJOR
    elif is_feature:
        free_bump = BumpType.MINOR
    elif is_fix:
        free_bump = BumpType.PATCH
    else:
        free_bump = None
    return CommitBreakdown(
        header=header,
        is_breaking=is_breaking,
        is_feature=is_feature,
        is_fix=is_fix,
        bump_type=free_bump,
    )


def majority_vote(commits: list[CommitBreakdown]) -> BumpType | None:
    """Most frequent bump among conventional commits; ties go to the larger bump."""
    votes = Counter(c.bump_type for c in commits if c.is_conventional and c.bump_type)
    if not votes:
        return None
    return max(votes, key=lambda b: (votes[b], b.ordinal))


class CommitMessageAnalyzer(BaseAnalyzer):
    """Recommends a bump from the commit messages of a release."""

    @property
    def source(self) -> AnalyzerId:
        return AnalyzerId.COMMIT

    @property
    def fallback_factor(self) -> str:
        return "commit-analysis-fallback"

    async def _analyze(
        self, evidence: ChangeEvidence, context: AnalysisContext
    ) -> CommitAnalysisResult:
        messages = [m for m in evidence.commit_messages if m.strip()]
        if not messages:
            return self.missing_input_result("commit-messages")  # type: ignore[return-value]

        commits = [classify_commit(m) for m in messages]
        factors = {"commit-analysis"}
        conventional = sum(1 for c in commits if c.is_conventional)
        if conventional:
            factors.add("conventional-commits")

        has_breaking = any(c.is_breaking for c in commits)
        has_feature = any(c.is_feature for c in commits)
        has_fix = any(c.is_fix for c in commits)
        if has_breaking:
            factors.add("breaking-change")
        if has_feature:
            factors.add("new-feature")
        if has_fix:
            factors.add("bug-fix")

        signal_bonus = 0.0
        if has_breaking:
            recommended = BumpType.MAJOR
            signal_bonus = _SIGNAL_BONUS["breaking"]
        elif has_feature:
            recommended = BumpType.MINOR
            signal_bonus = _SIGNAL_BONUS["feature"]
        elif has_fix:
            recommended = BumpType.PATCH
            signal_bonus = _SIGNAL_BONUS["fix"]
        else:
            voted = majority_vote(commits)
            if voted is not None:
                factors.add("majority-vote")
            recommended = voted or BumpType.PATCH

        confidence = (
            _BASE_CONFIDENCE
            + signal_bonus
            + min(0.05 * len(commits), 0.2)
            + 0.2 * (conventional / len(commits))
        )

        logger.debug(
            "Commit analysis: %d commits (%d conventional) -> %s",
            len(commits), conventional, recommended.value,
        )
        return CommitAnalysisResult(
            recommended_type=recommended,
            confidence=min(confidence, 1.0),
            reasoning=f"{len(commits)} commits analyzed.",
            factors=frozenset(factors),
            source=self.source,
            commits=commits,
        )
