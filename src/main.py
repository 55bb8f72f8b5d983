# src/main.py - v1
"""CLI entry point: analyze, bump, compare, sort, satisfies commands.

Usage:
    versionfusion analyze --current-version 1.2.3 -m "feat: add export" [options]
    versionfusion bump 1.2.3 minor [--prerelease-tag rc.1]
    versionfusion compare 1.2.3 1.10.0
    versionfusion sort 1.0.0 0.9.0 1.0.0-rc.1 [--desc]
    versionfusion satisfies 1.4.2 "^1.2.0"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import re
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from versionfusion.version import __version__

if TYPE_CHECKING:
    from versionfusion.core.models import ChangedFile

logger = logging.getLogger(__name__)

_DIFF_HEADER = re.compile(r"^diff --git a/(?P<old>\S+) b/(?P<new>\S+)$", re.MULTILINE)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from versionfusion.config.settings import ConfigurationError
    from versionfusion.semver.models import VersionAlgebraError

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (VersionAlgebraError, ConfigurationError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="versionfusion",
        description=f"versionfusion v{__version__}: semantic version bump detection",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- analyze ---
    p_analyze = subparsers.add_parser(
        "analyze", help="Recommend the next version from change evidence",
    )
    p_analyze.add_argument(
        "-c", "--current-version", required=True,
        help="Current project version (semver)",
    )
    p_analyze.add_argument(
        "-m", "--commit", dest="commits", action="append", default=[],
        help="Commit message (repeatable)",
    )
    p_analyze.add_argument(
        "--commits-file", type=Path, default=None,
        help="File with one commit header per line",
    )
    p_analyze.add_argument(
        "-f", "--file", dest="files", action="append", default=[],
        help="Changed file path, read under --project-path (repeatable)",
    )
    p_analyze.add_argument(
        "--diff", type=Path, default=None,
        help="Unified diff (git diff output) of the change",
    )
    p_analyze.add_argument(
        "-d", "--description", default="",
        help="Free-text description of the change",
    )
    p_analyze.add_argument("--task-type", default=None, help="Task type (feature, bug, ...)")
    p_analyze.add_argument("--project-id", default="default", help="Project identifier")
    p_analyze.add_argument(
        "--project-path", type=Path, default=None,
        help="Project root for reading changed files",
    )
    p_analyze.add_argument(
        "--prerelease-tag", default=None,
        help="Append a prerelease tag to the new version (e.g. rc.1)",
    )
    p_analyze.add_argument("--no-ai", action="store_true", help="Disable the AI analyzer")
    p_analyze.add_argument("--no-cache", action="store_true", help="Disable result caching")
    p_analyze.add_argument("--json", action="store_true", help="Print JSON output")
    p_analyze.set_defaults(func=_cmd_analyze)

    # --- bump ---
    p_bump = subparsers.add_parser("bump", help="Bump a version")
    p_bump.add_argument("current", help="Version to bump")
    p_bump.add_argument("bump_type", help="patch, minor or major")
    p_bump.add_argument("--prerelease-tag", default=None, help="Prerelease tag to append")
    p_bump.set_defaults(func=_cmd_bump)

    # --- compare ---
    p_compare = subparsers.add_parser("compare", help="Compare two versions (-1, 0, 1)")
    p_compare.add_argument("left")
    p_compare.add_argument("right")
    p_compare.set_defaults(func=_cmd_compare)

    # --- sort ---
    p_sort = subparsers.add_parser("sort", help="Sort versions by precedence")
    p_sort.add_argument("versions", nargs="+")
    p_sort.add_argument("--desc", action="store_true", help="Highest version first")
    p_sort.set_defaults(func=_cmd_sort)

    # --- satisfies ---
    p_satisfies = subparsers.add_parser(
        "satisfies", help="Check a version against a range expression",
    )
    p_satisfies.add_argument("version_text")
    p_satisfies.add_argument("range_expr")
    p_satisfies.set_defaults(func=_cmd_satisfies)

    return parser


async def _cmd_analyze(args: argparse.Namespace) -> int:
    """Fuse the given evidence and print the recommended next version."""
    from versionfusion.config.settings import load_settings
    from versionfusion.core.models import AnalysisContext, ChangedFile, ChangeEvidence
    from versionfusion.fusion.engine_factory import create_fusion_engine
    from versionfusion.orchestrator.version_orchestrator import VersionOrchestrator
    from versionfusion.semver.algebra import parse

    # Validate before doing any work.
    current = parse(args.current_version)

    overrides: dict[str, object] = {}
    if args.no_ai:
        overrides["ai_enabled"] = False
    if args.no_cache:
        overrides["cache_enabled"] = False
    settings = load_settings(**overrides)

    commits = list(args.commits)
    if args.commits_file is not None:
        commits.extend(
            line.strip()
            for line in args.commits_file.read_text(encoding="utf-8").splitlines()
            if line.strip()
        )

    changed = [ChangedFile(path=p) for p in args.files]
    if args.diff is not None:
        changed.extend(split_unified_diff(args.diff.read_text(encoding="utf-8")))

    evidence = ChangeEvidence(
        commit_messages=commits,
        changed_files=changed,
        description=args.description,
    )
    context = AnalysisContext(
        project_id=args.project_id,
        project_path=args.project_path,
        task_type=args.task_type,
    )

    orchestrator = VersionOrchestrator(create_fusion_engine(settings))
    decision = await orchestrator.determine_next_version(
        current, evidence, context, dry_run=True, prerelease_tag=args.prerelease_tag,
    )
    fused = decision.fusion_result

    if args.json:
        print(json.dumps(
            {
                "current_version": str(decision.current_version),
                "new_version": str(decision.new_version),
                "bump_type": decision.bump_type.value,
                "confidence": round(fused.confidence, 4),
                "reasoning": fused.reasoning,
                "factors": sorted(fused.factors),
                "winning_source": fused.winning_source.value,
                "scores": {s.value: round(v, 4) for s, v in fused.scores.items()},
            },
            indent=2,
        ))
    else:
        print(f"{decision.current_version} -> {decision.new_version} ({decision.bump_type.value})")
        print(f"  Confidence: {fused.confidence:.2f}")
        print(f"  Source:     {fused.winning_source.value}")
        print(f"  Reasoning:  {fused.reasoning}")
        print(f"  Factors:    {', '.join(sorted(fused.factors))}")
    return 0


async def _cmd_bump(args: argparse.Namespace) -> int:
    from versionfusion.semver.algebra import bump

    print(bump(args.current, args.bump_type, prerelease_tag=args.prerelease_tag))
    return 0


async def _cmd_compare(args: argparse.Namespace) -> int:
    from versionfusion.semver.algebra import compare

    print(compare(args.left, args.right))
    return 0


async def _cmd_sort(args: argparse.Namespace) -> int:
    from versionfusion.semver.algebra import sort_versions

    for version in sort_versions(args.versions, ascending=not args.desc):
        print(version)
    return 0


async def _cmd_satisfies(args: argparse.Namespace) -> int:
    from versionfusion.semver.ranges import satisfies_range

    print("true" if satisfies_range(args.version_text, args.range_expr) else "false")
    return 0


def split_unified_diff(text: str) -> list[ChangedFile]:
    """Split `git diff` output into one ChangedFile per file section."""
    from versionfusion.core.models import ChangedFile

    headers = list(_DIFF_HEADER.finditer(text))
    files: list[ChangedFile] = []
    for i, header in enumerate(headers):
        end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
        files.append(ChangedFile(path=header.group("new"), diff=text[header.end():end]))
    return files


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from versionfusion.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING", log_format="text")
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
