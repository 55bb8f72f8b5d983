# src/reasoning/prompts.py - v1
"""Prompt templates for semantic version reasoning."""

from __future__ import annotations

import json
from typing import Any

SYSTEM_PROMPT = """You are an expert in semantic versioning and software development.
Analyze the provided change description and project context to determine the appropriate version bump type.

Version bump types:
- MAJOR: Breaking changes, API changes, incompatible changes
- MINOR: New features, backward-compatible functionality
- PATCH: Bug fixes, small improvements, backward-compatible changes

Consider:
1. Type of changes described
2. Impact on existing functionality
3. Backward compatibility
4. User-facing changes
5. API modifications

Respond with a JSON object containing:
- recommendedType: "major", "minor", or "patch"
- confidence: 0.0 to 1.0
- reasoning: Detailed explanation
- factors: Array of key factors considered"""

USER_PROMPT_TEMPLATE = """Change description: "{description}"

Project context: {project_context}

Please analyze this and provide a version bump recommendation."""


def build_user_prompt(description: str, project_context: dict[str, Any]) -> str:
    return USER_PROMPT_TEMPLATE.format(
        description=description.strip() or "(no description, infer from context)",
        project_context=json.dumps(project_context, indent=2, default=str, sort_keys=True),
    )
