"""
The closed set of Conventional Commit types known to changeloggy.

Each type carries a display label (used as a section heading), an emoji
and a short description. Types outside this table are parsed as
``other``.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple


COMMIT_TYPES: Dict[str, Dict[str, str]] = {
    "feat": {"label": "✨ New Features", "emoji": "✨", "description": "New features"},
    "fix": {"label": "🐛 Bug Fixes", "emoji": "🐛", "description": "Bug fixes"},
    "refactor": {"label": "♻️ Refactoring", "emoji": "♻️", "description": "Code refactoring"},
    "perf": {"label": "⚡ Performance", "emoji": "⚡", "description": "Performance improvements"},
    "security": {"label": "🔒 Security", "emoji": "🔒", "description": "Security fixes"},
    "deps": {"label": "📦 Dependencies", "emoji": "📦", "description": "Dependency updates"},
    "docs": {"label": "📚 Documentation", "emoji": "📚", "description": "Documentation changes"},
    "config": {"label": "⚙️ Configuration", "emoji": "⚙️", "description": "Configuration changes"},
    "style": {"label": "💄 Styling", "emoji": "💄", "description": "Code style changes"},
    "test": {"label": "✅ Tests", "emoji": "✅", "description": "Test changes"},
    "chore": {"label": "🔧 Chores", "emoji": "🔧", "description": "Build/tooling changes"},
    "build": {"label": "🏗️ Build", "emoji": "🏗️", "description": "Build system changes"},
    "ci": {"label": "🔄 CI/CD", "emoji": "🔄", "description": "CI/CD changes"},
    "revert": {"label": "⏪ Reverts", "emoji": "⏪", "description": "Reverted changes"},
    "other": {"label": "📝 Other", "emoji": "📝", "description": "Other changes"},
}

# Non user-facing types, left out of the changelog unless requested
INTERNAL_TYPES: FrozenSet[str] = frozenset(
    {"chore", "ci", "style", "test", "build", "deps", "config"}
)

# Section order of the rendered document. security, deps and config are
# never rendered as sections.
RENDER_ORDER: Tuple[str, ...] = (
    "feat",
    "fix",
    "perf",
    "refactor",
    "docs",
    "test",
    "build",
    "ci",
    "chore",
    "style",
    "revert",
    "other",
)

# Types counted in the interactive summary box.
PREVIEW_ORDER: Tuple[str, ...] = ("feat", "fix", "perf", "refactor", "docs", "revert", "other")


def is_known_type(commit_type: str) -> bool:
    """Return True if ``commit_type`` is one of :data:`COMMIT_TYPES`."""
    return commit_type in COMMIT_TYPES


def is_internal(commit_type: str) -> bool:
    """Return True if ``commit_type`` is considered internal."""
    return commit_type in INTERNAL_TYPES


def type_label(commit_type: str) -> str:
    """Return the section heading for ``commit_type``."""
    return COMMIT_TYPES[commit_type]["label"]
