"""Summary counts over a set of commits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from changeloggy.grouping.commit_types import is_internal
from changeloggy.grouping.group_model import ParsedCommit


@dataclass(frozen=True)
class ChangelogStats:
    total: int
    breaking: int
    feat: int
    fix: int
    internal: int
    other: int


def generate_stats(commits: Sequence[ParsedCommit]) -> ChangelogStats:
    """Count commits by category.

    ``feat``, ``fix``, ``internal`` and ``other`` partition the set, so
    they always add up to ``total``. ``breaking`` overlaps all of them.
    """
    feat = sum(1 for c in commits if c.type == "feat")
    fix = sum(1 for c in commits if c.type == "fix")
    internal = sum(1 for c in commits if is_internal(c.type))
    return ChangelogStats(
        total=len(commits),
        breaking=sum(1 for c in commits if c.is_breaking),
        feat=feat,
        fix=fix,
        internal=internal,
        other=len(commits) - feat - fix - internal,
    )


def format_stats(stats: ChangelogStats, include_internal: bool) -> str:
    """Render ``stats`` as a short comma separated summary."""
    parts = [f"{stats.total} commits"]
    if stats.breaking:
        parts.append(f"{stats.breaking} breaking")
    if stats.feat:
        parts.append(f"{stats.feat} feat")
    if stats.fix:
        parts.append(f"{stats.fix} fix")
    if stats.internal:
        suffix = "" if include_internal else " (filtered)"
        parts.append(f"{stats.internal} internal{suffix}")
    return ", ".join(parts)
