"""
Semantic version bump inference.

The bump level is inferred from the commits of a release: any breaking
change requires a major bump, any feature a minor bump, and everything
else a patch bump.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from changeloggy.grouping.group_model import ParsedCommit


MAJOR = "major"
MINOR = "minor"
PATCH = "patch"
BUMP_TYPES = (MAJOR, MINOR, PATCH)

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(-.*)?$")


@dataclass(frozen=True)
class VersionBump:
    """A bump level and the reason it was chosen."""

    type: str
    reason: str


def detect_version_bump(commits: Iterable[ParsedCommit]) -> VersionBump:
    """Infer the bump level for ``commits``.

    Pass the commits before internal types are filtered out, otherwise a
    breaking ``chore`` would be missed. The first matching rule wins,
    regardless of commit order.
    """
    has_breaking = has_feat = has_fix = False
    for commit in commits:
        has_breaking = has_breaking or commit.is_breaking
        has_feat = has_feat or commit.type == "feat"
        has_fix = has_fix or commit.type == "fix"

    if has_breaking:
        return VersionBump(MAJOR, "Breaking changes detected")
    if has_feat:
        return VersionBump(MINOR, "New features detected")
    if has_fix:
        return VersionBump(PATCH, "Bug fixes detected")
    return VersionBump(PATCH, "Maintenance changes")


def increment_version(current_version: str, bump_type: str) -> str:
    """Return ``current_version`` bumped by ``bump_type``.

    Parameters
    ----------
    current_version : str
        ``MAJOR.MINOR.PATCH`` with an optional ``-prerelease`` suffix.
    bump_type : str
        One of ``major``, ``minor`` or ``patch``.

    Returns
    -------
    str
        The next version. A prerelease suffix is carried over unchanged.
        A string that is not a version is returned as is.

    Raises
    ------
    ValueError
        If ``bump_type`` is not a known bump level.

    Examples
    --------
    >>> increment_version("1.2.3", "minor")
    '1.3.0'
    >>> increment_version("1.2.3-beta.1", "patch")
    '1.2.4-beta.1'
    >>> increment_version("not-a-version", "patch")
    'not-a-version'
    """
    if bump_type not in BUMP_TYPES:
        raise ValueError(f"Unknown bump type: {bump_type!r}")

    match = VERSION_PATTERN.match(current_version)
    if not match:
        return current_version

    major, minor, patch = (int(part) for part in match.group(1, 2, 3))
    prerelease = match.group(4) or ""

    if bump_type == MAJOR:
        major, minor, patch = major + 1, 0, 0
    elif bump_type == MINOR:
        minor, patch = minor + 1, 0
    else:
        patch += 1

    return f"{major}.{minor}.{patch}{prerelease}"


def suggest_next_version(last_tag: Optional[str], bump: VersionBump) -> Optional[str]:
    """Suggest the release following ``last_tag``.

    A leading ``v`` on the tag is kept on the result. Returns ``None``
    when there is no tag or the tag is not a semantic version.
    """
    if not last_tag:
        return None
    prefix = "v" if last_tag[:1] in ("v", "V") else ""
    current = last_tag[len(prefix):]
    if not VERSION_PATTERN.match(current):
        return None
    return f"{last_tag[:len(prefix)]}{increment_version(current, bump.type)}"
