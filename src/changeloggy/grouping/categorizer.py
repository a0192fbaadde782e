"""
Grouping of parsed commits into changelog sections.

Commits are first filtered by scope, then bucketed by type. Internal
types (see :data:`~changeloggy.grouping.commit_types.INTERNAL_TYPES`) are
left out unless explicitly requested.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .commit_types import is_internal
from .group_model import CategoryMap, ParsedCommit


def filter_by_scope(
    commits: Iterable[ParsedCommit], scopes: Optional[Iterable[str]] = None
) -> List[ParsedCommit]:
    """Drop commits whose scope is not in ``scopes``.

    Commits without a scope always pass. An empty or missing ``scopes``
    keeps every commit.
    """
    allowed = set(scopes or ())
    if not allowed:
        return list(commits)
    return [c for c in commits if c.scope is None or c.scope in allowed]


def categorize_commits(
    commits: Iterable[ParsedCommit],
    include_internal: bool = False,
    scopes: Optional[Iterable[str]] = None,
) -> CategoryMap:
    """Group commits by type.

    Parameters
    ----------
    commits : Iterable[ParsedCommit]
        Parsed commits, newest first.
    include_internal : bool
        Keep internal types (chore, ci, style, ...).
    scopes : Iterable[str], optional
        Scope allow-list applied before grouping.

    Returns
    -------
    CategoryMap
        A new mapping of type to commits. Within a type the input order
        is preserved; empty types are absent.
    """
    categories: CategoryMap = {}
    for commit in filter_by_scope(commits, scopes):
        if not include_internal and is_internal(commit.type):
            continue
        categories.setdefault(commit.type, []).append(commit)
    return categories


def flatten(categories: CategoryMap) -> List[ParsedCommit]:
    """Return all commits held in ``categories``."""
    return [commit for bucket in categories.values() for commit in bucket]
