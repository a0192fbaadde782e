"""
The changelog pipeline.

Commits flow one way: the commit source returns raw records, the parser
turns them into :class:`ParsedCommit` objects, the categorizer groups
them, and the renderer produces the final document. Version bump and
statistics are computed alongside from the scope-filtered commits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from changeloggy.config.loader import ChangelogOptions
from changeloggy.grouping.categorizer import categorize_commits, filter_by_scope
from changeloggy.grouping.group_model import CategoryMap, ParsedCommit
from changeloggy.parsing.commit_parser import parse_commit
from changeloggy.render.formatter import prepend_to_changelog, render
from changeloggy.vcs.git_client import CommitSource
from changeloggy.versioning.bump import VersionBump, detect_version_bump, suggest_next_version
from changeloggy.versioning.stats import ChangelogStats, generate_stats


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class ChangelogResult:
    """Everything produced by one run of the pipeline.

    Attributes
    ----------
    content : str
        The rendered document.
    commits : List[ParsedCommit]
        Commits after the scope filter, before internal types are dropped.
    categories : CategoryMap
        The commits that made it into the document, by type.
    stats : ChangelogStats
        Counts over ``commits``.
    bump : VersionBump
        Suggested bump level for ``commits``.
    release : str, optional
        Version used as the release heading, if any.
    """

    content: str
    commits: List[ParsedCommit]
    categories: CategoryMap
    stats: ChangelogStats
    bump: VersionBump
    release: Optional[str] = None


def collect_commits(source: CommitSource, options: ChangelogOptions) -> List[ParsedCommit]:
    """Fetch the commits in the requested range and parse them."""
    raw_commits = source.get_commits(since=options.since, until=options.until, no_merges=True)
    return [parse_commit(raw) for raw in raw_commits]


def resolve_release(
    source: CommitSource, options: ChangelogOptions, bump: VersionBump
) -> Optional[str]:
    """Return the release heading for the run.

    An explicit release wins. With ``auto_version`` the next version is
    derived from the latest tag; otherwise the release stays unset and
    the document is headed "Unreleased".
    """
    if options.release:
        return options.release
    if not options.auto_version:
        return None
    last_tag = source.get_last_tag()
    suggestion = suggest_next_version(last_tag, bump)
    if suggestion is None:
        logger.warning("Cannot derive the next version from tag %r", last_tag)
    else:
        logger.info("Next version %s (%s)", suggestion, bump.reason)
    return suggestion


def generate_changelog(
    options: ChangelogOptions, source: CommitSource
) -> Optional[ChangelogResult]:
    """Run the pipeline.

    Returns
    -------
    ChangelogResult or None
        ``None`` when the range holds no commits.

    Raises
    ------
    GitError
        If the commit history cannot be read.
    ValueError
        If ``options.format`` is not a supported format.
    """
    parsed = collect_commits(source, options)
    if not parsed:
        return None

    commits = filter_by_scope(parsed, options.scope_filter)
    categories = categorize_commits(commits, include_internal=options.include_internal)
    stats = generate_stats(commits)
    bump = detect_version_bump(commits)
    release = resolve_release(source, options, bump)

    # Breaking changes are listed even when their type is internal
    breaking = [c for c in commits if c.is_breaking]
    content = render(
        categories,
        options.format,
        version=release,
        since=options.since,
        breaking_changes=breaking,
    )
    logger.debug("Rendered %d commit(s) as %s", stats.total, options.format)
    return ChangelogResult(
        content=content,
        commits=commits,
        categories=categories,
        stats=stats,
        bump=bump,
        release=release,
    )


def write_changelog(content: str, output: Union[str, Path], prepend: bool = False) -> bool:
    """Write ``content`` to ``output``.

    With ``prepend`` and an existing file, the content is merged below
    the file's ``# Changelog`` heading instead of replacing it.

    Returns
    -------
    bool
        True if the content was merged into an existing file.

    Raises
    ------
    OSError
        If the file cannot be written.
    """
    path = Path(output)
    merged = prepend and path.exists()
    if merged:
        content = prepend_to_changelog(content, path)
    path.write_text(content, encoding="utf-8")
    logger.debug("Wrote changelog to %s (merged=%s)", path, merged)
    return merged
