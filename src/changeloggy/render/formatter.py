"""
Rendering of categorized commits.

Two encodings are supported: a Markdown document (``markdown``) and a
JSON object keyed by commit type (``json``). A rendered Markdown
document can also be merged into an existing changelog file below its
``# Changelog`` heading.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Union

from changeloggy.grouping.categorizer import flatten
from changeloggy.grouping.commit_types import RENDER_ORDER, type_label
from changeloggy.grouping.group_model import CategoryMap, ParsedCommit
from changeloggy.parsing.commit_parser import DEFAULT_BREAKING_MARKER, is_breaking_footer_line


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


FORMATS = ("markdown", "json")

CHANGELOG_HEADER = "# Changelog"
_NEW_HEADER_PATTERN = re.compile(r"^# Changelog\n\n")
_EXISTING_HEADER_PATTERN = re.compile(r"^# Changelog[ \t]*(?:\n+|\Z)")


def _scope_prefix(commit: ParsedCommit) -> str:
    return f"**{commit.scope}**: " if commit.scope else ""


def first_body_line(body: str) -> Optional[str]:
    """Return the first non-blank body line that is not a breaking footer."""
    for line in body.splitlines():
        if line.strip() and not is_breaking_footer_line(line):
            return line.strip()
    return None


def format_markdown(
    categories: CategoryMap,
    version: Optional[str] = None,
    since: Optional[str] = None,
    breaking_changes: Optional[Iterable[ParsedCommit]] = None,
    today: Optional[date] = None,
) -> str:
    """Render ``categories`` as a Markdown changelog.

    Parameters
    ----------
    categories : CategoryMap
        Commits grouped by type.
    version : str, optional
        Release heading. Defaults to ``Unreleased (YYYY-MM-DD)``.
    since : str, optional
        Start of the range, mentioned below the release heading.
    breaking_changes : Iterable[ParsedCommit], optional
        Commits listed under "Breaking Changes". When omitted, the
        breaking commits found in ``categories`` are used.
    today : date, optional
        Date used for the unreleased heading.

    Returns
    -------
    str
        The document. Sections follow :data:`RENDER_ORDER`; types not in
        that order and empty types produce no section.
    """
    if breaking_changes is None:
        breaking: List[ParsedCommit] = [c for c in flatten(categories) if c.is_breaking]
    else:
        breaking = list(breaking_changes)
    version_str = version or f"Unreleased ({(today or date.today()).isoformat()})"

    lines: List[str] = [CHANGELOG_HEADER, "", f"## {version_str}", ""]

    if since:
        lines += [f"*Changes since {since}*", ""]

    if breaking:
        lines += ["### ⚠️ Breaking Changes", ""]
        for commit in breaking:
            lines.append(f"- {_scope_prefix(commit)}{commit.description}")
            if commit.breaking and commit.breaking != DEFAULT_BREAKING_MARKER:
                lines.append(f"  - {commit.breaking}")
        lines.append("")

    for commit_type in RENDER_ORDER:
        commits = categories.get(commit_type)
        if not commits:
            continue
        lines += [f"### {type_label(commit_type)}", ""]
        for commit in commits:
            lines.append(f"- {_scope_prefix(commit)}{commit.description}")
            detail = first_body_line(commit.body) if commit.body else None
            if detail:
                lines.append(f"  - {detail}")
        lines.append("")

    return "\n".join(lines) + "\n"


def format_json(categories: CategoryMap) -> str:
    """Render ``categories`` as JSON, one list of summaries per type."""
    result = {
        commit_type: [commit.to_summary() for commit in commits]
        for commit_type, commits in categories.items()
        if commits
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


def render(
    categories: CategoryMap,
    fmt: str = "markdown",
    version: Optional[str] = None,
    since: Optional[str] = None,
    breaking_changes: Optional[Iterable[ParsedCommit]] = None,
) -> str:
    """Render ``categories`` in the requested output format.

    Raises
    ------
    ValueError
        If ``fmt`` is not one of :data:`FORMATS`.
    """
    if fmt == "json":
        return format_json(categories)
    if fmt == "markdown":
        return format_markdown(categories, version, since, breaking_changes)
    raise ValueError(f"Unsupported output format: {fmt!r} (expected one of {', '.join(FORMATS)})")


def prepend_to_changelog(new_content: str, file_path: Union[str, Path]) -> str:
    """Merge ``new_content`` into the changelog at ``file_path``.

    The new release section is placed right below the existing
    ``# Changelog`` heading (and the blank lines after it). An existing
    file without that heading gets the complete new document in front of
    its content. If the file cannot be read, ``new_content`` is returned
    unchanged so the caller simply writes a new file.
    """
    try:
        existing = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s, writing a new changelog: %s", file_path, exc)
        return new_content

    body = _NEW_HEADER_PATTERN.sub("", new_content, count=1)

    header = _EXISTING_HEADER_PATTERN.match(existing)
    if header:
        end = header.end()
        head = existing[:end]
        if not head.endswith("\n\n"):
            # one blank line between the heading and the new release
            head = head.rstrip("\n") + "\n\n"
        return head + body + existing[end:]

    return new_content + "\n" + existing
