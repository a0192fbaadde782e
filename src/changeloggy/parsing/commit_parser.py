"""
Parsing of Conventional Commit subjects and breaking-change footers.

A subject of the form ``type(scope)!: description`` is split into its
parts. Anything that does not follow the convention is kept as a commit
of type ``other`` whose description is the full subject, so parsing
never fails.

Breaking changes are detected from two independent sources: the ``!``
marker before the colon and a ``BREAKING CHANGE:`` (or
``BREAKING-CHANGE:``) footer in the body. The footer text, when present,
is the explanation shown in the changelog.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from changeloggy.grouping.commit_types import is_known_type
from changeloggy.grouping.group_model import ParsedCommit
from changeloggy.vcs.git_client import RawCommit


COMMIT_PATTERN = re.compile(
    r"^(?P<type>\w+)(?:\((?P<scope>[^)]+)\))?(?P<bang>!)?:\s+(?P<description>\S.*)$"
)

# The keyword is case-sensitive; the explanation runs to the end of the line.
BREAKING_FOOTER_PATTERN = re.compile(r"BREAKING[ -]CHANGE:[ \t]*(?P<detail>[^\r\n]*)")

DEFAULT_BREAKING_MARKER = "Breaking change"

HASH_LENGTH = 7


class ConventionalSubject(NamedTuple):
    type: str
    scope: Optional[str]
    description: str
    marked_breaking: bool


def parse_subject(subject: str) -> ConventionalSubject:
    """Split a commit subject into type, scope and description.

    Parameters
    ----------
    subject : str
        The first line of the commit message.

    Returns
    -------
    ConventionalSubject
        ``type`` is always a known commit type. Unknown types become
        ``other`` but keep their scope and description; subjects that do
        not match the pattern at all become ``other`` with the whole
        subject as description.

    Examples
    --------
    >>> parse_subject("feat(api)!: drop v1")
    ConventionalSubject(type='feat', scope='api', description='drop v1', marked_breaking=True)
    >>> parse_subject("Update README").type
    'other'
    """
    match = COMMIT_PATTERN.match(subject)
    if not match:
        return ConventionalSubject("other", None, subject, False)

    commit_type = match.group("type")
    if not is_known_type(commit_type):
        commit_type = "other"
    return ConventionalSubject(
        type=commit_type,
        scope=match.group("scope"),
        description=match.group("description").strip(),
        marked_breaking=match.group("bang") is not None,
    )


def has_breaking_marker(subject: str) -> bool:
    """Return True if the subject carries the ``!`` breaking marker."""
    match = COMMIT_PATTERN.match(subject)
    return bool(match and match.group("bang"))


def extract_breaking_footer(body: str) -> Optional[str]:
    """Return the explanation of a breaking-change footer in ``body``.

    Returns ``None`` when the body has no such footer. A footer with an
    empty explanation yields an empty string.
    """
    match = BREAKING_FOOTER_PATTERN.search(body or "")
    if not match:
        return None
    return match.group("detail").strip()


def is_breaking_footer_line(line: str) -> bool:
    """Return True if ``line`` is a breaking-change footer."""
    return BREAKING_FOOTER_PATTERN.match(line.strip()) is not None


def resolve_breaking(marked: bool, footer: Optional[str]) -> Optional[str]:
    """Combine the two breaking-change detectors into one detail string.

    The footer text wins over the marker; the marker alone (or an empty
    footer) yields :data:`DEFAULT_BREAKING_MARKER`.
    """
    if footer:
        return footer
    if marked or footer is not None:
        return DEFAULT_BREAKING_MARKER
    return None


def parse_commit(raw: RawCommit) -> ParsedCommit:
    """Turn a raw ``git log`` record into a :class:`ParsedCommit`."""
    subject = parse_subject(raw.subject)
    breaking = resolve_breaking(
        has_breaking_marker(raw.subject), extract_breaking_footer(raw.body)
    )
    return ParsedCommit(
        hash=raw.hash[:HASH_LENGTH],
        description=subject.description,
        body=raw.body,
        author=raw.author,
        date=raw.date,
        type=subject.type,
        scope=subject.scope,
        breaking=breaking,
    )
