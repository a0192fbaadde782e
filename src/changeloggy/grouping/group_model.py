"""
Data models for commit grouping.

The :class:`ParsedCommit` represents a single commit after its subject
has been parsed as a Conventional Commit. Categorized commits are held in
a :data:`CategoryMap`, an insertion-ordered mapping of commit type to the
commits of that type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ParsedCommit:
    """Representation of a parsed commit.

    Attributes
    ----------
    hash : str
        Abbreviated (7 character) commit hash.
    description : str
        The subject with the ``type(scope)!:`` prefix removed, or the
        whole subject when it is not a Conventional Commit.
    body : str
        The commit body, verbatim.
    author : str
        Author name.
    date : str
        Author date, ``YYYY-MM-DD``.
    type : str
        One of the keys of :data:`~changeloggy.grouping.commit_types.COMMIT_TYPES`.
    scope : str, optional
        The scope given in parentheses, if any.
    breaking : str, optional
        Breaking change explanation, or the default marker when the commit
        is flagged with ``!`` only. ``None`` when the commit is not breaking.
    """

    hash: str
    description: str
    body: str
    author: str
    date: str
    type: str
    scope: Optional[str] = None
    breaking: Optional[str] = None

    @property
    def is_breaking(self) -> bool:
        return self.breaking is not None

    def to_summary(self) -> Dict[str, Any]:
        """Return the lightweight record used by the JSON output."""
        return {
            "hash": self.hash,
            "description": self.description,
            "scope": self.scope,
            "author": self.author,
            "date": self.date,
        }


CategoryMap = Dict[str, List[ParsedCommit]]
