"""
Conventional Commit parsing.

See :mod:`changeloggy.parsing.commit_parser` for the subject pattern and
the breaking-change detectors.
"""

from .commit_parser import (  # noqa: F401
    DEFAULT_BREAKING_MARKER,
    extract_breaking_footer,
    has_breaking_marker,
    parse_commit,
    parse_subject,
)
