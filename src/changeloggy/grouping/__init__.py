"""
Grouping logic for parsed commits.

This package holds the commit type table, the :class:`ParsedCommit`
model and the categorizer that buckets commits by type. See
:mod:`changeloggy.grouping.categorizer` and
:mod:`changeloggy.grouping.group_model` for details.
"""

from .categorizer import categorize_commits, filter_by_scope  # noqa: F401
from .commit_types import COMMIT_TYPES, INTERNAL_TYPES, RENDER_ORDER  # noqa: F401
from .group_model import CategoryMap, ParsedCommit  # noqa: F401
