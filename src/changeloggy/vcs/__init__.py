"""
Version control system (VCS) integration.

This package contains the :class:`GitClient` used to read commit history
and the :class:`CommitSource` protocol the changelog pipeline depends on,
so that tests can substitute a fake history.
"""

from .git_client import CommitSource, GitClient, GitError, RawCommit  # noqa: F401
