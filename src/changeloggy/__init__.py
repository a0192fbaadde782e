"""
Top-level package for changeloggy.

changeloggy builds a changelog from a repository's Conventional Commit
history. The command line entry point lives in :mod:`changeloggy.cli`;
the pipeline can also be driven directly through
:func:`changeloggy.core.generate_changelog`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
