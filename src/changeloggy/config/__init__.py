"""
Configuration loading for changeloggy.

Provides the :class:`ChangelogOptions` container and a loader for the
optional ``.changeloggy.json`` file in the repository root. See
:mod:`changeloggy.config.loader` for implementation details.
"""

from .loader import ChangelogOptions, load_config, merge_with_config  # noqa: F401
