"""
Version bump inference and changelog statistics.
"""

from .bump import VersionBump, detect_version_bump, increment_version, suggest_next_version  # noqa: F401
from .stats import ChangelogStats, format_stats, generate_stats  # noqa: F401
