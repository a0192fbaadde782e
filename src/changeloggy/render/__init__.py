"""
Changelog rendering (Markdown and JSON) and merging into existing files.
"""

from .formatter import format_json, format_markdown, prepend_to_changelog, render  # noqa: F401
