"""
Configuration loader for changeloggy.

Projects may keep default options in a JSON file named
``.changeloggy.json`` in the repository root::

    {
        "since": "last-tag",
        "output": "CHANGELOG.md",
        "format": "markdown",
        "includeInternal": false,
        "scopes": ["api", "ui"]
    }

Every key is optional. A missing or malformed file simply supplies no
defaults; keys with a value of the wrong type are ignored one by one.
Options given on the command line always win over the file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. When the CLI configures
# logging, it sets up the root handlers explicitly.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILENAME = ".changeloggy.json"

FORMATS = ("markdown", "json")


@dataclass
class ChangelogOptions:
    """Options controlling a single changelog run."""

    since: Optional[str] = None
    until: Optional[str] = None
    output: Optional[str] = None
    dry_run: bool = False
    format: str = "markdown"
    include_internal: bool = False
    release: Optional[str] = None
    interactive: bool = True
    prepend: bool = False
    auto_version: bool = False
    scope_filter: Optional[List[str]] = None


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


# file key -> (option name, validator)
_CONFIG_KEYS = {
    "since": ("since", lambda v: isinstance(v, str)),
    "output": ("output", lambda v: isinstance(v, str)),
    "format": ("format", lambda v: v in FORMATS),
    "includeInternal": ("include_internal", lambda v: isinstance(v, bool)),
    "scopes": ("scope_filter", _is_str_list),
}


def _get_config_path(repo_root: Optional[Path] = None) -> Path:
    """Return the location of the project configuration file.

    Args:
        repo_root: Repository root. Defaults to the current directory.
    """
    return (repo_root or Path.cwd()) / CONFIG_FILENAME


def load_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load the project defaults from ``.changeloggy.json``.

    Args:
        repo_root: Directory holding the configuration file. Defaults to
                   the current working directory.

    Returns:
        A dictionary keyed by :class:`ChangelogOptions` field name holding
        only the valid values found in the file:
        - since (str)
        - output (str)
        - format (str): ``markdown`` or ``json``
        - include_internal (bool)
        - scope_filter (List[str])

        An empty dictionary is returned when the file is missing,
        unreadable or not a JSON object.
    """
    config_path = _get_config_path(repo_root)

    if not config_path.exists():
        logger.debug("No configuration file at %s", config_path)
        return {}

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Ignoring unreadable configuration file %s: %s", config_path, exc)
        return {}

    if not isinstance(data, dict):
        logger.debug("Ignoring configuration file %s: top level is not an object", config_path)
        return {}

    config: Dict[str, Any] = {}
    for key, (option, is_valid) in _CONFIG_KEYS.items():
        if key not in data:
            continue
        if not is_valid(data[key]):
            logger.debug("Ignoring invalid value for '%s': %r", key, data[key])
            continue
        config[option] = data[key]

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config


def merge_with_config(
    options: Optional[Dict[str, Any]] = None, repo_root: Optional[Path] = None
) -> ChangelogOptions:
    """Build the effective options for a run.

    Precedence, lowest first: the :class:`ChangelogOptions` defaults, the
    configuration file, then ``options``. Entries of ``options`` whose
    value is ``None`` are treated as not given.

    Raises:
        TypeError: If ``options`` holds a key that is not an option name.
    """
    known = {f.name for f in fields(ChangelogOptions)}
    explicit = {k: v for k, v in (options or {}).items() if v is not None}
    unknown = set(explicit) - known
    if unknown:
        raise TypeError(f"Unknown option(s): {', '.join(sorted(unknown))}")

    merged = load_config(repo_root)
    merged.update(explicit)
    return ChangelogOptions(**merged)
