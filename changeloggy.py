#!/usr/bin/env python
"""
Thin wrapper script to invoke the changeloggy CLI.

Running ``python changeloggy.py`` is equivalent to running the
``changeloggy`` console script installed via ``pyproject.toml``.
"""

from changeloggy.cli import main


if __name__ == "__main__":
    main(prog_name="changeloggy")
